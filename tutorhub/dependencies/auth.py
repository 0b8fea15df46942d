from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from sqlmodel import Session, select

from tutorhub.database import get_session
from tutorhub.errors import Forbidden
from tutorhub.models.tutor import Tutor
from tutorhub.models.user import User
from tutorhub.utils.token import get_current_user


@dataclass
class AuthSession:
    """The authenticated caller of one request."""

    user: User
    tutor: Optional[Tutor] = None

    @property
    def user_id(self) -> int:
        return self.user.id

    @property
    def tutor_id(self) -> Optional[int]:
        return self.tutor.id if self.tutor else None

    def ensure_is(self, claimed_user_id: int, what: str = "user"):
        """Reject bodies that act on behalf of somebody else."""
        if claimed_user_id != self.user.id:
            raise Forbidden(f"You can only act as yourself ({what} mismatch)")


def get_auth_session(
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
) -> AuthSession:
    tutor = session.exec(
        select(Tutor).where(Tutor.user_id == current_user.id)
    ).first()
    return AuthSession(user=current_user, tutor=tutor)


def require_tutor(auth: AuthSession = Depends(get_auth_session)) -> AuthSession:
    if auth.user.role != "tutor":
        raise Forbidden("Tutor access required")
    return auth
