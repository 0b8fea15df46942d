import logging

from sqlmodel import Session, select

from tutorhub.dependencies.auth import AuthSession
from tutorhub.errors import Conflict, Forbidden, ValidationFailed
from tutorhub.models.user import User
from tutorhub.schemas.auth_schemas import PasswordChange, UserUpdate
from tutorhub.utils.hash import hash_password, verify_password

logger = logging.getLogger(__name__)


def _own_account(auth: AuthSession, user_id: int, what: str) -> User:
    if user_id != auth.user_id:
        raise Forbidden(f"You can only update your own {what}")
    return auth.user


def update_profile(session: Session, auth: AuthSession, user_id: int, data: UserUpdate) -> User:
    user = _own_account(auth, user_id, "profile")
    changes = data.model_dump(exclude_unset=True)

    # name and email are required columns; an explicit null leaves them as they are
    for field in ("name", "email"):
        if field in changes and changes[field] is None:
            changes.pop(field)

    email = changes.get("email")
    if email and email != user.email:
        taken = session.exec(
            select(User).where(User.email == email).where(User.id != user.id)
        ).first()
        if taken:
            raise Conflict("Email is already taken")

    for field, value in changes.items():
        setattr(user, field, value)

    session.add(user)
    session.commit()
    session.refresh(user)

    logger.info(f"User {user.id} updated profile: {sorted(changes)}")
    return user


def change_password(session: Session, auth: AuthSession, user_id: int, data: PasswordChange):
    user = _own_account(auth, user_id, "password")

    if not verify_password(data.current_password, user.password):
        logger.warning(f"User {user.id} failed a password change: wrong current password")
        raise ValidationFailed("Current password is incorrect")

    user.password = hash_password(data.new_password)
    session.add(user)
    session.commit()

    logger.info(f"User {user.id} changed password")
