from fastapi import APIRouter, Depends
from sqlmodel import Session
from tutorhub.database import get_session
from tutorhub.dependencies.auth import AuthSession, get_auth_session
from tutorhub.schemas.auth_schemas import PasswordChange, UserRead, UserUpdate
from tutorhub.services import user_service

router = APIRouter()


def _user_read(auth: AuthSession) -> UserRead:
    return UserRead.model_validate(auth.user).model_copy(update={"tutor_id": auth.tutor_id})


@router.get("/me")
def get_me(auth: AuthSession = Depends(get_auth_session)):
    return {"success": True, "data": _user_read(auth)}


@router.patch("/{user_id}")
def update_user_profile(
    user_id: int,
    data: UserUpdate,
    session: Session = Depends(get_session),
    auth: AuthSession = Depends(get_auth_session),
):
    user_service.update_profile(session, auth, user_id, data)
    return {
        "success": True,
        "message": "Profile updated successfully",
        "data": _user_read(auth),
    }


@router.patch("/{user_id}/password")
def change_user_password(
    user_id: int,
    data: PasswordChange,
    session: Session = Depends(get_session),
    auth: AuthSession = Depends(get_auth_session),
):
    user_service.change_password(session, auth, user_id, data)
    return {"success": True, "message": "Password updated successfully"}
