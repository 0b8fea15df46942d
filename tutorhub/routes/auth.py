from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session, select
from tutorhub.database import get_session
from tutorhub.errors import Conflict
from tutorhub.models.user import User
from tutorhub.models.tutor import Tutor
from tutorhub.schemas.auth_schemas import UserRegister, UserLogin, UserRead, Token
from tutorhub.utils.hash import hash_password, verify_password
from tutorhub.utils.token import create_access_token


router = APIRouter()


def user_read(session: Session, user: User) -> UserRead:
    tutor = session.exec(select(Tutor).where(Tutor.user_id == user.id)).first()
    return UserRead.model_validate(user).model_copy(
        update={"tutor_id": tutor.id if tutor else None}
    )


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register_user(payload: UserRegister, session: Session = Depends(get_session)):
    existing_user = session.exec(select(User).where(User.email == payload.email)).first()
    if existing_user:
        raise Conflict("User with this email already exists")

    user = User(
        name=payload.name,
        email=payload.email,
        password=hash_password(payload.password),
        role=payload.role,
        profile_image_url=payload.profile_image_url,
    )
    session.add(user)
    session.flush()

    if payload.role == "tutor":
        session.add(Tutor(user_id=user.id, bio=payload.bio))

    session.commit()
    session.refresh(user)

    return {
        "success": True,
        "message": "User registered successfully",
        "data": user_read(session, user),
    }


@router.post("/login", response_model=Token)
def login(payload: UserLogin, session: Session = Depends(get_session)):
    user = session.exec(select(User).where(User.email == payload.email)).first()

    if not user or not verify_password(payload.password, user.password):
        raise HTTPException(401, "Invalid email or password")

    token = create_access_token({"user_id": user.id, "role": user.role})
    return Token(access_token=token, token_type="bearer", user=user_read(session, user))

