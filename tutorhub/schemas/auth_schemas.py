from pydantic import EmailStr, Field
from typing import Literal, Optional
from datetime import datetime

from tutorhub.schemas.common import StrictBody, ReadModel


class UserRegister(StrictBody):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=6)
    role: Literal["learner", "tutor"] = "learner"
    bio: Optional[str] = None
    profile_image_url: Optional[str] = None


class UserLogin(StrictBody):
    email: EmailStr
    password: str


class UserRead(ReadModel):
    id: int
    name: str
    email: str
    role: str
    profile_image_url: Optional[str] = None
    created_at: datetime
    tutor_id: Optional[int] = None


class Token(ReadModel):
    access_token: str
    token_type: str
    user: UserRead


class UserUpdate(StrictBody):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    profile_image_url: Optional[str] = None


class PasswordChange(StrictBody):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=6)
