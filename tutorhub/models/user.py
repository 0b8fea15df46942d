from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime

from tutorhub.utils.dates import TIMESTAMP, utcnow


class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: str = Field(index=True, unique=True)
    password: str
    role: str = Field(default="learner")  # learner | tutor
    profile_image_url: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow, sa_type=TIMESTAMP)

    @property
    def is_learner(self) -> bool:
        return self.role == "learner"
