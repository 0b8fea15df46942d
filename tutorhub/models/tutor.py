from sqlalchemy import Column, JSON
from sqlmodel import SQLModel, Field, Relationship
from typing import List, Optional
from datetime import datetime

from tutorhub.utils.dates import TIMESTAMP, utcnow
from tutorhub.models.user import User


class Tutor(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", unique=True, index=True)
    bio: Optional[str] = None
    hourly_rate: Optional[float] = None

    # empty means "derive from the tutor's courses"
    specialties: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    availability: Optional[str] = None
    session_duration: Optional[str] = None
    language: Optional[str] = None
    timezone: Optional[str] = None

    created_at: datetime = Field(default_factory=utcnow, sa_type=TIMESTAMP)

    user: Optional["User"] = Relationship()
