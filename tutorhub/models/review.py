from sqlmodel import SQLModel, Field, Relationship
from typing import Optional
from datetime import datetime

from tutorhub.utils.dates import TIMESTAMP, utcnow

from tutorhub.models.user import User
from tutorhub.models.tutor import Tutor
from tutorhub.models.course import Course


class Review(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    # one review per booking; reviews sent through a request may have none
    booking_id: Optional[int] = Field(default=None, foreign_key="booking.id", unique=True)
    reviewer_id: int = Field(foreign_key="user.id", index=True)
    tutor_id: int = Field(foreign_key="tutor.id", index=True)
    course_id: int = Field(foreign_key="course.id", index=True)

    rating: int
    comment: Optional[str] = None

    status: str = Field(default="pending")  # pending | accepted | rejected
    approved_at: Optional[datetime] = Field(default=None, sa_type=TIMESTAMP)
    created_at: datetime = Field(default_factory=utcnow, sa_type=TIMESTAMP)

    reviewer: Optional["User"] = Relationship()
    tutor: Optional["Tutor"] = Relationship()
    course: Optional["Course"] = Relationship()
