from sqlmodel import SQLModel, Field, Relationship
from typing import Optional
from datetime import datetime

from tutorhub.utils.dates import TIMESTAMP, utcnow

from tutorhub.models.user import User
from tutorhub.models.tutor import Tutor
from tutorhub.models.course import Course

DEFAULT_REQUEST_MESSAGE = "Please share your feedback about the course!"


class ReviewRequest(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    tutor_id: int = Field(foreign_key="tutor.id", index=True)
    course_id: int = Field(foreign_key="course.id", index=True)
    student_id: int = Field(foreign_key="user.id", index=True)

    message: str = Field(default=DEFAULT_REQUEST_MESSAGE)
    status: str = Field(default="pending")  # pending | responded

    sent_at: datetime = Field(default_factory=utcnow, sa_type=TIMESTAMP)
    responded_at: Optional[datetime] = Field(default=None, sa_type=TIMESTAMP)

    student: Optional["User"] = Relationship()
    tutor: Optional["Tutor"] = Relationship()
    course: Optional["Course"] = Relationship()
