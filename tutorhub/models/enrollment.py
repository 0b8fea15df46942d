from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional
from datetime import datetime

from tutorhub.utils.dates import TIMESTAMP, utcnow

from tutorhub.models.user import User
from tutorhub.models.course import Course


class Enrollment(SQLModel, table=True):
    __table_args__ = (
        UniqueConstraint("student_id", "course_id", name="uq_enrollment_student_course"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    student_id: int = Field(foreign_key="user.id", index=True)
    course_id: int = Field(foreign_key="course.id", index=True)

    hours_completed: float = 0.0
    progress: float = 0.0

    enrolled_at: datetime = Field(default_factory=utcnow, sa_type=TIMESTAMP)

    student: Optional["User"] = Relationship()
    course: Optional["Course"] = Relationship()
