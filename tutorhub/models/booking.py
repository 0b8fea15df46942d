from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, TYPE_CHECKING
from datetime import datetime

from tutorhub.utils.dates import TIMESTAMP, utcnow

from tutorhub.models.user import User
from tutorhub.models.tutor import Tutor
from tutorhub.models.course import Course

if TYPE_CHECKING:
    from tutorhub.models.payment import Payment


class Booking(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    learner_id: int = Field(foreign_key="user.id", index=True)
    tutor_id: int = Field(foreign_key="tutor.id", index=True)
    course_id: int = Field(foreign_key="course.id", index=True)

    session_date: datetime = Field(sa_type=TIMESTAMP)
    duration_min: int = Field(default=60)
    status: str = Field(default="confirmed")  # pending | confirmed | completed | cancelled
    session_type: str = Field(default="individual")  # individual | group

    created_at: datetime = Field(default_factory=utcnow, sa_type=TIMESTAMP)

    learner: Optional["User"] = Relationship()
    tutor: Optional["Tutor"] = Relationship()
    course: Optional["Course"] = Relationship()
    payment: Optional["Payment"] = Relationship(
        back_populates="booking",
        sa_relationship_kwargs={"uselist": False},
    )
