from sqlmodel import SQLModel, Field, Relationship
from typing import Optional
from datetime import datetime

from tutorhub.utils.dates import TIMESTAMP, utcnow
from tutorhub.models.tutor import Tutor
from tutorhub.models.course_category import CourseCategory


class Course(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    tutor_id: int = Field(foreign_key="tutor.id", index=True)
    category_id: Optional[int] = Field(default=None, foreign_key="coursecategory.id", index=True)

    title: str
    short_description: Optional[str] = None
    total_hours: float = 0.0

    trial_rate: float          # price of one booked session
    full_course_rate: float    # price of a full enrollment

    start_date: Optional[datetime] = Field(default=None, sa_type=TIMESTAMP)
    created_at: datetime = Field(default_factory=utcnow, sa_type=TIMESTAMP)

    tutor: Optional["Tutor"] = Relationship()
    category: Optional["CourseCategory"] = Relationship()
