from typing import Optional
from datetime import datetime

from tutorhub.schemas.common import StrictBody, ReadModel
from tutorhub.schemas.course_schemas import UserSummary


class EnrollmentCreate(StrictBody):
    learner_id: int
    course_id: int


class EnrollmentCourse(ReadModel):
    id: int
    title: str
    total_hours: float


class EnrollmentRead(ReadModel):
    id: int
    student_id: int
    course_id: int
    hours_completed: float
    progress: float
    enrolled_at: datetime
    student: Optional[UserSummary] = None
    course: Optional[EnrollmentCourse] = None
