from pydantic import Field
from typing import Literal, Optional
from datetime import datetime

from tutorhub.schemas.common import StrictBody, ReadModel
from tutorhub.schemas.course_schemas import UserSummary, TutorSummary, CourseSummary


class BookingCreate(StrictBody):
    learner_id: int
    tutor_id: int
    course_id: int
    session_date: datetime
    duration_min: int = Field(default=60, gt=0)
    status: Literal["pending", "confirmed", "completed", "cancelled"] = "confirmed"
    payment_session_id: Optional[str] = None
    amount: Optional[float] = Field(default=None, gt=0)
    session_type: Literal["individual", "group"] = "individual"


class PaymentRead(ReadModel):
    id: int
    booking_id: int
    amount: float
    payment_method: str
    payment_status: str
    transaction_id: str
    created_at: datetime


class BookingRead(ReadModel):
    id: int
    learner_id: int
    tutor_id: int
    course_id: int
    session_date: datetime
    duration_min: int
    status: str
    session_type: str
    created_at: datetime
    learner: Optional[UserSummary] = None
    tutor: Optional[TutorSummary] = None
    course: Optional[CourseSummary] = None
    payment: Optional[PaymentRead] = None
