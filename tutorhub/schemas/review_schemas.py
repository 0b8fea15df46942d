from pydantic import Field
from typing import List, Literal, Optional
from datetime import datetime

from tutorhub.schemas.common import StrictBody, ReadModel
from tutorhub.schemas.course_schemas import UserSummary, TutorSummary, CourseSummary


class ReviewCreate(StrictBody):
    booking_id: int
    reviewer_id: int
    tutor_id: int  # the tutor's user id
    course_id: int
    rating: int = Field(ge=1, le=5)
    comment: Optional[str] = None


class ReviewStatusUpdate(StrictBody):
    status: Literal["accepted", "rejected"]
    tutor_id: int  # the tutor's user id


class ReviewRead(ReadModel):
    id: int
    booking_id: Optional[int] = None
    reviewer_id: int
    tutor_id: int
    course_id: int
    rating: int
    comment: Optional[str] = None
    status: str
    approved_at: Optional[datetime] = None
    created_at: datetime
    reviewer: Optional[UserSummary] = None
    tutor: Optional[TutorSummary] = None
    course: Optional[CourseSummary] = None


class ReviewRequestSend(StrictBody):
    course_id: int
    student_ids: List[int] = Field(min_length=1)
    message: Optional[str] = None
    force_resend: bool = False


class ReviewRequestSubmit(StrictBody):
    rating: int = Field(ge=1, le=5)
    comment: Optional[str] = None


class ReviewRequestRead(ReadModel):
    id: int
    tutor_id: int
    course_id: int
    student_id: int
    message: str
    status: str
    sent_at: datetime
    responded_at: Optional[datetime] = None


class PendingReviewRequest(ReviewRequestRead):
    course: Optional[CourseSummary] = None
    tutor: Optional[TutorSummary] = None
