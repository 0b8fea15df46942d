from pydantic import Field
from typing import Optional
from datetime import datetime

from tutorhub.schemas.common import StrictBody, ReadModel


class CourseCreate(StrictBody):
    title: str = Field(min_length=1, max_length=200)
    short_description: Optional[str] = Field(default=None, max_length=500)
    total_hours: float = Field(default=0, ge=0)
    trial_rate: float = Field(gt=0)
    full_course_rate: float = Field(gt=0)
    start_date: Optional[datetime] = None
    category_id: Optional[int] = None


class CourseUpdate(StrictBody):
    """Partial update; only the fields sent are changed."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    short_description: Optional[str] = Field(default=None, max_length=500)
    total_hours: Optional[float] = Field(default=None, ge=0)
    trial_rate: Optional[float] = Field(default=None, gt=0)
    full_course_rate: Optional[float] = Field(default=None, gt=0)
    start_date: Optional[datetime] = None
    category_id: Optional[int] = None


class UserSummary(ReadModel):
    id: int
    name: str
    email: str
    profile_image_url: Optional[str] = None


class TutorSummary(ReadModel):
    id: int
    user_id: int
    bio: Optional[str] = None
    user: Optional[UserSummary] = None


class CategorySummary(ReadModel):
    id: int
    name: str


class CategoryRead(CategorySummary):
    description: Optional[str] = None
    course_count: int = 0


class CourseSummary(ReadModel):
    id: int
    title: str


class CourseRead(ReadModel):
    id: int
    tutor_id: int
    category_id: Optional[int] = None
    title: str
    short_description: Optional[str] = None
    total_hours: float
    trial_rate: float
    full_course_rate: float
    start_date: Optional[datetime] = None
    created_at: datetime
    tutor: Optional[TutorSummary] = None
    category: Optional[CategorySummary] = None
