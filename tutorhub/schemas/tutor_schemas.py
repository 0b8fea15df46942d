from pydantic import Field
from typing import List, Optional

from tutorhub.schemas.common import StrictBody, ReadModel


class TutorListing(ReadModel):
    id: int
    user_id: int
    name: str
    email: str
    bio: Optional[str] = None
    avatar: Optional[str] = None
    hourly_rate: float
    rating: float
    total_reviews: int
    students_count: int
    specialties: List[str]
    availability: str
    session_duration: str
    language: str
    timezone: str


class TutorSkill(ReadModel):
    id: int
    tutor_id: int
    title: str
    description: Optional[str] = None
    category: str
    price: float
    rating: float
    reviews: int


class TutorProfileRead(ReadModel):
    id: int
    user_id: int
    name: str
    email: str
    profile_image_url: Optional[str] = None
    bio: Optional[str] = None
    hourly_rate: Optional[float] = None
    specialties: List[str] = []
    availability: Optional[str] = None
    session_duration: Optional[str] = None
    language: Optional[str] = None
    timezone: Optional[str] = None


class TutorProfileUpdate(StrictBody):
    name: Optional[str] = Field(default=None, min_length=1)
    profile_image_url: Optional[str] = None
    bio: Optional[str] = None
    hourly_rate: Optional[float] = Field(default=None, ge=0)
    specialties: Optional[List[str]] = None
    availability: Optional[str] = None
    session_duration: Optional[str] = None
    language: Optional[str] = None
    timezone: Optional[str] = None
