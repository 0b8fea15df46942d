from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime

from tutorhub.utils.dates import TIMESTAMP, utcnow


class CourseCategory(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True, unique=True)
    description: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow, sa_type=TIMESTAMP)
