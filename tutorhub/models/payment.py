from sqlmodel import SQLModel, Field, Relationship
from typing import Optional
from datetime import datetime

from tutorhub.utils.dates import TIMESTAMP, utcnow

from tutorhub.models.booking import Booking


class Payment(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    booking_id: int = Field(foreign_key="booking.id", unique=True, index=True)

    amount: float
    payment_method: str  # stripe
    payment_status: str  # pending | completed | failed
    transaction_id: str = Field(unique=True, index=True)

    created_at: datetime = Field(default_factory=utcnow, sa_type=TIMESTAMP)

    booking: Optional["Booking"] = Relationship(back_populates="payment")
