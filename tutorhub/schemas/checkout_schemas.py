from pydantic import BaseModel, EmailStr, Field, model_validator
from typing import Literal, Optional
from datetime import datetime

from tutorhub.schemas.common import StrictBody


class CheckoutRequest(StrictBody):
    course_id: int
    user_id: int
    amount: float = Field(gt=0, description="in checkout currency units, not cents")
    payment_type: Literal["enrollment", "session"] = "enrollment"
    session_date: Optional[datetime] = None
    session_type: Literal["individual", "group"] = "individual"
    course_name: Optional[str] = None
    user_email: Optional[EmailStr] = None

    @model_validator(mode="after")
    def require_session_date(self):
        if self.payment_type == "session" and self.session_date is None:
            raise ValueError("Session date is required for session bookings")
        return self


class FulfillRequest(StrictBody):
    session_id: str = Field(min_length=1)


class PurchaseIntent(BaseModel):
    """
    What the learner paid for, carried through the provider's session metadata.

    Metadata values are strings on the provider side; ``to_metadata`` and
    ``from_metadata`` convert in both directions.
    """

    course_id: int
    user_id: int
    tutor_id: int
    amount: float = Field(gt=0)
    payment_type: Literal["enrollment", "session"]
    session_date: Optional[datetime] = None
    session_type: Literal["individual", "group"] = "individual"

    @model_validator(mode="after")
    def session_date_iff_session(self):
        if self.payment_type == "session" and self.session_date is None:
            raise ValueError("session_date is required for session purchases")
        if self.payment_type == "enrollment" and self.session_date is not None:
            raise ValueError("session_date is only allowed for session purchases")
        return self

    def to_metadata(self) -> dict:
        return {
            "course_id": str(self.course_id),
            "user_id": str(self.user_id),
            "tutor_id": str(self.tutor_id),
            "amount": str(self.amount),
            "payment_type": self.payment_type,
            "session_date": self.session_date.isoformat() if self.session_date else "",
            "session_type": self.session_type,
        }

    @classmethod
    def from_metadata(cls, metadata: dict) -> "PurchaseIntent":
        data = dict(metadata)
        if not data.get("session_date"):
            data["session_date"] = None
        return cls.model_validate(data)
