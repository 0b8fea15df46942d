from fastapi import APIRouter, Depends
from typing import Optional
from sqlmodel import Session
from tutorhub.database import get_session
from tutorhub.dependencies.auth import AuthSession, get_auth_session
from tutorhub.schemas.booking_schemas import BookingCreate, BookingRead
from tutorhub.services.booking_service import create_booking, list_bookings

router = APIRouter()


@router.post("")
def create_session_booking(
    data: BookingCreate,
    session: Session = Depends(get_session),
    auth: AuthSession = Depends(get_auth_session),
):
    auth.ensure_is(data.learner_id, "learner")

    booking, created = create_booking(
        session,
        learner_id=data.learner_id,
        tutor_id=data.tutor_id,
        course_id=data.course_id,
        session_date=data.session_date,
        duration_min=data.duration_min,
        status=data.status,
        session_type=data.session_type,
        transaction_reference=data.payment_session_id,
        amount=data.amount,
    )

    return {
        "success": True,
        "message": (
            "Booking and payment created successfully"
            if created else "Booking already recorded"
        ),
        "data": BookingRead.model_validate(booking),
    }


@router.get("")
def get_bookings(
    learner_id: Optional[int] = None,
    tutor_id: Optional[int] = None,
    course_id: Optional[int] = None,
    session: Session = Depends(get_session),
):
    bookings = list_bookings(
        session,
        learner_id=learner_id,
        tutor_id=tutor_id,
        course_id=course_id,
    )
    return {
        "success": True,
        "data": [BookingRead.model_validate(b) for b in bookings],
    }
