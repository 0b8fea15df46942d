import logging
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import uuid4

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from tutorhub.config import settings
from tutorhub.errors import NotFound, ValidationFailed
from tutorhub.models.booking import Booking
from tutorhub.models.payment import Payment
from tutorhub.models.tutor import Tutor
from tutorhub.services.enrollment_service import get_course, get_learner
from tutorhub.utils.dates import to_utc

logger = logging.getLogger(__name__)

DEFAULT_DURATION_MIN = 60


def booking_for_transaction(session: Session, transaction_id: str) -> Optional[Booking]:
    payment = session.exec(
        select(Payment).where(Payment.transaction_id == transaction_id)
    ).first()
    return payment.booking if payment else None


def create_booking(
    session: Session,
    *,
    learner_id: int,
    tutor_id: int,
    course_id: int,
    session_date: datetime,
    duration_min: Optional[int] = None,
    status: Optional[str] = None,
    session_type: str = "individual",
    transaction_reference: Optional[str] = None,
    amount: Optional[float] = None,
) -> Tuple[Booking, bool]:
    """
    Book one session and record its payment in a single transaction.

    A booking is never stored without its payment: both rows are flushed in
    the same transaction and rolled back together on any failure. When a
    payment with ``transaction_reference`` already exists, its booking is
    returned instead of creating a second one. Returns ``(booking, created)``.
    """
    get_learner(session, learner_id, action="book sessions")

    tutor = session.get(Tutor, tutor_id)
    if not tutor:
        raise NotFound("Tutor not found")

    course = get_course(session, course_id)
    if course.tutor_id != tutor.id:
        raise ValidationFailed("Tutor does not teach this course")

    if transaction_reference:
        existing = booking_for_transaction(session, transaction_reference)
        if existing:
            logger.info(f"Booking already recorded for transaction {transaction_reference}: {existing.id}")
            return existing, False

    payment_amount = amount if amount is not None else course.trial_rate

    booking = Booking(
        learner_id=learner_id,
        tutor_id=tutor_id,
        course_id=course_id,
        session_date=to_utc(session_date),
        duration_min=duration_min or DEFAULT_DURATION_MIN,
        status=status or "confirmed",
        session_type=session_type,
    )

    try:
        session.add(booking)
        session.flush()

        payment = Payment(
            booking_id=booking.id,
            amount=payment_amount,
            payment_method=settings.payment_provider,
            payment_status="completed",
            transaction_id=transaction_reference or f"txn_{uuid4().hex}",
        )
        session.add(payment)
        session.commit()
    except IntegrityError:
        session.rollback()
        # a concurrent request for the same payment session won the race
        if transaction_reference:
            existing = booking_for_transaction(session, transaction_reference)
            if existing:
                logger.info(f"Duplicate booking rolled back for transaction {transaction_reference}")
                return existing, False
        raise
    except SQLAlchemyError:
        session.rollback()
        logger.exception(f"Booking transaction failed for learner {learner_id}, course {course_id}")
        raise

    session.refresh(booking)
    logger.info(f"Booking and payment created: booking {booking.id}, payment {payment.id}")

    return booking, True


def list_bookings(
    session: Session,
    *,
    learner_id: Optional[int] = None,
    tutor_id: Optional[int] = None,
    course_id: Optional[int] = None,
) -> List[Booking]:
    query = select(Booking)

    if learner_id is not None:
        query = query.where(Booking.learner_id == learner_id)

    if tutor_id is not None:
        query = query.where(Booking.tutor_id == tutor_id)

    if course_id is not None:
        query = query.where(Booking.course_id == course_id)

    return session.exec(query.order_by(Booking.session_date.desc())).all()
