import logging
from typing import List, Optional

from sqlmodel import Session, select

from tutorhub.dependencies.auth import AuthSession
from tutorhub.errors import Conflict, Forbidden, NotFound
from tutorhub.models.booking import Booking
from tutorhub.models.review import Review
from tutorhub.models.tutor import Tutor
from tutorhub.schemas.review_schemas import ReviewCreate, ReviewStatusUpdate
from tutorhub.utils.dates import utcnow

logger = logging.getLogger(__name__)

REVIEW_TRANSITIONS = {
    "pending": ["accepted", "rejected"],
    "accepted": [],
    "rejected": [],
}


def tutor_for_user(session: Session, user_id: int) -> Optional[Tutor]:
    return session.exec(select(Tutor).where(Tutor.user_id == user_id)).first()


def has_review(session: Session, *, student_id: int, course_id: int, tutor_id: int) -> bool:
    return session.exec(
        select(Review.id)
        .where(Review.reviewer_id == student_id)
        .where(Review.course_id == course_id)
        .where(Review.tutor_id == tutor_id)
    ).first() is not None


def create_review(session: Session, auth: AuthSession, data: ReviewCreate) -> Review:
    auth.ensure_is(data.reviewer_id, "reviewer")

    tutor = tutor_for_user(session, data.tutor_id)
    if not tutor:
        raise NotFound("Tutor not found")

    booking = session.get(Booking, data.booking_id)
    if not booking:
        raise NotFound("Booking not found")

    if booking.learner_id != data.reviewer_id:
        raise Forbidden("You can only review your own bookings")

    if booking.tutor_id != tutor.id or booking.course_id != data.course_id:
        raise Forbidden("Booking does not match this tutor and course")

    existing = session.exec(
        select(Review).where(Review.booking_id == booking.id)
    ).first()
    if existing:
        raise Conflict("This booking has already been reviewed")

    review = Review(
        booking_id=booking.id,
        reviewer_id=data.reviewer_id,
        tutor_id=tutor.id,
        course_id=data.course_id,
        rating=data.rating,
        comment=data.comment or None,
        status="pending",
    )

    session.add(review)
    session.commit()
    session.refresh(review)

    logger.info(f"Review {review.id} submitted for tutor {tutor.id} by user {data.reviewer_id}")
    return review


def _owned_review(session: Session, auth: AuthSession, review_id: int, tutor_user_id: int, verb: str) -> Review:
    auth.ensure_is(tutor_user_id, "tutor")

    review = session.get(Review, review_id)
    if not review:
        raise NotFound("Review not found")

    if review.tutor.user_id != tutor_user_id:
        raise Forbidden(f"You can only {verb} your own reviews")

    return review


def update_review_status(
    session: Session,
    auth: AuthSession,
    review_id: int,
    data: ReviewStatusUpdate,
) -> Review:
    """
    Move a pending review to accepted or rejected.

    Both target states are terminal. Accepting stamps ``approved_at``,
    rejecting clears it.
    """
    review = _owned_review(session, auth, review_id, data.tutor_id, "update")

    if data.status not in REVIEW_TRANSITIONS.get(review.status, []):
        raise Conflict(
            "Review has already been processed",
            details={"current_status": review.status},
        )

    review.status = data.status
    review.approved_at = utcnow() if data.status == "accepted" else None

    session.add(review)
    session.commit()
    session.refresh(review)

    logger.info(f"Review {review.id} {review.status} by tutor user {data.tutor_id}")
    return review


def delete_review(session: Session, auth: AuthSession, review_id: int, tutor_user_id: int):
    review = _owned_review(session, auth, review_id, tutor_user_id, "delete")

    session.delete(review)
    session.commit()

    logger.info(f"Review {review_id} deleted by tutor user {tutor_user_id}")


def list_reviews(
    session: Session,
    *,
    student_id: Optional[int] = None,
    tutor_user_id: Optional[int] = None,
    course_id: Optional[int] = None,
) -> List[Review]:
    query = select(Review)

    # students and tutors see every status of their own reviews
    if student_id is not None:
        query = query.where(Review.reviewer_id == student_id)
    elif tutor_user_id is not None:
        tutor = tutor_for_user(session, tutor_user_id)
        if not tutor:
            return []
        query = query.where(Review.tutor_id == tutor.id)
    else:
        query = query.where(Review.status == "accepted")

    if course_id is not None:
        query = query.where(Review.course_id == course_id)

    return session.exec(query.order_by(Review.created_at.desc(), Review.id.desc())).all()


def list_pending_reviews(session: Session, auth: AuthSession) -> List[Review]:
    if not auth.tutor:
        return []

    return session.exec(
        select(Review)
        .where(Review.tutor_id == auth.tutor.id)
        .where(Review.status == "pending")
        .order_by(Review.created_at.desc(), Review.id.desc())
    ).all()
