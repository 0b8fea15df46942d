import logging
from typing import List

from sqlmodel import Session, select

from tutorhub.dependencies.auth import AuthSession
from tutorhub.errors import Conflict, Forbidden, NotFound
from tutorhub.models.booking import Booking
from tutorhub.models.course import Course
from tutorhub.models.enrollment import Enrollment
from tutorhub.models.review import Review
from tutorhub.models.review_request import DEFAULT_REQUEST_MESSAGE, ReviewRequest
from tutorhub.models.user import User
from tutorhub.schemas.review_schemas import ReviewRequestSend, ReviewRequestSubmit
from tutorhub.services.review_service import has_review
from tutorhub.utils.dates import to_utc, utcnow

logger = logging.getLogger(__name__)


def _summary_message(sent: int, pending_duplicates: int, reviewed_duplicates: int) -> str:
    duplicates = pending_duplicates + reviewed_duplicates

    if sent and duplicates:
        parts = []
        if pending_duplicates:
            parts.append(f"{pending_duplicates} already pending")
        if reviewed_duplicates:
            parts.append(f"{reviewed_duplicates} already reviewed")
        return f"Sent {sent} new review request(s). {', '.join(parts)}."

    if sent:
        return f"Review requests sent to {sent} student(s)"

    if reviewed_duplicates and not pending_duplicates:
        return "All selected students have already submitted reviews for this course"
    if pending_duplicates and not reviewed_duplicates:
        return "All selected students already have pending review requests"
    return "Students either have pending requests or have already submitted reviews"


def send_review_requests(session: Session, auth: AuthSession, data: ReviewRequestSend) -> dict:
    if not auth.tutor:
        raise NotFound("Tutor profile not found. Please create a course first to set up your tutor profile.")

    course = session.get(Course, data.course_id)
    if not course:
        raise NotFound("Course not found")

    if course.tutor_id != auth.tutor.id:
        raise Forbidden("You can only request reviews for your own courses")

    message = data.message or DEFAULT_REQUEST_MESSAGE
    created = []
    pending_duplicates = 0
    reviewed_duplicates = 0

    # dict.fromkeys keeps order and drops repeated ids
    for student_id in dict.fromkeys(data.student_ids):
        if not session.get(User, student_id):
            raise NotFound(f"Student not found: {student_id}")

        pending = session.exec(
            select(ReviewRequest)
            .where(ReviewRequest.tutor_id == auth.tutor.id)
            .where(ReviewRequest.course_id == course.id)
            .where(ReviewRequest.student_id == student_id)
            .where(ReviewRequest.status == "pending")
        ).first()

        if pending:
            if data.force_resend:
                pending.message = message
                pending.sent_at = utcnow()
                session.add(pending)
                created.append(pending)
            else:
                pending_duplicates += 1
            continue

        if has_review(session, student_id=student_id, course_id=course.id, tutor_id=auth.tutor.id):
            reviewed_duplicates += 1
            continue

        request = ReviewRequest(
            tutor_id=auth.tutor.id,
            course_id=course.id,
            student_id=student_id,
            message=message,
        )
        session.add(request)
        created.append(request)

    session.commit()
    for request in created:
        session.refresh(request)

    stats = {
        "sent": len(created),
        "pending_duplicates": pending_duplicates,
        "reviewed_duplicates": reviewed_duplicates,
    }
    logger.info(f"Review requests for course {course.id}: {stats}")

    return {
        "message": _summary_message(len(created), pending_duplicates, reviewed_duplicates),
        "requests": created,
        "stats": stats,
    }


def list_sent_requests(session: Session, auth: AuthSession) -> List[ReviewRequest]:
    if not auth.tutor:
        return []

    return session.exec(
        select(ReviewRequest)
        .where(ReviewRequest.tutor_id == auth.tutor.id)
        .order_by(ReviewRequest.sent_at.desc(), ReviewRequest.id.desc())
    ).all()


def list_pending_for_student(session: Session, auth: AuthSession) -> List[ReviewRequest]:
    """
    Pending invitations for the acting student.

    A request is left untouched when the student reviews through another
    path; it is filtered out here by looking the review up per request.
    """
    requests = session.exec(
        select(ReviewRequest)
        .where(ReviewRequest.student_id == auth.user_id)
        .where(ReviewRequest.status == "pending")
        .order_by(ReviewRequest.sent_at.desc(), ReviewRequest.id.desc())
    ).all()

    return [
        request
        for request in requests
        if not has_review(
            session,
            student_id=request.student_id,
            course_id=request.course_id,
            tutor_id=request.tutor_id,
        )
    ]


def _own_request(session: Session, auth: AuthSession, request_id: int, verb: str) -> ReviewRequest:
    request = session.get(ReviewRequest, request_id)
    if not request:
        raise NotFound("Review request not found")

    if request.student_id != auth.user_id:
        raise Forbidden(f"You can only {verb} your own review requests")

    return request


def submit_review_request(
    session: Session,
    auth: AuthSession,
    request_id: int,
    data: ReviewRequestSubmit,
) -> Review:
    request = _own_request(session, auth, request_id, "respond to")

    if has_review(
        session,
        student_id=request.student_id,
        course_id=request.course_id,
        tutor_id=request.tutor_id,
    ):
        raise Conflict("You have already submitted a review for this course. Thank you for your feedback!")

    if request.status != "pending":
        # the earlier review was deleted; let the student answer again
        logger.info(f"Reopening review request {request.id}")
        request.status = "pending"
        request.responded_at = None

    course = session.get(Course, request.course_id)
    if course and course.start_date and to_utc(course.start_date) > utcnow():
        raise Forbidden(
            "You cannot submit a review before the course starts. "
            f"The course begins on {course.start_date.date().isoformat()}."
        )

    booking = session.exec(
        select(Booking)
        .where(Booking.learner_id == request.student_id)
        .where(Booking.tutor_id == request.tutor_id)
        .where(Booking.course_id == request.course_id)
        .order_by(Booking.session_date.desc())
    ).first()

    enrollment = session.exec(
        select(Enrollment)
        .where(Enrollment.student_id == request.student_id)
        .where(Enrollment.course_id == request.course_id)
    ).first()

    if not booking and not enrollment:
        raise Forbidden(
            "You must be enrolled in this course or have booked a session to leave a review."
        )

    # enrolled-only students have no booking to attach; none is created here
    review = Review(
        booking_id=booking.id if booking else None,
        reviewer_id=request.student_id,
        tutor_id=request.tutor_id,
        course_id=request.course_id,
        rating=data.rating,
        comment=data.comment or None,
        status="pending",
    )
    session.add(review)

    request.status = "responded"
    request.responded_at = utcnow()
    session.add(request)

    session.commit()
    session.refresh(review)

    logger.info(f"Review {review.id} submitted through request {request.id}")
    return review


def delete_review_request(session: Session, auth: AuthSession, request_id: int):
    request = _own_request(session, auth, request_id, "delete")

    if request.status != "pending":
        raise Conflict("Cannot delete a review request that has already been responded to")

    session.delete(request)
    session.commit()
