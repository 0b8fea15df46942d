import logging
from typing import List, Optional

from sqlalchemy import func
from sqlmodel import Session, select

from tutorhub.dependencies.auth import AuthSession
from tutorhub.errors import Forbidden, NotFound, ValidationFailed
from tutorhub.models.booking import Booking
from tutorhub.models.course import Course
from tutorhub.models.course_category import CourseCategory
from tutorhub.models.enrollment import Enrollment
from tutorhub.models.review_request import ReviewRequest
from tutorhub.schemas.course_schemas import CourseCreate, CourseUpdate
from tutorhub.services.enrollment_service import get_course
from tutorhub.services.tutor_service import ensure_tutor_profile
from tutorhub.utils.dates import to_utc

logger = logging.getLogger(__name__)


def course_query(
    *,
    search: Optional[str] = None,
    tutor_id: Optional[int] = None,
    category_id: Optional[int] = None,
):
    query = select(Course)

    if search:
        like = f"%{search}%"
        query = query.where(
            Course.title.ilike(like) |
            Course.short_description.ilike(like)
        )

    if tutor_id is not None:
        query = query.where(Course.tutor_id == tutor_id)

    if category_id is not None:
        query = query.where(Course.category_id == category_id)

    return query.order_by(Course.created_at.desc(), Course.id.desc())


def _check_category(session: Session, category_id: Optional[int]):
    if category_id is not None and not session.get(CourseCategory, category_id):
        raise NotFound("Category not found")


def create_course(session: Session, auth: AuthSession, data: CourseCreate) -> Course:
    _check_category(session, data.category_id)

    # tutors registered without a bio get their profile on the first course
    tutor = ensure_tutor_profile(session, auth)

    course = Course(
        tutor_id=tutor.id,
        category_id=data.category_id,
        title=data.title,
        short_description=data.short_description,
        total_hours=data.total_hours,
        trial_rate=data.trial_rate,
        full_course_rate=data.full_course_rate,
        start_date=to_utc(data.start_date),
    )

    session.add(course)
    session.commit()
    session.refresh(course)

    logger.info(f"Course {course.id} created by tutor {tutor.id}")
    return course


def _owned_course(session: Session, auth: AuthSession, course_id: int, verb: str) -> Course:
    course = get_course(session, course_id)

    if auth.tutor_id is None or course.tutor_id != auth.tutor_id:
        logger.warning(f"User {auth.user_id} tried to {verb} course {course_id}")
        raise Forbidden(f"You can only {verb} your own courses")

    return course


def update_course(session: Session, auth: AuthSession, course_id: int, data: CourseUpdate) -> Course:
    course = _owned_course(session, auth, course_id, "update")

    changes = data.model_dump(exclude_unset=True)

    # columns that cannot be cleared
    for field in ("title", "total_hours", "trial_rate", "full_course_rate"):
        if field in changes and changes[field] is None:
            raise ValidationFailed(f"{field} cannot be empty")

    if "category_id" in changes:
        _check_category(session, changes["category_id"])
    if "start_date" in changes:
        changes["start_date"] = to_utc(changes["start_date"])

    for field, value in changes.items():
        setattr(course, field, value)

    session.add(course)
    session.commit()
    session.refresh(course)

    logger.info(f"Course {course.id} updated: {sorted(changes)}")
    return course


def delete_course(session: Session, auth: AuthSession, course_id: int):
    """
    Delete a course nobody has paid for yet.

    Courses with enrollments or bookings are kept; outstanding review
    requests for the course go with it.
    """
    course = _owned_course(session, auth, course_id, "delete")

    enrollments = session.exec(
        select(func.count(Enrollment.id)).where(Enrollment.course_id == course.id)
    ).one()
    bookings = session.exec(
        select(func.count(Booking.id)).where(Booking.course_id == course.id)
    ).one()

    if enrollments or bookings:
        raise ValidationFailed(
            "Cannot delete course with active enrollments or bookings",
            details={"enrollments": enrollments, "bookings": bookings},
        )

    for request in session.exec(
        select(ReviewRequest).where(ReviewRequest.course_id == course.id)
    ).all():
        session.delete(request)

    session.delete(course)
    session.commit()

    logger.info(f"Course {course_id} deleted by tutor {auth.tutor_id}")


def list_categories(session: Session) -> List[dict]:
    rows = session.exec(
        select(CourseCategory, func.count(Course.id))
        .select_from(CourseCategory)
        .join(Course, Course.category_id == CourseCategory.id, isouter=True)
        .group_by(CourseCategory.id)
        .order_by(CourseCategory.name)
    ).all()

    return [
        {
            "id": category.id,
            "name": category.name,
            "description": category.description,
            "course_count": count,
        }
        for category, count in rows
    ]
