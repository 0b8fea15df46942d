import logging
from typing import List, Optional, Tuple

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from tutorhub.errors import Forbidden, NotFound
from tutorhub.models.course import Course
from tutorhub.models.enrollment import Enrollment
from tutorhub.models.user import User
from tutorhub.utils.dates import utcnow

logger = logging.getLogger(__name__)

_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def get_learner(session: Session, learner_id: int, action: str = "enroll in courses") -> User:
    learner = session.get(User, learner_id)

    if not learner:
        logger.warning(f"Learner not found: {learner_id}")
        raise NotFound("User not found")

    if not learner.is_learner:
        logger.warning(f"User {learner_id} is not a learner: {learner.role}")
        raise Forbidden(f"Only learners can {action}")

    return learner


def get_course(session: Session, course_id: int) -> Course:
    course = session.get(Course, course_id)
    if not course:
        raise NotFound("Course not found")
    return course


def find_enrollment(session: Session, learner_id: int, course_id: int) -> Optional[Enrollment]:
    return session.exec(
        select(Enrollment)
        .where(Enrollment.student_id == learner_id)
        .where(Enrollment.course_id == course_id)
    ).first()


def fulfill_enrollment(
    session: Session,
    *,
    learner_id: int,
    course_id: int,
) -> Tuple[Enrollment, bool]:
    """
    Create the learner's enrollment, or return the one that already exists.

    On PostgreSQL and SQLite the insert is a single "on conflict do nothing"
    statement against the (student_id, course_id) unique constraint. Other
    databases insert plainly and treat a unique violation as "already
    enrolled". Either way concurrent duplicates cannot both create a row.
    Returns ``(enrollment, created)``.
    """
    get_learner(session, learner_id)
    get_course(session, course_id)

    dialect = session.get_bind().dialect.name
    insert = _UPSERT_INSERTS.get(dialect)

    if insert is not None:
        created = _upsert_enrollment(session, insert, learner_id, course_id)
    else:
        created = _insert_enrollment(session, learner_id, course_id)

    enrollment = find_enrollment(session, learner_id, course_id)

    if created:
        logger.info(f"Enrollment created: {enrollment.id} (learner {learner_id}, course {course_id})")
    else:
        logger.info(f"Already enrolled: {enrollment.id} (learner {learner_id}, course {course_id})")

    return enrollment, created


def _upsert_enrollment(session: Session, insert, learner_id: int, course_id: int) -> bool:
    statement = (
        insert(Enrollment)
        .values(
            student_id=learner_id,
            course_id=course_id,
            hours_completed=0,
            progress=0,
            enrolled_at=utcnow(),
        )
        .on_conflict_do_nothing(index_elements=["student_id", "course_id"])
    )

    result = session.execute(statement)
    session.commit()
    return result.rowcount == 1


def _insert_enrollment(session: Session, learner_id: int, course_id: int) -> bool:
    session.add(Enrollment(student_id=learner_id, course_id=course_id))
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        return False
    return True


def list_enrollments(
    session: Session,
    *,
    user_id: Optional[int] = None,
    course_id: Optional[int] = None,
) -> List[Enrollment]:
    query = select(Enrollment)

    if user_id is not None:
        query = query.where(Enrollment.student_id == user_id)

    if course_id is not None:
        query = query.where(Enrollment.course_id == course_id)

    return session.exec(
        query.order_by(Enrollment.enrolled_at.desc(), Enrollment.id.desc())
    ).all()


def check_enrollment(session: Session, *, course_id: int, user_id: Optional[int] = None) -> dict:
    course = get_course(session, course_id)
    enrollments = list_enrollments(session, course_id=course_id)

    user_enrollment = None
    if user_id is not None:
        user_enrollment = find_enrollment(session, user_id, course_id)

    return {
        "course": course,
        "enrollments_count": len(enrollments),
        "enrollments": enrollments,
        "user_enrollment": user_enrollment,
    }
