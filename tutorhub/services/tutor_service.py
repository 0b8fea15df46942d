import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Set, Tuple

from sqlalchemy import func
from sqlmodel import Session, select

from tutorhub.dependencies.auth import AuthSession
from tutorhub.errors import NotFound
from tutorhub.models.booking import Booking
from tutorhub.models.course import Course
from tutorhub.models.enrollment import Enrollment
from tutorhub.models.review import Review
from tutorhub.models.tutor import Tutor
from tutorhub.schemas.tutor_schemas import TutorProfileUpdate

logger = logging.getLogger(__name__)

MAX_SPECIALTIES = 5

# shown when the tutor has not filled the field in
PROFILE_DEFAULTS = {
    "hourly_rate": 25.0,
    "availability": "Flexible - All days",
    "session_duration": "1 hour",
    "language": "English",
    "timezone": "UTC-08:00 Pacific Time",
}


def _ratings(session: Session, tutor_ids: Iterable[int]) -> Dict[int, Tuple[float, int]]:
    rows = session.exec(
        select(Review.tutor_id, func.avg(Review.rating), func.count(Review.id))
        .where(Review.status == "accepted")
        .where(Review.tutor_id.in_(list(tutor_ids)))
        .group_by(Review.tutor_id)
    ).all()
    return {tutor_id: (round(float(avg), 1), count) for tutor_id, avg, count in rows}


def _students(session: Session, tutor_ids: Iterable[int]) -> Dict[int, Set[int]]:
    """Enrolled students plus learners with a completed session, per tutor."""
    tutor_ids = list(tutor_ids)
    students = defaultdict(set)

    enrolled = session.exec(
        select(Course.tutor_id, Enrollment.student_id)
        .select_from(Enrollment)
        .join(Course, Enrollment.course_id == Course.id)
        .where(Course.tutor_id.in_(tutor_ids))
    ).all()

    booked = session.exec(
        select(Booking.tutor_id, Booking.learner_id)
        .where(Booking.status == "completed")
        .where(Booking.tutor_id.in_(tutor_ids))
    ).all()

    for tutor_id, learner_id in [*enrolled, *booked]:
        students[tutor_id].add(learner_id)

    return students


def _courses(session: Session, tutor_ids: Iterable[int]) -> Dict[int, List[Course]]:
    courses = defaultdict(list)
    for course in session.exec(
        select(Course)
        .where(Course.tutor_id.in_(list(tutor_ids)))
        .order_by(Course.id)
    ).all():
        courses[course.tutor_id].append(course)
    return courses


def _specialties(tutor: Tutor, courses: List[Course]) -> List[str]:
    if tutor.specialties:
        names = tutor.specialties
    else:
        names = [c.category.name if c.category else c.title for c in courses]
    return list(dict.fromkeys(n for n in names if n))[:MAX_SPECIALTIES]


def _listing(tutor: Tutor, rating: Tuple[float, int], students: Set[int], courses: List[Course]) -> dict:
    user = tutor.user
    return {
        "id": tutor.id,
        "user_id": tutor.user_id,
        "name": user.name,
        "email": user.email,
        "bio": tutor.bio,
        "avatar": user.profile_image_url,
        "hourly_rate": tutor.hourly_rate or PROFILE_DEFAULTS["hourly_rate"],
        "rating": rating[0],
        "total_reviews": rating[1],
        "students_count": len(students),
        "specialties": _specialties(tutor, courses),
        "availability": tutor.availability or PROFILE_DEFAULTS["availability"],
        "session_duration": tutor.session_duration or PROFILE_DEFAULTS["session_duration"],
        "language": tutor.language or PROFILE_DEFAULTS["language"],
        "timezone": tutor.timezone or PROFILE_DEFAULTS["timezone"],
    }


def list_tutors(session: Session) -> List[dict]:
    """
    Every tutor with marketplace stats.

    ``rating`` is the mean of accepted reviews rounded to one decimal (0 when
    there are none); ``students_count`` counts distinct learners.
    """
    tutors = session.exec(select(Tutor).order_by(Tutor.id)).all()
    ids = [t.id for t in tutors]

    ratings = _ratings(session, ids)
    students = _students(session, ids)
    courses = _courses(session, ids)

    return [
        _listing(t, ratings.get(t.id, (0.0, 0)), students.get(t.id, set()), courses.get(t.id, []))
        for t in tutors
    ]


def get_tutor(session: Session, tutor_id: int) -> dict:
    tutor = session.get(Tutor, tutor_id)
    if not tutor:
        raise NotFound("Tutor not found")

    rating = _ratings(session, [tutor.id]).get(tutor.id, (0.0, 0))
    students = _students(session, [tutor.id]).get(tutor.id, set())
    courses = _courses(session, [tutor.id]).get(tutor.id, [])

    skills = [
        {
            "id": course.id,
            "tutor_id": tutor.id,
            "title": course.title,
            "description": course.short_description,
            "category": course.category.name if course.category else "Other",
            "price": course.full_course_rate,
            "rating": rating[0],
            "reviews": rating[1],
        }
        for course in courses
    ]

    return {"tutor": _listing(tutor, rating, students, courses), "skills": skills}


def ensure_tutor_profile(session: Session, auth: AuthSession) -> Tutor:
    """The acting tutor's profile, created empty on first use."""
    if auth.tutor:
        return auth.tutor

    tutor = Tutor(user_id=auth.user_id)
    session.add(tutor)
    session.commit()
    session.refresh(tutor)

    logger.info(f"Tutor profile {tutor.id} created for user {auth.user_id}")
    auth.tutor = tutor
    return tutor


def profile_view(tutor: Tutor) -> dict:
    user = tutor.user
    return {
        "id": tutor.id,
        "user_id": user.id,
        "name": user.name,
        "email": user.email,
        "profile_image_url": user.profile_image_url,
        "bio": tutor.bio,
        "hourly_rate": tutor.hourly_rate,
        "specialties": tutor.specialties or [],
        "availability": tutor.availability,
        "session_duration": tutor.session_duration,
        "language": tutor.language,
        "timezone": tutor.timezone,
    }


def update_tutor_profile(session: Session, auth: AuthSession, data: TutorProfileUpdate) -> Tutor:
    tutor = ensure_tutor_profile(session, auth)
    changes = data.model_dump(exclude_unset=True)
    if changes.get("name") is None:
        changes.pop("name", None)
    if "specialties" in changes and changes["specialties"] is None:
        changes["specialties"] = []

    user = auth.user
    for field in ("name", "profile_image_url"):
        if field in changes:
            setattr(user, field, changes.pop(field))

    for field, value in changes.items():
        setattr(tutor, field, value)

    session.add(user)
    session.add(tutor)
    session.commit()
    session.refresh(tutor)

    logger.info(f"Tutor profile {tutor.id} updated: {sorted(data.model_fields_set)}")
    return tutor
