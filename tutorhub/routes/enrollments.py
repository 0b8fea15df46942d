from fastapi import APIRouter, Depends
from typing import Optional
from sqlmodel import Session
from tutorhub.database import get_session
from tutorhub.dependencies.auth import AuthSession, get_auth_session
from tutorhub.schemas.course_schemas import CourseSummary
from tutorhub.schemas.enrollment_schemas import EnrollmentCreate, EnrollmentRead
from tutorhub.services.enrollment_service import (
    check_enrollment,
    fulfill_enrollment,
    list_enrollments,
)

router = APIRouter()


@router.post("")
def create_enrollment(
    data: EnrollmentCreate,
    session: Session = Depends(get_session),
    auth: AuthSession = Depends(get_auth_session),
):
    auth.ensure_is(data.learner_id, "learner")

    enrollment, created = fulfill_enrollment(
        session,
        learner_id=data.learner_id,
        course_id=data.course_id,
    )

    return {
        "success": True,
        "message": "Enrollment created successfully" if created else "Already enrolled",
        "data": EnrollmentRead.model_validate(enrollment),
    }


@router.get("")
def get_enrollments(
    user_id: Optional[int] = None,
    course_id: Optional[int] = None,
    session: Session = Depends(get_session),
):
    enrollments = list_enrollments(session, user_id=user_id, course_id=course_id)
    return {
        "success": True,
        "data": [EnrollmentRead.model_validate(e) for e in enrollments],
    }


@router.get("/check")
def get_enrollment_status(
    course_id: int,
    user_id: Optional[int] = None,
    session: Session = Depends(get_session),
):
    result = check_enrollment(session, course_id=course_id, user_id=user_id)
    user_enrollment = result["user_enrollment"]

    return {
        "success": True,
        "data": {
            "course": CourseSummary.model_validate(result["course"]),
            "enrollments_count": result["enrollments_count"],
            "enrollments": [EnrollmentRead.model_validate(e) for e in result["enrollments"]],
            "user_enrollment": (
                EnrollmentRead.model_validate(user_enrollment) if user_enrollment else None
            ),
        },
    }
