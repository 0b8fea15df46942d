from fastapi import APIRouter, Depends
from sqlmodel import Session
from tutorhub.database import get_session
from tutorhub.dependencies.auth import AuthSession, require_tutor
from tutorhub.schemas.tutor_schemas import (
    TutorListing,
    TutorProfileRead,
    TutorProfileUpdate,
    TutorSkill,
)
from tutorhub.services import tutor_service

router = APIRouter()


@router.get("")
def list_tutors(session: Session = Depends(get_session)):
    tutors = tutor_service.list_tutors(session)
    return {"success": True, "data": [TutorListing(**t) for t in tutors]}


# declared before /{tutor_id} so "profile" is not parsed as an id
@router.get("/profile")
def get_my_tutor_profile(
    session: Session = Depends(get_session),
    auth: AuthSession = Depends(require_tutor),
):
    tutor = tutor_service.ensure_tutor_profile(session, auth)
    return {"success": True, "data": TutorProfileRead(**tutor_service.profile_view(tutor))}


@router.patch("/profile")
def update_my_tutor_profile(
    data: TutorProfileUpdate,
    session: Session = Depends(get_session),
    auth: AuthSession = Depends(require_tutor),
):
    tutor = tutor_service.update_tutor_profile(session, auth, data)
    return {
        "success": True,
        "message": "Profile updated successfully",
        "data": TutorProfileRead(**tutor_service.profile_view(tutor)),
    }


@router.get("/{tutor_id}")
def get_tutor(tutor_id: int, session: Session = Depends(get_session)):
    result = tutor_service.get_tutor(session, tutor_id)
    return {
        "success": True,
        "data": {
            "tutor": TutorListing(**result["tutor"]),
            "skills": [TutorSkill(**s) for s in result["skills"]],
        },
    }
