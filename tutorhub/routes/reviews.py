from fastapi import APIRouter, Depends
from typing import Optional
from sqlmodel import Session
from tutorhub.database import get_session
from tutorhub.dependencies.auth import AuthSession, get_auth_session
from tutorhub.schemas.review_schemas import ReviewCreate, ReviewRead, ReviewStatusUpdate
from tutorhub.services import review_service

router = APIRouter()


@router.get("")
def list_reviews(
    student_id: Optional[int] = None,
    tutor_id: Optional[int] = None,
    course_id: Optional[int] = None,
    session: Session = Depends(get_session),
):
    reviews = review_service.list_reviews(
        session,
        student_id=student_id,
        tutor_user_id=tutor_id,
        course_id=course_id,
    )
    return {"success": True, "data": [ReviewRead.model_validate(r) for r in reviews]}


@router.get("/pending")
def list_pending_reviews(
    session: Session = Depends(get_session),
    auth: AuthSession = Depends(get_auth_session),
):
    reviews = review_service.list_pending_reviews(session, auth)
    return {"success": True, "data": [ReviewRead.model_validate(r) for r in reviews]}


@router.post("")
def submit_review(
    data: ReviewCreate,
    session: Session = Depends(get_session),
    auth: AuthSession = Depends(get_auth_session),
):
    review = review_service.create_review(session, auth, data)
    return {
        "success": True,
        "message": "Review submitted successfully!",
        "data": ReviewRead.model_validate(review),
    }


@router.patch("/{review_id}")
def update_review_status(
    review_id: int,
    data: ReviewStatusUpdate,
    session: Session = Depends(get_session),
    auth: AuthSession = Depends(get_auth_session),
):
    review = review_service.update_review_status(session, auth, review_id, data)
    return {
        "success": True,
        "message": f"Review {review.status} successfully",
        "data": ReviewRead.model_validate(review),
    }


@router.delete("/{review_id}")
def delete_review(
    review_id: int,
    tutor_id: int,
    session: Session = Depends(get_session),
    auth: AuthSession = Depends(get_auth_session),
):
    review_service.delete_review(session, auth, review_id, tutor_id)
    return {"success": True, "message": "Review deleted successfully"}
