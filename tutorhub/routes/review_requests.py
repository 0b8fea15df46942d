from fastapi import APIRouter, Depends
from sqlmodel import Session
from tutorhub.database import get_session
from tutorhub.dependencies.auth import AuthSession, get_auth_session, require_tutor
from tutorhub.schemas.review_schemas import (
    PendingReviewRequest,
    ReviewRead,
    ReviewRequestRead,
    ReviewRequestSend,
    ReviewRequestSubmit,
)
from tutorhub.services import review_request_service

router = APIRouter()


@router.get("")
def list_sent_review_requests(
    session: Session = Depends(get_session),
    auth: AuthSession = Depends(require_tutor),
):
    requests = review_request_service.list_sent_requests(session, auth)
    return {"success": True, "data": [ReviewRequestRead.model_validate(r) for r in requests]}


@router.post("")
def send_review_requests(
    data: ReviewRequestSend,
    session: Session = Depends(get_session),
    auth: AuthSession = Depends(require_tutor),
):
    result = review_request_service.send_review_requests(session, auth, data)
    return {
        "success": True,
        "message": result["message"],
        "data": [ReviewRequestRead.model_validate(r) for r in result["requests"]],
        "stats": result["stats"],
    }


@router.get("/student")
def list_student_review_requests(
    session: Session = Depends(get_session),
    auth: AuthSession = Depends(get_auth_session),
):
    requests = review_request_service.list_pending_for_student(session, auth)
    return {"success": True, "data": [PendingReviewRequest.model_validate(r) for r in requests]}


@router.post("/{request_id}/submit")
def submit_review_request(
    request_id: int,
    data: ReviewRequestSubmit,
    session: Session = Depends(get_session),
    auth: AuthSession = Depends(get_auth_session),
):
    review = review_request_service.submit_review_request(session, auth, request_id, data)
    return {
        "success": True,
        "message": "Review submitted successfully!",
        "data": ReviewRead.model_validate(review),
    }


@router.delete("/{request_id}")
def delete_review_request(
    request_id: int,
    session: Session = Depends(get_session),
    auth: AuthSession = Depends(get_auth_session),
):
    review_request_service.delete_review_request(session, auth, request_id)
    return {"success": True, "message": "Review request deleted successfully"}
