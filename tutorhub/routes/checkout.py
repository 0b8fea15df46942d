from fastapi import APIRouter, Depends, Query
from sqlmodel import Session
from tutorhub.database import get_session
from tutorhub.dependencies.auth import AuthSession, get_auth_session
from tutorhub.schemas.booking_schemas import BookingRead
from tutorhub.schemas.checkout_schemas import CheckoutRequest, FulfillRequest
from tutorhub.schemas.enrollment_schemas import EnrollmentRead
from tutorhub.services.checkout_service import (
    fulfill_checkout,
    resolve_checkout_session,
    start_checkout,
)
from tutorhub.services.payment_gateway import CheckoutGateway, get_payment_gateway

router = APIRouter()


@router.post("")
def create_checkout_session(
    data: CheckoutRequest,
    session: Session = Depends(get_session),
    gateway: CheckoutGateway = Depends(get_payment_gateway),
    auth: AuthSession = Depends(get_auth_session),
):
    checkout = start_checkout(session, gateway, auth, data)
    return {"success": True, "data": checkout}


@router.get("/session")
def get_checkout_session(
    session_id: str = Query(default=""),
    gateway: CheckoutGateway = Depends(get_payment_gateway),
):
    checkout = resolve_checkout_session(gateway, session_id)
    return {
        "success": True,
        "data": {
            "id": checkout["id"],
            "status": checkout.get("status"),
            "payment_status": checkout.get("payment_status"),
            "metadata": checkout["metadata"],
        },
    }


@router.post("/fulfill")
def fulfill_checkout_session(
    data: FulfillRequest,
    session: Session = Depends(get_session),
    gateway: CheckoutGateway = Depends(get_payment_gateway),
    auth: AuthSession = Depends(get_auth_session),
):
    result = fulfill_checkout(session, gateway, auth, data.session_id)

    if result.fulfillment_type == "enrollment":
        payload = {"enrollment": EnrollmentRead.model_validate(result.record)}
        message = "Enrollment created successfully" if result.created else "Already enrolled"
    else:
        payload = {"booking": BookingRead.model_validate(result.record)}
        message = (
            "Booking and payment created successfully"
            if result.created else "Booking already recorded"
        )

    return {
        "success": True,
        "message": message,
        "data": {"fulfillment_type": result.fulfillment_type, **payload},
    }
