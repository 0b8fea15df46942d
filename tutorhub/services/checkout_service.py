import logging
from dataclasses import dataclass
from typing import Any, Dict, Union

from pydantic import ValidationError
from sqlmodel import Session

from tutorhub.config import settings
from tutorhub.dependencies.auth import AuthSession
from tutorhub.errors import Conflict, Forbidden, NotFound, ValidationFailed
from tutorhub.models.booking import Booking
from tutorhub.models.enrollment import Enrollment
from tutorhub.models.user import User
from tutorhub.schemas.checkout_schemas import CheckoutRequest, PurchaseIntent
from tutorhub.services.booking_service import create_booking
from tutorhub.services.enrollment_service import find_enrollment, fulfill_enrollment, get_course
from tutorhub.services.payment_gateway import CheckoutGateway

logger = logging.getLogger(__name__)


@dataclass
class FulfillmentResult:
    fulfillment_type: str
    record: Union[Enrollment, Booking]
    created: bool


def start_checkout(
    session: Session,
    gateway: CheckoutGateway,
    auth: AuthSession,
    data: CheckoutRequest,
) -> Dict[str, Any]:
    """
    Open a hosted checkout session for a course enrollment or a single session.

    Nothing is written locally: everything fulfillment needs later travels in
    the provider session metadata.
    """
    auth.ensure_is(data.user_id, "payer")

    payer = session.get(User, data.user_id)
    if not payer:
        raise NotFound("User not found. Please create an account first.")

    if not payer.is_learner:
        raise Forbidden("Only learners can enroll in courses. Please sign up as a learner.")

    course = get_course(session, data.course_id)

    if data.payment_type == "enrollment" and find_enrollment(session, payer.id, course.id):
        raise Conflict("You are already enrolled in this course")

    intent = PurchaseIntent(
        course_id=course.id,
        user_id=payer.id,
        tutor_id=course.tutor_id,
        amount=data.amount,
        payment_type=data.payment_type,
        session_date=data.session_date if data.payment_type == "session" else None,
        session_type=data.session_type,
    )

    course_name = data.course_name or course.title
    tutor_name = course.tutor.user.name
    if intent.payment_type == "session":
        description = f"Book a session for {course_name} with {tutor_name}"
    else:
        description = f"Enroll in {course_name} by {tutor_name}"

    checkout = gateway.create_session(
        amount_cents=int(round(data.amount * 100)),
        currency=settings.checkout_currency,
        product_name=course_name,
        description=description,
        customer_email=data.user_email or payer.email,
        client_reference_id=str(payer.id),
        metadata=intent.to_metadata(),
        success_url=(
            f"{settings.site_url}/success"
            f"?sessionId={{CHECKOUT_SESSION_ID}}&courseId={course.id}"
        ),
        cancel_url=f"{settings.site_url}/course/{course.id}",
    )

    logger.info(
        f"Checkout started: session {checkout['id']}, "
        f"{intent.payment_type} of course {course.id} by user {payer.id}"
    )

    return {"url": checkout["url"], "session_id": checkout["id"]}


def resolve_checkout_session(gateway: CheckoutGateway, session_id: str) -> Dict[str, Any]:
    if not session_id:
        raise ValidationFailed("Session ID is required")
    return gateway.retrieve_session(session_id)


def read_intent(metadata: Dict[str, str]) -> PurchaseIntent:
    try:
        return PurchaseIntent.from_metadata(metadata)
    except ValidationError as e:
        raise ValidationFailed(
            "Checkout session metadata is incomplete",
            details=[f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors()],
        )


def fulfill_checkout(
    session: Session,
    gateway: CheckoutGateway,
    auth: AuthSession,
    session_id: str,
) -> FulfillmentResult:
    """Grant what a completed checkout paid for. One fulfillment attempt per call."""
    checkout = resolve_checkout_session(gateway, session_id)
    intent = read_intent(checkout["metadata"])

    if checkout.get("payment_status") != "paid":
        raise Conflict(
            "Payment has not been completed",
            details={"payment_status": checkout.get("payment_status")},
        )

    auth.ensure_is(intent.user_id, "purchaser")

    if intent.payment_type == "enrollment":
        enrollment, created = fulfill_enrollment(
            session,
            learner_id=intent.user_id,
            course_id=intent.course_id,
        )
        return FulfillmentResult("enrollment", enrollment, created)

    booking, created = create_booking(
        session,
        learner_id=intent.user_id,
        tutor_id=intent.tutor_id,
        course_id=intent.course_id,
        session_date=intent.session_date,
        session_type=intent.session_type,
        transaction_reference=checkout["id"],
        amount=intent.amount,
    )
    return FulfillmentResult("session", booking, created)
