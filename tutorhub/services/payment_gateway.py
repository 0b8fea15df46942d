import logging
from typing import Any, Dict

import stripe

from tutorhub.config import settings
from tutorhub.errors import NotFound, UpstreamError

logger = logging.getLogger(__name__)


def _upstream(exc: stripe.StripeError, action: str) -> UpstreamError:
    status_code = getattr(exc, "http_status", None) or 502
    return UpstreamError(
        f"Failed to {action}",
        details=getattr(exc, "user_message", None) or str(exc),
        status_code=status_code,
    )


def _metadata_dict(metadata) -> Dict[str, str]:
    if not metadata:
        return {}
    if hasattr(metadata, "to_dict"):
        return metadata.to_dict()
    return dict(metadata)


class CheckoutGateway:
    """Hosted checkout on Stripe. Calls are synchronous and never retried."""

    name = "stripe"

    def __init__(self, api_key: str):
        self.api_key = api_key

    def create_session(
        self,
        *,
        amount_cents: int,
        currency: str,
        product_name: str,
        description: str,
        customer_email: str,
        client_reference_id: str,
        metadata: Dict[str, str],
        success_url: str,
        cancel_url: str,
    ) -> Dict[str, Any]:
        try:
            session = stripe.checkout.Session.create(
                api_key=self.api_key,
                mode="payment",
                payment_method_types=["card"],
                customer_email=customer_email,
                client_reference_id=client_reference_id,
                line_items=[
                    {
                        "price_data": {
                            "currency": currency,
                            "unit_amount": amount_cents,
                            "product_data": {
                                "name": product_name,
                                "description": description,
                            },
                        },
                        "quantity": 1,
                    }
                ],
                metadata=metadata,
                success_url=success_url,
                cancel_url=cancel_url,
            )
        except stripe.StripeError as e:
            logger.exception("Stripe checkout session creation failed")
            raise _upstream(e, "create checkout session")

        logger.info(f"Stripe checkout session created: {session.id}")
        return {"id": session.id, "url": session.url}

    def retrieve_session(self, session_id: str) -> Dict[str, Any]:
        try:
            session = stripe.checkout.Session.retrieve(session_id, api_key=self.api_key)
        except stripe.InvalidRequestError as e:
            if getattr(e, "code", None) == "resource_missing":
                raise NotFound("Checkout session not found", details=session_id)
            logger.exception(f"Stripe rejected session lookup: {session_id}")
            raise _upstream(e, "retrieve session details")
        except stripe.StripeError as e:
            logger.exception(f"Stripe session lookup failed: {session_id}")
            raise _upstream(e, "retrieve session details")

        return {
            "id": session.id,
            "url": getattr(session, "url", None),
            "status": getattr(session, "status", None),
            "payment_status": getattr(session, "payment_status", None),
            "metadata": _metadata_dict(getattr(session, "metadata", None)),
        }


payment_gateway = CheckoutGateway(settings.stripe_secret_key)


def get_payment_gateway() -> CheckoutGateway:
    return payment_gateway
