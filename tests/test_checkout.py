import pytest
from sqlmodel import select

from tutorhub.errors import UpstreamError
from tutorhub.models.booking import Booking
from tutorhub.models.enrollment import Enrollment
from tutorhub.models.payment import Payment
from tutorhub.schemas.checkout_schemas import PurchaseIntent


def checkout_body(learner, course, **overrides):
    body = {
        "course_id": course.id,
        "user_id": learner.id,
        "amount": 50,
        "payment_type": "enrollment",
    }
    body.update(overrides)
    return body


# ---------------------------------------------------------------------------
# Checkout initiator
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("amount", [0, -10])
def test_checkout_rejects_non_positive_amount(client, gateway, learner, course, auth_headers, amount):
    res = client.post(
        "/checkout",
        json=checkout_body(learner, course, amount=amount),
        headers=auth_headers(learner),
    )

    assert res.status_code == 400
    assert res.json()["error"] == "Validation failed"
    assert gateway.created == []


def test_checkout_accepts_positive_amount(client, gateway, learner, course, tutor, auth_headers):
    res = client.post("/checkout", json=checkout_body(learner, course), headers=auth_headers(learner))

    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["data"]["url"].startswith("https://checkout.stripe.test/")

    created = gateway.created[0]
    assert created["amount_cents"] == 5000
    assert created["currency"] == "cad"
    assert created["customer_email"] == learner.email
    assert created["description"] == "Enroll in Intro to Python by Sarah Johnson"
    assert "{CHECKOUT_SESSION_ID}" in created["success_url"]
    assert created["cancel_url"].endswith(f"/course/{course.id}")
    assert created["metadata"] == {
        "course_id": str(course.id),
        "user_id": str(learner.id),
        "tutor_id": str(tutor.id),
        "amount": "50.0",
        "payment_type": "enrollment",
        "session_date": "",
        "session_type": "individual",
    }


def test_checkout_session_requires_session_date(client, gateway, learner, course, auth_headers):
    res = client.post(
        "/checkout",
        json=checkout_body(learner, course, payment_type="session"),
        headers=auth_headers(learner),
    )

    assert res.status_code == 400
    assert any("Session date is required" in d["msg"] for d in res.json()["details"])
    assert gateway.created == []


def test_checkout_session_describes_booking(client, gateway, learner, course, auth_headers):
    res = client.post(
        "/checkout",
        json=checkout_body(
            learner, course,
            payment_type="session",
            amount=25,
            session_date="2025-01-10T18:00:00Z",
            session_type="group",
        ),
        headers=auth_headers(learner),
    )

    assert res.status_code == 200
    created = gateway.created[0]
    assert created["description"] == "Book a session for Intro to Python with Sarah Johnson"
    assert created["metadata"]["payment_type"] == "session"
    assert created["metadata"]["session_type"] == "group"
    assert created["metadata"]["session_date"].startswith("2025-01-10T18:00:00")


def test_checkout_rejects_already_enrolled(client, session, gateway, learner, course, auth_headers):
    session.add(Enrollment(student_id=learner.id, course_id=course.id))
    session.commit()

    res = client.post("/checkout", json=checkout_body(learner, course), headers=auth_headers(learner))

    assert res.status_code == 409
    assert res.json() == {"error": "You are already enrolled in this course"}
    assert gateway.created == []


def test_checkout_rejects_tutor_payer(client, tutor, course, auth_headers):
    res = client.post(
        "/checkout",
        json=checkout_body(tutor.user, course),
        headers=auth_headers(tutor.user),
    )

    assert res.status_code == 403


def test_checkout_rejects_paying_as_someone_else(client, make_user, learner, course, auth_headers):
    other = make_user()

    res = client.post("/checkout", json=checkout_body(learner, course), headers=auth_headers(other))

    assert res.status_code == 403


def test_checkout_unknown_course(client, learner, course, auth_headers):
    res = client.post(
        "/checkout",
        json=checkout_body(learner, course, course_id=9999),
        headers=auth_headers(learner),
    )

    assert res.status_code == 404
    assert res.json()["error"] == "Course not found"


def test_checkout_rejects_unknown_fields(client, gateway, learner, course, auth_headers):
    res = client.post(
        "/checkout",
        json=checkout_body(learner, course, discount_code="FREE"),
        headers=auth_headers(learner),
    )

    assert res.status_code == 400
    assert gateway.created == []


def test_checkout_requires_authentication(client, learner, course):
    res = client.post("/checkout", json=checkout_body(learner, course))

    assert res.status_code == 401


def test_checkout_provider_failure_leaves_no_local_state(client, gateway, session, learner, course, auth_headers):
    def fail(**kwargs):
        raise UpstreamError("Failed to create checkout session", details="card_declined")

    gateway.create_session = fail

    res = client.post("/checkout", json=checkout_body(learner, course), headers=auth_headers(learner))

    assert res.status_code == 502
    assert res.json() == {"error": "Failed to create checkout session", "details": "card_declined"}
    assert session.exec(select(Enrollment)).all() == []


# ---------------------------------------------------------------------------
# Session resolver
# ---------------------------------------------------------------------------

def test_resolve_unknown_session(client):
    res = client.get("/checkout/session", params={"session_id": "cs_missing"})

    assert res.status_code == 404


def test_resolve_requires_session_id(client):
    res = client.get("/checkout/session")

    assert res.status_code == 400
    assert res.json()["error"] == "Session ID is required"


# ---------------------------------------------------------------------------
# Fulfillment dispatcher
# ---------------------------------------------------------------------------

def start_and_pay(client, gateway, learner, course, auth_headers, **overrides):
    res = client.post(
        "/checkout",
        json=checkout_body(learner, course, **overrides),
        headers=auth_headers(learner),
    )
    assert res.status_code == 200, res.text
    session_id = res.json()["data"]["session_id"]
    gateway.complete(session_id)
    return session_id


def test_enrollment_purchase_end_to_end(client, gateway, session, learner, course, auth_headers):
    session_id = start_and_pay(client, gateway, learner, course, auth_headers)

    resolved = client.get("/checkout/session", params={"session_id": session_id}).json()["data"]
    assert resolved["payment_status"] == "paid"
    assert resolved["metadata"]["payment_type"] == "enrollment"
    assert resolved["metadata"]["course_id"] == str(course.id)
    assert resolved["metadata"]["user_id"] == str(learner.id)

    res = client.post("/checkout/fulfill", json={"session_id": session_id}, headers=auth_headers(learner))

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["fulfillment_type"] == "enrollment"
    assert data["enrollment"]["progress"] == 0
    assert data["enrollment"]["hours_completed"] == 0

    enrollments = session.exec(select(Enrollment)).all()
    assert len(enrollments) == 1
    assert (enrollments[0].student_id, enrollments[0].course_id) == (learner.id, course.id)

    # the success page being refreshed
    again = client.post("/checkout/fulfill", json={"session_id": session_id}, headers=auth_headers(learner))
    assert again.status_code == 200
    assert again.json()["message"] == "Already enrolled"
    assert len(session.exec(select(Enrollment)).all()) == 1


def test_session_purchase_end_to_end(client, gateway, session, learner, course, auth_headers):
    session_id = start_and_pay(
        client, gateway, learner, course, auth_headers,
        payment_type="session",
        amount=25,
        session_date="2025-01-10T18:00:00Z",
    )

    res = client.post("/checkout/fulfill", json={"session_id": session_id}, headers=auth_headers(learner))

    assert res.status_code == 200
    booking = res.json()["data"]["booking"]
    assert booking["status"] == "confirmed"
    assert booking["duration_min"] == 60
    assert booking["session_type"] == "individual"
    assert booking["session_date"].startswith("2025-01-10T18:00")
    assert booking["payment"]["amount"] == 25
    assert booking["payment"]["payment_status"] == "completed"
    assert booking["payment"]["payment_method"] == "stripe"
    assert booking["payment"]["transaction_id"] == session_id

    again = client.post("/checkout/fulfill", json={"session_id": session_id}, headers=auth_headers(learner))
    assert again.json()["message"] == "Booking already recorded"
    assert again.json()["data"]["booking"]["id"] == booking["id"]
    assert len(session.exec(select(Booking)).all()) == 1
    assert len(session.exec(select(Payment)).all()) == 1


def test_fulfill_requires_authentication(client, gateway, learner, course, auth_headers):
    session_id = start_and_pay(client, gateway, learner, course, auth_headers)

    res = client.post("/checkout/fulfill", json={"session_id": session_id})

    assert res.status_code == 401


def test_fulfill_rejects_unpaid_session(client, gateway, session, learner, course, auth_headers):
    res = client.post("/checkout", json=checkout_body(learner, course), headers=auth_headers(learner))
    session_id = res.json()["data"]["session_id"]

    res = client.post("/checkout/fulfill", json={"session_id": session_id}, headers=auth_headers(learner))

    assert res.status_code == 409
    assert res.json()["details"] == {"payment_status": "unpaid"}
    assert session.exec(select(Enrollment)).all() == []


def test_fulfill_rejects_other_user(client, gateway, make_user, learner, course, auth_headers):
    session_id = start_and_pay(client, gateway, learner, course, auth_headers)
    other = make_user()

    res = client.post("/checkout/fulfill", json={"session_id": session_id}, headers=auth_headers(other))

    assert res.status_code == 403


def test_fulfill_rejects_malformed_metadata(client, gateway, learner, course, auth_headers):
    session_id = start_and_pay(client, gateway, learner, course, auth_headers)
    gateway.sessions[session_id]["metadata"]["payment_type"] = "session"

    res = client.post("/checkout/fulfill", json={"session_id": session_id}, headers=auth_headers(learner))

    assert res.status_code == 400
    assert res.json()["error"] == "Checkout session metadata is incomplete"


def test_purchase_intent_requires_date_only_for_sessions():
    base = {"course_id": "1", "user_id": "2", "tutor_id": "3", "amount": "40.0", "session_type": "individual"}

    intent = PurchaseIntent.from_metadata({**base, "payment_type": "enrollment", "session_date": ""})
    assert intent.session_date is None

    with pytest.raises(ValueError):
        PurchaseIntent.from_metadata({**base, "payment_type": "session", "session_date": ""})

    with pytest.raises(ValueError):
        PurchaseIntent.from_metadata(
            {**base, "payment_type": "enrollment", "session_date": "2025-01-10T18:00:00+00:00"}
        )
