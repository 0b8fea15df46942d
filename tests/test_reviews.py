from datetime import datetime, timezone

import pytest

from tutorhub.models.review import Review
from tutorhub.services.booking_service import create_booking


@pytest.fixture
def booking(session, learner, tutor, course):
    booking, _ = create_booking(
        session,
        learner_id=learner.id,
        tutor_id=tutor.id,
        course_id=course.id,
        session_date=datetime(2025, 1, 10, 18, 0, tzinfo=timezone.utc),
    )
    return booking


@pytest.fixture
def submit_review(client, learner, tutor, course, booking, auth_headers):
    def _submit(rating=5, comment="Clear explanations"):
        return client.post(
            "/reviews",
            json={
                "booking_id": booking.id,
                "reviewer_id": learner.id,
                "tutor_id": tutor.user_id,
                "course_id": course.id,
                "rating": rating,
                "comment": comment,
            },
            headers=auth_headers(learner),
        )

    return _submit


def test_submit_review_starts_pending(submit_review):
    res = submit_review()

    assert res.status_code == 200
    review = res.json()["data"]
    assert review["status"] == "pending"
    assert review["approved_at"] is None
    assert review["rating"] == 5


def test_rating_out_of_range(submit_review):
    assert submit_review(rating=6).status_code == 400
    assert submit_review(rating=0).status_code == 400


def test_one_review_per_booking(submit_review):
    assert submit_review().status_code == 200

    res = submit_review()

    assert res.status_code == 409


def test_review_of_someone_elses_booking(client, make_user, tutor, course, booking, auth_headers):
    other = make_user()

    res = client.post(
        "/reviews",
        json={
            "booking_id": booking.id,
            "reviewer_id": other.id,
            "tutor_id": tutor.user_id,
            "course_id": course.id,
            "rating": 4,
        },
        headers=auth_headers(other),
    )

    assert res.status_code == 403


def test_accept_sets_approved_at_and_is_terminal(client, submit_review, tutor, auth_headers):
    review_id = submit_review().json()["data"]["id"]

    res = client.patch(
        f"/reviews/{review_id}",
        json={"status": "accepted", "tutor_id": tutor.user_id},
        headers=auth_headers(tutor.user),
    )

    assert res.status_code == 200
    assert res.json()["data"]["status"] == "accepted"
    assert res.json()["data"]["approved_at"] is not None

    again = client.patch(
        f"/reviews/{review_id}",
        json={"status": "rejected", "tutor_id": tutor.user_id},
        headers=auth_headers(tutor.user),
    )
    assert again.status_code == 409
    assert again.json()["details"] == {"current_status": "accepted"}


def test_reject_leaves_approved_at_empty(client, submit_review, tutor, auth_headers):
    review_id = submit_review().json()["data"]["id"]

    res = client.patch(
        f"/reviews/{review_id}",
        json={"status": "rejected", "tutor_id": tutor.user_id},
        headers=auth_headers(tutor.user),
    )

    assert res.json()["data"]["status"] == "rejected"
    assert res.json()["data"]["approved_at"] is None


def test_status_update_rejects_unknown_status(client, submit_review, tutor, auth_headers):
    review_id = submit_review().json()["data"]["id"]

    res = client.patch(
        f"/reviews/{review_id}",
        json={"status": "pending", "tutor_id": tutor.user_id},
        headers=auth_headers(tutor.user),
    )

    assert res.status_code == 400


def test_other_tutor_cannot_moderate(client, submit_review, make_tutor, auth_headers):
    review_id = submit_review().json()["data"]["id"]
    other = make_tutor(name="Other Tutor")

    res = client.patch(
        f"/reviews/{review_id}",
        json={"status": "accepted", "tutor_id": other.user_id},
        headers=auth_headers(other.user),
    )

    assert res.status_code == 403


def test_public_listing_shows_accepted_only(client, session, submit_review, tutor, learner, auth_headers):
    review_id = submit_review().json()["data"]["id"]

    assert client.get("/reviews").json()["data"] == []

    pending = client.get("/reviews/pending", headers=auth_headers(tutor.user)).json()["data"]
    assert [r["id"] for r in pending] == [review_id]

    own = client.get("/reviews", params={"student_id": learner.id}).json()["data"]
    assert [r["id"] for r in own] == [review_id]

    client.patch(
        f"/reviews/{review_id}",
        json={"status": "accepted", "tutor_id": tutor.user_id},
        headers=auth_headers(tutor.user),
    )

    public = client.get("/reviews").json()["data"]
    assert [r["id"] for r in public] == [review_id]
    assert client.get("/reviews/pending", headers=auth_headers(tutor.user)).json()["data"] == []


def test_delete_review(client, session, submit_review, tutor, auth_headers):
    review_id = submit_review().json()["data"]["id"]

    res = client.delete(
        f"/reviews/{review_id}",
        params={"tutor_id": tutor.user_id},
        headers=auth_headers(tutor.user),
    )

    assert res.status_code == 200
    session.expire_all()
    assert session.get(Review, review_id) is None


def test_delete_unknown_review(client, tutor, auth_headers):
    res = client.delete(
        "/reviews/999",
        params={"tutor_id": tutor.user_id},
        headers=auth_headers(tutor.user),
    )

    assert res.status_code == 404
