"""
Shared fixtures: an in-memory SQLite database, a fake hosted-checkout
gateway, and factories for users, tutors and courses.

Settings are read from the environment at import time, so the variables
below must be in place before anything from ``tutorhub`` is imported.
"""
import itertools
import os

os.environ.setdefault("ENV", "test")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_dummy")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

import tutorhub.models  # noqa: F401
from tutorhub.database import get_session
from tutorhub.errors import NotFound
from tutorhub.main import app
from tutorhub.models.course import Course
from tutorhub.models.course_category import CourseCategory
from tutorhub.models.tutor import Tutor
from tutorhub.models.user import User
from tutorhub.services.payment_gateway import get_payment_gateway
from tutorhub.utils.token import create_access_token


class FakeCheckoutGateway:
    """Stands in for Stripe Checkout: keeps created sessions in memory."""

    name = "stripe"

    def __init__(self):
        self.sessions = {}
        self.created = []

    def create_session(self, **kwargs):
        session_id = f"cs_test_{len(self.sessions) + 1}"
        self.created.append(kwargs)
        self.sessions[session_id] = {
            "id": session_id,
            "url": f"https://checkout.stripe.test/c/pay/{session_id}",
            "status": "open",
            "payment_status": "unpaid",
            "metadata": dict(kwargs["metadata"]),
        }
        return {"id": session_id, "url": self.sessions[session_id]["url"]}

    def retrieve_session(self, session_id):
        if session_id not in self.sessions:
            raise NotFound("Checkout session not found", details=session_id)
        return dict(self.sessions[session_id])

    def complete(self, session_id):
        """What happens when the learner pays on the hosted page."""
        self.sessions[session_id].update(status="complete", payment_status="paid")


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def gateway():
    return FakeCheckoutGateway()


@pytest.fixture
def client(session, gateway):
    app.dependency_overrides[get_session] = lambda: session
    app.dependency_overrides[get_payment_gateway] = lambda: gateway

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session):
    counter = itertools.count(1)

    def _make(role="learner", name=None, password="not-a-bcrypt-hash"):
        n = next(counter)
        user = User(
            name=name or f"{role.title()} {n}",
            email=f"{role}{n}@example.com",
            password=password,
            role=role,
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make


@pytest.fixture
def make_tutor(session, make_user):
    def _make(name=None):
        user = make_user(role="tutor", name=name)
        tutor = Tutor(user_id=user.id, bio="Patient and practical.", hourly_rate=60)
        session.add(tutor)
        session.commit()
        session.refresh(tutor)
        return tutor

    return _make


@pytest.fixture
def make_course(session):
    def _make(tutor, title="Intro to Python", trial_rate=25.0, full_course_rate=800.0, start_date=None, category=None):
        course = Course(
            tutor_id=tutor.id,
            category_id=category.id if category else None,
            title=title,
            short_description="Learn the basics",
            total_hours=20,
            trial_rate=trial_rate,
            full_course_rate=full_course_rate,
            start_date=start_date,
        )
        session.add(course)
        session.commit()
        session.refresh(course)
        return course

    return _make


@pytest.fixture
def make_category(session):
    def _make(name, description=None):
        category = CourseCategory(name=name, description=description)
        session.add(category)
        session.commit()
        session.refresh(category)
        return category

    return _make


@pytest.fixture
def learner(make_user):
    return make_user(role="learner", name="Lena Learner")


@pytest.fixture
def tutor(make_tutor):
    return make_tutor(name="Sarah Johnson")


@pytest.fixture
def course(make_course, tutor):
    return make_course(tutor)


@pytest.fixture
def auth_headers():
    def _headers(user):
        token = create_access_token({"user_id": user.id})
        return {"Authorization": f"Bearer {token}"}

    return _headers
