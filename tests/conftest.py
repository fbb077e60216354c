import os

# Must be set before the application modules read their settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("GOOGLE_CLIENT_ID", "test-client-id")
os.environ.setdefault("GOOGLE_CLIENT_SECRET", "test-client-secret")
os.environ.setdefault("ALLOWED_EMAIL_DOMAIN", "goa.bits-pilani.ac.in")

import time

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from coursereviews.database import Base, SessionLocal, engine
from coursereviews.main import app
from coursereviews.models import Course, Review, User
from coursereviews.oauth2 import create_access_token
from coursereviews.services import token_blacklist


class FakeRedis:
    """In-memory stand-in for the Redis revocation list."""

    def __init__(self):
        self.store = {}

    def setex(self, key, seconds, value):
        self.store[key] = (value, time.time() + seconds)

    def exists(self, key):
        entry = self.store.get(key)
        return 1 if entry and entry[1] > time.time() else 0


@pytest.fixture(autouse=True)
def fresh_database():
    """Every test starts from empty tables."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def fake_redis(monkeypatch):
    fake = FakeRedis()
    monkeypatch.setattr(token_blacklist, "redis_client", fake)
    return fake


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def make_user(db):
    def _make_user(email="student@goa.bits-pilani.ac.in", full_name="Test Student"):
        user = User(email=email, full_name=full_name, is_active=True)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def auth_headers():
    def _auth_headers(user):
        return {"Authorization": f"Bearer {create_access_token(user.email, user.id)}"}

    return _auth_headers


@pytest.fixture
def student(make_user):
    return make_user()


@pytest.fixture
def other_student(make_user):
    return make_user(email="other@goa.bits-pilani.ac.in", full_name="Other Student")


@pytest.fixture
def headers(student, auth_headers):
    return auth_headers(student)


@pytest.fixture
def sample_courses(db):
    courses = [
        Course(
            course_code="CS F111",
            course_name="Computer Programming",
            prof="Smith",
            nickname="CP",
            course_dept="CS",
            info="Introductory programming in C.",
            av_marks="55",
            course_total="200",
            av_grade="B",
            course_handout="https://example.com/handouts/cs-f111.pdf",
        ),
        Course(
            course_code="CS F211",
            course_name="Data Structures and Algorithms",
            prof="Jones",
            nickname="DSA",
            course_dept="CS",
        ),
        Course(
            course_code="MATH F111",
            course_name="Mathematics I",
            prof="Ann",
            nickname="M1",
            course_dept="MATH",
        ),
    ]
    db.add_all(courses)
    db.commit()
    return courses


@pytest.fixture
def make_review(db):
    def _make_review(user, course_code="CS F111", **fields):
        review = Review(user_id=user.id, course_code=course_code, **fields)
        db.add(review)
        db.commit()
        db.refresh(review)
        return review

    return _make_review


@pytest.fixture
def failing_commit(monkeypatch):
    """Make every Session.commit raise, as a lost database connection would."""
    def _failing_commit(message="database is unavailable"):
        def commit(self):
            raise SQLAlchemyError(message)

        monkeypatch.setattr(Session, "commit", commit)

    return _failing_commit


@pytest.fixture
def failing_query(monkeypatch):
    """Make queries on one model raise; other queries (e.g. the session guard's) still run."""
    original_query = Session.query

    def _failing_query(model, message="database is unavailable"):
        def query(self, *entities, **kwargs):
            first = entities[0] if entities else None
            if first is model or getattr(first, "class_", None) is model:
                raise SQLAlchemyError(message)
            return original_query(self, *entities, **kwargs)

        monkeypatch.setattr(Session, "query", query)

    return _failing_query
