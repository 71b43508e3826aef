# tests/conftest.py
import os

# Must be set before `models` creates the DBStorage singleton
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["APP_ENV"] = "test"

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from api import create_app
from models import storage
from models.base_model import Base
from models.user import User
from services.auth_service import AuthService, AuthSettings

TEST_PASSWORD = "04234"


class FrozenClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta):
        self.now += delta


@pytest.fixture(autouse=True)
def clean_db():
    yield
    session = storage.get_session()
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    storage.close()


@pytest.fixture
def app():
    app = create_app("testing")
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def clock():
    return FrozenClock(datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def settings():
    return AuthSettings(
        jwt_secret="unit-test-secret",
        polka_key="unit-test-polka-key",
        password_time_cost=1,
        password_memory_cost=1024,
    )


@pytest.fixture
def auth_service(settings, clock):
    return AuthService(settings, storage, clock=clock)


@pytest.fixture
def make_user(auth_service):
    def _make_user(email=None, password=TEST_PASSWORD):
        user = User(
            email=email or random_email(),
            hashed_password=auth_service.hash_password(password),
        )
        storage.new(user)
        storage.save()
        return user

    return _make_user


def random_email():
    return f"user_{uuid.uuid4().hex[:8]}@example.com"


@pytest.fixture
def register(client):
    def _register(email=None, password=TEST_PASSWORD):
        email = email or random_email()
        r = client.post("/api/users", json={"email": email, "password": password})
        assert r.status_code == 201, r.get_json()
        return r.get_json()

    return _register


@pytest.fixture
def login(client, register):
    """Register a fresh user and log in; returns the login response body."""
    def _login(email=None, password=TEST_PASSWORD):
        email = email or random_email()
        register(email, password)
        r = client.post("/api/login", json={"email": email, "password": password})
        assert r.status_code == 200, r.get_json()
        return r.get_json()

    return _login
