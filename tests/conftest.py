"""
Pytest configuration and fixtures for blog API tests.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from blogapi.auth import create_access_token, get_password_hash
from blogapi.clock import get_clock
from blogapi.config import get_settings
from blogapi.database import Base, get_db
from blogapi.limiter import limiter
from blogapi.main import app
from blogapi.models.user import User

# Disable rate limiting for tests
limiter.enabled = False

# Use in-memory SQLite for tests with shared connection
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Global session for sharing across requests
_test_session = None

NOW = datetime(2025, 6, 10, 12, 0, 0)


class FrozenClock:
    """Synthetic clock: returns a fixed instant until advanced."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


def get_test_db():
    """Get the shared test database session."""
    yield _test_session


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    global _test_session

    Base.metadata.create_all(bind=engine)
    _test_session = TestingSessionLocal()
    app.dependency_overrides[get_db] = get_test_db

    yield _test_session

    app.dependency_overrides.clear()
    _test_session.close()
    _test_session = None
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def clock(db):
    """A frozen clock wired into the app."""
    frozen = FrozenClock()
    app.dependency_overrides[get_clock] = lambda: frozen
    return frozen


@pytest.fixture(scope="function")
def settings():
    return get_settings()


@pytest.fixture(scope="function")
def store_only(monkeypatch, settings):
    """Serve public reads from the database alone."""
    monkeypatch.setattr(settings, "content_source", "store")
    return settings


@pytest.fixture(scope="function")
def client(db, clock):
    """Create a test client."""
    with TestClient(app) as c:
        yield c


def _make_user(db, email, password, is_admin):
    user = User(
        email=email,
        hashed_password=get_password_hash(password),
        display_name=email.split("@")[0],
        is_active=True,
        is_admin=is_admin,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture(scope="function")
def admin_user(db):
    """An author allowed to manage posts."""
    return _make_user(db, "admin@example.com", "adminpassword123", is_admin=True)


@pytest.fixture(scope="function")
def reader_user(db):
    """A signed-in user without authoring rights."""
    return _make_user(db, "reader@example.com", "readerpassword123", is_admin=False)


@pytest.fixture(scope="function")
def auth_headers(admin_user):
    """Bearer headers for the admin user."""
    token = create_access_token({"sub": str(admin_user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
def reader_headers(reader_user):
    token = create_access_token({"sub": str(reader_user.id)})
    return {"Authorization": f"Bearer {token}"}
