"""
Test configuration and fixtures for pytest.

This module provides shared fixtures used across all tests:
- Test database (SQLite in-memory for speed)
- Test client (FastAPI TestClient) with the calendar chain replaced
- Authentication helpers
- Sample data factories
"""

import pytest
from datetime import datetime, timezone
from typing import Generator
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from app.main import app
from app.core.crypto import CryptoService
from app.core.security import hash_password, create_access_token
from app.db.base import Base
from app.db.session import get_db
from app.deps import get_calendar_manager
from app.models.project import Project
from app.models.study_subject import StudySubject
from app.models.study_topic import StudyTopic
from app.models.user import User
from app.services.calendar_manager import CalendarManager


# ---------------------------------------------------------------------------
# TEST DATABASE SETUP
# ---------------------------------------------------------------------------
# Use SQLite in-memory for fast tests (no PostgreSQL dependency)
# StaticPool keeps the same connection across all operations

SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},  # Required for SQLite
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TEST_CRYPTO_KEY = b"0123456789abcdef0123456789abcdef"


# ---------------------------------------------------------------------------
# DATABASE FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """
    Create a fresh database for each test function.

    - Creates all tables
    - Yields a session for the test
    - Drops all tables after test (clean slate)
    """
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


# ---------------------------------------------------------------------------
# CALENDAR FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def calendar_manager() -> MagicMock:
    """
    Stand-in for CalendarManager.

    Defaults: nothing is mirrored (sync returns "", remove succeeds).
    Tests set return values to simulate Google.
    """
    manager = MagicMock(spec=CalendarManager)
    manager.sync_task = AsyncMock(return_value=("", None))
    manager.remove_task = AsyncMock(return_value=None)
    return manager


@pytest.fixture
def crypto() -> CryptoService:
    return CryptoService(TEST_CRYPTO_KEY)


@pytest.fixture(scope="function")
def client(db: Session, calendar_manager: MagicMock) -> Generator[TestClient, None, None]:
    """
    Create a test client with the test database.

    Overrides get_db and get_calendar_manager so no request reaches Google.
    """
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_calendar_manager] = lambda: calendar_manager

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# USER FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def test_user(db: Session) -> User:
    """
    Create a test user in the database.

    Returns:
        User with email "test@example.com" and password "testpassword"
    """
    user = User(
        id=uuid4(),
        email="test@example.com",
        hashed_password=hash_password("testpassword"),
        display_name="Test User",
        is_active=True,
        created_at=datetime.now(timezone.utc),
        updated_at=datetime.now(timezone.utc),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def other_user(db: Session) -> User:
    """A second user, for ownership checks."""
    user = User(
        id=uuid4(),
        email="other@example.com",
        hashed_password=hash_password("otherpassword"),
        display_name="Other User",
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def test_user_token(test_user: User) -> str:
    return create_access_token(subject=str(test_user.id))


@pytest.fixture
def auth_headers(test_user_token: str) -> dict:
    """
    Create authorization headers with the test user's token.

    Returns:
        Dict with Authorization header
    """
    return {"Authorization": f"Bearer {test_user_token}"}


@pytest.fixture
def other_auth_headers(other_user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(subject=str(other_user.id))}"}


# ---------------------------------------------------------------------------
# PROJECT / STUDY SUBJECT / STUDY TOPIC FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def test_project(db: Session, test_user: User) -> Project:
    project = Project(id=uuid4(), user_id=test_user.id, name="Thesis")
    db.add(project)
    db.commit()
    db.refresh(project)
    return project


@pytest.fixture
def test_study_topic(db: Session, test_user: User) -> StudyTopic:
    topic = StudyTopic(id=uuid4(), user_id=test_user.id, name="Linear Algebra")
    db.add(topic)
    db.commit()
    db.refresh(topic)
    return topic


@pytest.fixture
def test_study_subject(db: Session, test_user: User) -> StudySubject:
    subject = StudySubject(id=uuid4(), user_id=test_user.id, name="Mathematics")
    db.add(subject)
    db.commit()
    db.refresh(subject)
    return subject
