# tests/conftest.py
"""
Pytest fixtures and configuration for testing the Remainder Service.

This module provides:
- In-memory SQLite database setup for isolated tests
- Test client with dependency overrides
- Remainder payload factories
- A failing store for error-path tests

All fixtures are function-scoped to ensure test isolation.
"""

import os

# Point the application at SQLite before its engine is created on import.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from collections.abc import Generator  # noqa: E402
from datetime import date, timedelta  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from remainder_service.db import get_session  # noqa: E402
from remainder_service.main import app  # noqa: E402
from remainder_service.models import Base  # noqa: E402
from remainder_service.repository import RemainderStore  # noqa: E402

# Use SQLite for tests (in-memory)
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_session() -> Generator[Session, None, None]:
    """Override database session for testing."""
    session = TestingSessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


# Override the dependency
app.dependency_overrides[get_session] = override_get_session


def days_from_today(days: int) -> date:
    """Return the date ``days`` after today (negative for the past)."""
    return date.today() + timedelta(days=days)


def make_payload(**overrides: Any) -> dict[str, Any]:
    """
    Build a valid create/update payload.

    Args:
        **overrides: Fields to replace; ``date`` may be given as a ``date``.

    Returns:
        JSON-ready payload dictionary.
    """
    payload: dict[str, Any] = {
        "name": "Alice",
        "email": "alice@example.com",
        "phone": "+15551234567",
        "occasion": "birthday",
        "date": days_from_today(1),
        "time": "09:30",
        "relationship": "friend",
    }
    payload.update(overrides)
    if isinstance(payload.get("date"), date):
        payload["date"] = payload["date"].isoformat()
    return payload


def create_remainder(client: TestClient, **overrides: Any) -> dict[str, Any]:
    """
    Create a remainder through the API and return its data.

    Args:
        client: Test client.
        **overrides: Payload fields to replace.

    Returns:
        The ``data`` block of the create response.
    """
    response = client.post("/api/remainders", json=make_payload(**overrides))
    assert response.status_code == 201, response.text
    return response.json()["data"]


class ExplodingStore(RemainderStore):
    """Store whose every operation fails with an unexpected error."""

    def _fail(self, *args: Any, **kwargs: Any) -> Any:
        raise RuntimeError("connection to db-primary:5432 exploded")

    insert = _fail
    find_by_id = _fail
    find_many = _fail
    count = _fail
    update_by_id = _fail
    delete_by_id = _fail


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create a test client with fresh database."""
    Base.metadata.create_all(bind=engine)

    # Reset rate limiter storage to prevent 429 errors between tests
    app.state.limiter.reset()

    yield TestClient(app)

    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def payload() -> dict[str, Any]:
    """Valid remainder payload dated tomorrow."""
    return make_payload()
