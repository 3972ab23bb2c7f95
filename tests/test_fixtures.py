"""
Shared test fixtures and utilities for the MessPlanner test suite.

Every test that touches the database gets its own in-memory SQLite database,
so tests never see each other's meals.
"""

import copy
from datetime import timedelta
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from api.dependencies import get_db
from api.security import create_access_token
from domain.enums import UserRole
from domain.models import Base, engine_options, init_database
from domain.schemas.caller import CallerContext
from main import app

ADMIN = CallerContext(user_id="warden-1", role=UserRole.ADMIN, email="warden@hostel.example")
STUDENT = CallerContext(user_id="student-42", role=UserRole.STUDENT)

# Realistic default payload: a South Indian breakfast
IDLI_PAYLOAD = {
    "title": "Idli",
    "type": "BREAKFAST",
    "date": "2024-05-01",
    "ingredients": [{"itemName": "Idli", "gramsPerPax": "150"}],
}


def make_payload(**overrides) -> dict:
    """
    Build a valid meal payload, replacing top-level keys with overrides.

    Example:
        >>> make_payload(type="DINNER", date="2024-05-02")["type"]
        'DINNER'
    """
    payload = copy.deepcopy(IDLI_PAYLOAD)
    payload.update(overrides)
    return payload


def auth_headers(role: UserRole = UserRole.ADMIN, user_id: str = "warden-1", **kwargs) -> dict:
    """Authorization header carrying a freshly issued bearer token"""
    token = create_access_token(user_id=user_id, role=role, **kwargs)
    return {"Authorization": f"Bearer {token}"}


def expired_headers() -> dict:
    return auth_headers(ttl=timedelta(minutes=-5))


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Fresh in-memory database with the full schema"""
    engine = create_engine("sqlite://", future=True, **engine_options("sqlite://"))
    init_database(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(bind=db_engine, future=True)


@pytest.fixture(scope="function")
def db_session(session_factory) -> Generator[Session, None, None]:
    """
    Database session for integration tests.

    Yields:
        Session: SQLAlchemy session bound to the per-test database
    """
    session = session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture(scope="function")
def client(session_factory) -> Generator[TestClient, None, None]:
    """TestClient whose requests use the per-test database"""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)
