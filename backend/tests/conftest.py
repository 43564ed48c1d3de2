"""Pytest configuration and shared fixtures for the habit tracker services.

Every test gets its own SQLite database file, and both FastAPI apps are
pointed at it through dependency overrides, so nothing touches ./data.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

# Cheap hashes for tests; must be set before config is imported
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from auth import get_current_user
from database import Base, get_db, init_db, make_engine
from services.cache_service import habit_cache
from services.user_service import UserService
import tracker_main
import user_main


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database for each test.

    Yields:
        Engine: engine with all tables created and foreign keys enforced
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = make_engine(f"sqlite:///{db_path}")
    init_db(bind=engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(scope="function")
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(autouse=True)
def _reset_habit_cache():
    habit_cache.clear()
    yield
    habit_cache.clear()


def _override_get_db(session_factory):
    def _get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()
    return _get_db


# =============================================================================
# App Fixtures
# =============================================================================


@pytest.fixture
def user_client(session_factory):
    """TestClient for the user service backed by the per-test database."""
    user_main.app.dependency_overrides[get_db] = _override_get_db(session_factory)
    yield TestClient(user_main.app)
    user_main.app.dependency_overrides.clear()


@pytest.fixture
def acting_user():
    """Mutable holder for the user id the tracker sees as the caller."""
    return {"id": 1}


@pytest.fixture
def tracker_client(session_factory, acting_user):
    """TestClient for the tracker service; identity comes from acting_user."""
    async def _current_user():
        return acting_user["id"]

    tracker_main.app.dependency_overrides[get_db] = _override_get_db(session_factory)
    tracker_main.app.dependency_overrides[get_current_user] = _current_user
    yield TestClient(tracker_main.app)
    tracker_main.app.dependency_overrides.clear()


# =============================================================================
# Factories
# =============================================================================


@pytest.fixture
def user_factory(db_session):
    """Register users directly through the service layer."""
    counter = {"n": 0}

    def _create(username: str | None = None, email: str | None = None, password: str = "secret"):
        counter["n"] += 1
        username = username or f"user{counter['n']}"
        email = email or f"{username}@example.com"
        return UserService.register(db_session, username, email, password)

    return _create
