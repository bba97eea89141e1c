"""
Pytest configuration and fixtures

Tests run against an in-memory SQLite database shared through a StaticPool,
so the app and the fixtures see the same rows. The submissions table is
emptied after every test.
"""
import os
import sys

import pytest

# Must be set before core.config is imported anywhere
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("ENVIRONMENT", "test")

# Add the parent directory to the path so we can import from services
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient

from main import app
from core.database import SessionLocal, ensure_schema, get_db
from models import Submission


@pytest.fixture
def db_session():
    """Session shared between fixtures and the app via dependency override."""
    ensure_schema()
    session = SessionLocal()

    def _override_get_db():
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise

    app.dependency_overrides[get_db] = _override_get_db
    yield session

    app.dependency_overrides.pop(get_db, None)
    session.rollback()
    session.query(Submission).delete()
    session.commit()
    session.close()


@pytest.fixture
def client(db_session):
    """TestClient wired to the overridden DB session."""
    return TestClient(app)


@pytest.fixture
def valid_payload():
    """A submission that satisfies every constraint."""
    return {
        "character": "Deniusth",
        "username": "erin_solstice",
        "cause": "Out-dueled by a Door.",
        "probability": 42,
        "era": "AF",
        "year": 27,
        "month_index": 9,
        "month_name": "Evium (Autumn 1)",
        "day_of_month": 12,
        "day_of_week_index": 3,
        "day_of_week_name": "— (3rd day, unknown)",
    }


@pytest.fixture
def make_submission(db_session, valid_payload):
    """Insert a submission directly, overriding fields of the valid payload."""
    def _make(**overrides):
        row = Submission(**{**valid_payload, **overrides})
        db_session.add(row)
        db_session.commit()
        db_session.refresh(row)
        return row
    return _make
