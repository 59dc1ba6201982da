"""Shared pytest fixtures for scorify tests."""

import os

# Settings are built at import time; the signing secret must exist first
os.environ.setdefault("SCORIFY_JWT_SECRET", "scorify-test-secret-0123456789abcdef")

import jwt  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from scorify.core.config import get_settings  # noqa: E402
from scorify.db.schema import Base  # noqa: E402


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def session(engine):
    """Create a database session for testing."""
    Session = sessionmaker(bind=engine)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def auth_headers():
    """Build Authorization headers carrying a signed token."""
    settings = get_settings()

    def _headers(user_id: str, role: str = "Sales", **claims) -> dict[str, str]:
        token = jwt.encode(
            {"id": user_id, "role": role, **claims},
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers
