"""
Shared pytest fixtures.

All tests run with ``USE_SQLITE=true`` and mocked dependencies so that
no external database or network I/O is needed.
"""

import os
import tempfile

os.environ["USE_SQLITE"] = "true"
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "lab-system-test-logs"))

from datetime import datetime, timezone  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402

from lab_system.models.user import User, UserType  # noqa: E402

# ────────────────────────────────────────────────────────────────────────────
# Factory helpers - create domain objects with sensible defaults
# ────────────────────────────────────────────────────────────────────────────

USER_ID = 1
PASSWORD = "s3cure-Passw0rd"


def make_user(
    *,
    id: int = USER_ID,
    email: str = "ada@example.com",
    first_name: str = "Ada",
    last_name: str = "Lovelace",
    user_type: UserType = UserType.TEACHER,
    password_hash: str = "$2b$10$abcdefghijklmnopqrstuv",
    created_at: datetime | None = None,
) -> User:
    """Create a User domain object with sensible test defaults."""
    now = created_at or datetime.now(timezone.utc)
    return User(
        id=id,
        email=email,
        first_name=first_name,
        last_name=last_name,
        user_type=user_type.value,
        password_hash=password_hash,
        created_at=now,
        updated_at=now,
    )


def user_payload(**overrides) -> dict:
    """A valid ``POST /users`` body."""
    payload = {
        "email": "ada@example.com",
        "first_name": "Ada",
        "last_name": "Lovelace",
        "password": PASSWORD,
        "confirm_password": PASSWORD,
        "user_type": "teacher",
    }
    payload.update(overrides)
    return payload


# ────────────────────────────────────────────────────────────────────────────
# Pytest fixtures
# ────────────────────────────────────────────────────────────────────────────


@pytest.fixture()
def mock_db():
    """A mocked AsyncSession that tracks add/flush/commit/refresh/rollback calls."""
    session = AsyncMock()
    session.add = MagicMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.refresh = AsyncMock()
    session.rollback = AsyncMock()
    session.execute = AsyncMock()
    return session
