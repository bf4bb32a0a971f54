"""
User domain model.

Every person who can sign in to the lab system has one row in ``users``;
role-specific details live in ``teachers``, ``technical_staff`` or
``admins``, keyed by the same id.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, func
from sqlmodel import Field, SQLModel


class UserType(str, Enum):
    """Allowed user roles."""

    TEACHER = "teacher"
    TECHNICAL_STAFF = "technical_staff"
    ADMIN = "admin"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    """
    SQLModel / SQLAlchemy table definition for users.

    Constraints:
    - ``email`` has a unique index; duplicate registrations are rejected at DB level.
    - ``user_type`` is a plain VARCHAR(20) restricted by a CHECK constraint,
      so MySQL and PostgreSQL share the same schema.
    - ``updated_at`` is refreshed by the database on every UPDATE.
    """

    __tablename__ = "users"  # type: ignore[assignment]

    __table_args__ = (
        CheckConstraint(
            "user_type IN ('teacher', 'technical_staff', 'admin')",
            name="ck_users_user_type",
        ),
        CheckConstraint("length(email) > 0", name="ck_users_email_not_empty"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=255)
    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    user_type: str = Field(max_length=20)
    created_at: datetime = Field(
        default_factory=utcnow,
        nullable=False,
        sa_type=DateTime(timezone=True),  # type: ignore[arg-type]
        sa_column_kwargs={"server_default": func.now()},
    )
    updated_at: datetime = Field(
        default_factory=utcnow,
        nullable=False,
        sa_type=DateTime(timezone=True),  # type: ignore[arg-type]
        sa_column_kwargs={"server_default": func.now(), "onupdate": func.now()},
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} email='{self.email}' type={self.user_type}>"
