"""
Role profiles.

One table per user type.  Each row shares its primary key with the
``users`` row it extends and is removed together with it.
"""

from typing import Optional

from sqlmodel import Field, SQLModel


class Teacher(SQLModel, table=True):
    __tablename__ = "teachers"  # type: ignore[assignment]

    user_id: int = Field(foreign_key="users.id", primary_key=True, ondelete="CASCADE")
    department: Optional[str] = Field(default=None, max_length=100)


class TechnicalStaff(SQLModel, table=True):
    __tablename__ = "technical_staff"  # type: ignore[assignment]

    user_id: int = Field(foreign_key="users.id", primary_key=True, ondelete="CASCADE")
    specialization: Optional[str] = Field(default=None, max_length=100)


class Admin(SQLModel, table=True):
    __tablename__ = "admins"  # type: ignore[assignment]

    user_id: int = Field(foreign_key="users.id", primary_key=True, ondelete="CASCADE")
    access_level: int = Field(default=1)
