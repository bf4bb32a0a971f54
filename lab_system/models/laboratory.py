"""
Laboratory domain model.

A laboratory may have one member of the technical staff responsible for it.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, func
from sqlmodel import Field, SQLModel

from lab_system.models.user import utcnow


class Laboratory(SQLModel, table=True):
    __tablename__ = "laboratories"  # type: ignore[assignment]

    __table_args__ = (
        CheckConstraint("capacity > 0", name="ck_laboratories_capacity_positive"),
        CheckConstraint("length(name) > 0", name="ck_laboratories_name_not_empty"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(unique=True, index=True, max_length=100)
    location: Optional[str] = Field(default=None, max_length=255)
    capacity: int
    technical_staff_id: Optional[int] = Field(
        default=None,
        foreign_key="technical_staff.user_id",
        index=True,
        ondelete="SET NULL",
    )
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
        return f"<Laboratory id={self.id} name='{self.name}' capacity={self.capacity}>"
