"""
Generic async repository (Data Access Layer).

Implements the Repository pattern on top of SQLAlchemy's ``AsyncSession``.
Concrete repositories inherit from ``BaseRepository[T]`` and add
entity-specific queries.

- **IntegrityError** is NOT caught here; the service layer turns it into
  the appropriate domain error.
- **OperationalError** (connection loss, deadlock) IS caught: the session
  is rolled back and the error re-raised, so no dirty session leaks.
"""

import logging
from typing import Generic, Type, TypeVar

from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """
    Generic repository for SQLModel entities.

    Parameters
    ----------
    model : Type[ModelType]
        The SQLModel class this repository manages.
    db : AsyncSession
        An active async database session (injected per-request).
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        self.model = model
        self.db = db

    async def _commit(self) -> None:
        """Commit the session, rolling back on connection-level failures."""
        try:
            await self.db.commit()
        except OperationalError:
            await self.db.rollback()
            logger.error("OperationalError during commit for %s", self.model.__name__)
            raise
