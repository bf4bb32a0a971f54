"""
User repository - data-access layer for ``users`` and the role-profile tables.
"""

from typing import Optional

from sqlalchemy.future import select
from sqlmodel import SQLModel

from lab_system.models.user import User
from lab_system.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Concrete repository for :class:`User` entities."""

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Look up a user by email address.

        Used to reject duplicates *before* hitting the unique constraint,
        yielding a friendlier error message.
        """
        stmt = select(self.model).where(self.model.email == email)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def create_with_profile(self, user: User, profile: SQLModel) -> User:
        """
        Insert ``user`` and its role profile in a single transaction.

        ``profile.user_id`` is filled in from the flushed user row.
        **IntegrityError** is NOT caught; the service maps it to a domain error.
        """
        self.db.add(user)
        await self.db.flush()
        profile.user_id = user.id
        self.db.add(profile)
        await self._commit()
        await self.db.refresh(user)
        return user
