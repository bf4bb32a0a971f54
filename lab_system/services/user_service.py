"""
User service - business logic for registering users.

Registration hashes the password, then inserts the ``users`` row together
with the profile row for the user's role.

Race condition note:
    The ``get_by_email()`` pre-check followed by the insert can race with a
    concurrent registration for the same email.  The unique constraint is
    the real guard; its ``IntegrityError`` is translated to the same 409.
"""

import asyncio
import logging

from sqlalchemy.exc import IntegrityError
from sqlmodel import SQLModel

from lab_system.core.exceptions import ConflictException
from lab_system.core.security import hash_password
from lab_system.models.profiles import Admin, Teacher, TechnicalStaff
from lab_system.models.user import User, UserType
from lab_system.repositories.user_repo import UserRepository
from lab_system.schemas.user import UserCreate

logger = logging.getLogger(__name__)

PROFILE_MODELS = {
    UserType.TEACHER: Teacher,
    UserType.TECHNICAL_STAFF: TechnicalStaff,
    UserType.ADMIN: Admin,
}


def _profile_for(user_type: UserType) -> SQLModel:
    # user_id is assigned once the users row has been flushed.
    return PROFILE_MODELS[user_type]()


class UserService:
    """Encapsulates registration rules for :class:`User`."""

    def __init__(self, user_repo: UserRepository):
        self._repo = user_repo

    async def create_user(self, user_in: UserCreate) -> User:
        """
        Register a new user.

        Raises :class:`ConflictException` if the email is already taken.
        The returned entity still carries ``password_hash``; response
        models leave it out.
        """
        email = str(user_in.email)
        if await self._repo.get_by_email(email):
            raise ConflictException(f"A user with email '{email}' already exists")

        # bcrypt is CPU-bound; keep it off the event loop.
        password_hash = await asyncio.to_thread(hash_password, user_in.password)

        values = user_in.model_dump(exclude={"password", "confirm_password"})
        values["user_type"] = user_in.user_type.value
        user = User(**values, password_hash=password_hash)

        try:
            created = await self._repo.create_with_profile(user, _profile_for(user_in.user_type))
        except IntegrityError:
            await self._repo.db.rollback()
            logger.warning("IntegrityError caught for duplicate email '%s'", email)
            raise ConflictException(f"A user with email '{email}' already exists")

        logger.info("Created user %s (%s)", created.id, created.user_type)
        return created
