"""
Password hashing.

bcrypt only looks at the first 72 bytes of a password; request schemas
cap passwords at that length so nothing is silently truncated.
"""

import bcrypt

from lab_system.core.config import settings


def hash_password(password: str, rounds: int = settings.BCRYPT_ROUNDS) -> str:
    """Return a salted bcrypt hash of ``password``."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
