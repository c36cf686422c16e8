"""
Password hashing for user accounts.

Argon2 through passlib's CryptContext, with cost parameters taken from
settings so tests and low-powered environments can tune them.
"""

import logging

from passlib.context import CryptContext

from .config import settings

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8

pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
    argon2__time_cost=settings.argon2_time_cost,
    argon2__memory_cost=settings.argon2_memory_cost,
    argon2__parallelism=settings.argon2_parallelism,
)


def hash_password(password: str) -> str:
    """Hash a plain text password."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash. Malformed hashes never verify."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError) as e:
        logger.warning(f"Password verification failed on malformed hash: {e}")
        return False


def needs_rehash(hashed_password: str) -> bool:
    """Check whether the hash was produced with outdated parameters."""
    return pwd_context.needs_update(hashed_password)
