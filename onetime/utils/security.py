"""Security utilities for password hashing and verification.

Passwords set through a reminder are hashed with bcrypt via passlib's
``CryptContext``. The work factor comes from settings unless a context is
built explicitly.
"""

from passlib.context import CryptContext

from onetime.core.config.settings import settings


def build_password_context(rounds: int = settings.BCRYPT_WORK_FACTOR) -> CryptContext:
    """Create a bcrypt context with the given work factor."""
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


pwd_context = build_password_context()


def hash_password(password: str, context: CryptContext = pwd_context) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password to hash
        context: Crypt context to hash with

    Returns:
        str: Bcrypt-hashed password
    """
    return context.hash(password)


def verify_password(password: str, hashed_password: str, context: CryptContext = pwd_context) -> bool:
    """Verify a password against its hash in constant time.

    Args:
        password: Plain text password to verify
        hashed_password: Bcrypt hash to verify against
        context: Crypt context the hash was produced with

    Returns:
        bool: True if password matches hash
    """
    return context.verify(password, hashed_password)
