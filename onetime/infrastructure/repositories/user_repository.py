"""User Repository implementation using SQLAlchemy.

Loads and saves the credential part of a user for the password user
directory. Every call uses its own session from the injected factory.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from structlog import get_logger

from onetime.domain.entities.user import User
from onetime.domain.interfaces.repositories import IUserRepository

logger = get_logger(__name__)


class SqlUserRepository(IUserRepository):
    """SQLAlchemy implementation of ``IUserRepository``."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID.

        Args:
            user_id: User ID to search for

        Returns:
            User entity if found, None otherwise
        """
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(User).where(User.id == user_id))
                user = result.scalars().first()
        except Exception as e:
            logger.error(
                "Error retrieving user by ID",
                user_id=user_id,
                error=str(e),
                error_type=type(e).__name__,
                operation="get_by_id",
            )
            raise

        logger.debug("User lookup by ID completed", user_id=user_id, found=user is not None)
        return user

    async def save(self, user: User) -> User:
        """Persist a new user or update an existing one.

        Returns:
            User: The persisted user with database-assigned fields loaded
        """
        try:
            async with self._session_factory() as session:
                merged = await session.merge(user)
                await session.commit()
                await session.refresh(merged)
        except Exception as e:
            logger.error(
                "Error saving user",
                user_id=user.id,
                error=str(e),
                error_type=type(e).__name__,
                operation="save",
            )
            raise

        logger.debug("User saved", user_id=merged.id)
        return merged
