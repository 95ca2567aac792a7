"""Repository interfaces for abstracting data persistence in the domain layer.

These abstract base classes act as ports: the domain talks to them without
knowing whether tokens live in memory or in a SQL database.
"""

from abc import ABC, abstractmethod
from typing import Optional

from onetime.domain.entities.token import Token
from onetime.domain.entities.user import User
from onetime.domain.value_objects.token_filter import TokenChanges, TokenFilter


class ITokenStore(ABC):
    """Contract for durable storage of one token kind.

    Implementations must make ``conditional_update`` atomic: of any number
    of concurrent calls guarded on the same prior state, at most one may
    report success. Lookups that match several records return the one with
    the lowest id.
    """

    @abstractmethod
    async def insert(self, user_id: int, code: str) -> Token:
        """Persist a new pending token.

        Args:
            user_id: Owning user
            code: Generated code

        Returns:
            Token: The stored record, with ``id`` and ``created_at`` assigned.
        """
        raise NotImplementedError

    @abstractmethod
    async def find_one(self, token_filter: TokenFilter) -> Optional[Token]:
        """Return the first token matching the filter, or ``None``."""
        raise NotImplementedError

    @abstractmethod
    async def conditional_update(
        self, token_id: int, expected: TokenFilter, changes: TokenChanges
    ) -> bool:
        """Apply ``changes`` only if the record still matches ``expected``.

        Args:
            token_id: Record to update
            expected: State the record must still be in
            changes: Fields to write

        Returns:
            bool: True if the update took effect
        """
        raise NotImplementedError

    @abstractmethod
    async def delete(self, token_id: int) -> bool:
        """Delete a record; returns False if it did not exist."""
        raise NotImplementedError

    @abstractmethod
    async def delete_where(self, token_filter: TokenFilter) -> int:
        """Delete every matching record and return how many were removed."""
        raise NotImplementedError


class IUserRepository(ABC):
    """Contract for loading and saving the credential part of a user."""

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Retrieves a user by id, or ``None`` if no user is found."""
        raise NotImplementedError

    @abstractmethod
    async def save(self, user: User) -> User:
        """Persists a new user or updates an existing one."""
        raise NotImplementedError
