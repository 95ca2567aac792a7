"""Interfaces for external domain services."""

from abc import ABC, abstractmethod


class IUserDirectory(ABC):
    """The user directory as seen by reminder completion.

    ``validate_credential`` answers whether a proposed credential may be set;
    a rejection is an expected outcome and is returned as ``False``.
    ``update_credential`` stores it; failures there are raised.
    """

    @abstractmethod
    async def validate_credential(self, user_id: int, proposed: str) -> bool:
        """Check a proposed credential against policy for this user."""
        raise NotImplementedError

    @abstractmethod
    async def update_credential(self, user_id: int, proposed: str) -> None:
        """Replace the user's credential with ``proposed``."""
        raise NotImplementedError
