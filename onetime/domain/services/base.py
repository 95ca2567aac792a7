"""Operations common to the activation and reminder services."""

from typing import Optional

from onetime.domain.entities.token import Token
from onetime.domain.services.token_lifecycle import TokenLifecycle


class TokenService:
    """Exposes a ``TokenLifecycle`` under the names callers use.

    Subclasses define ``complete``, which is where the two token kinds
    differ.
    """

    def __init__(self, lifecycle: TokenLifecycle):
        self._lifecycle = lifecycle

    async def create(self, user_id: int) -> Token:
        return await self._lifecycle.create(user_id)

    async def exists(self, user_id: int, code: Optional[str] = None) -> Optional[Token]:
        """Return the user's pending token, optionally matching ``code``."""
        return await self._lifecycle.find_active(user_id, code)

    async def completed(self, user_id: int) -> Optional[Token]:
        return await self._lifecycle.find_completed(user_id)

    async def remove(self, user_id: int) -> bool:
        return await self._lifecycle.remove(user_id)

    async def remove_expired(self) -> int:
        return await self._lifecycle.sweep_expired()
