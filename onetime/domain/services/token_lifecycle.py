"""Token Lifecycle Domain Service.

This service implements the state machine shared by activations and
reminders:

    create -> Pending -> Completed
                     \\-> Expired (derived, removed by sweep_expired)

A token is pending while ``completed`` is false and ``now - created_at`` is
below the configured window. Expiry is never stored; it is computed against
the clock at query time. Completion is the only mutation and is performed
through the store's conditional update, so concurrent completions of the same
code yield exactly one success.

When a user holds several pending tokens, lookups act on the first match in
store order (lowest id). Creating a token does not invalidate earlier ones.
"""

from datetime import timedelta
from typing import Optional

import structlog

from onetime.domain.entities.token import Token, TokenKind, mask_code
from onetime.domain.interfaces.infrastructure import IClock
from onetime.domain.interfaces.repositories import ITokenStore
from onetime.domain.value_objects.token_code import CodeGenerator
from onetime.domain.value_objects.token_filter import TokenChanges, TokenFilter

logger = structlog.get_logger(__name__)


class TokenLifecycle:
    """Create, look up, complete and remove tokens of one kind.

    Args:
        store: Persistence for this token kind
        window: How long after creation a token may be completed
        clock: Source of the current time
        kind: Token kind, used for log context
        code_generator: Source of new codes
    """

    def __init__(
        self,
        store: ITokenStore,
        window: timedelta,
        clock: IClock,
        kind: TokenKind,
        code_generator: Optional[CodeGenerator] = None,
    ):
        if window <= timedelta(0):
            raise ValueError("Token window must be positive")

        self._store = store
        self._window = window
        self._clock = clock
        self._code_generator = code_generator or CodeGenerator()
        self._kind = kind

    @property
    def window(self) -> timedelta:
        return self._window

    @property
    def kind(self) -> TokenKind:
        return self._kind

    async def create(self, user_id: int) -> Token:
        """Issue a new pending token for the user.

        Always inserts a new record; existing pending tokens for the same
        user stay valid.
        """
        code = self._code_generator.generate()
        token = await self._store.insert(user_id, code)

        logger.info(
            "Token created",
            kind=self._kind.value,
            user_id=user_id,
            token_id=token.id,
            code_prefix=token.code_prefix,
        )
        return token

    async def find_active(self, user_id: int, code: Optional[str] = None) -> Optional[Token]:
        """Return the first pending, unexpired token for the user.

        Args:
            user_id: Owning user
            code: Narrow the match to this exact code; an empty value does
                not narrow

        Returns:
            Optional[Token]: The token, or None when nothing is pending
        """
        return await self._store.find_one(self._pending_filter(user_id, code or None))

    async def complete(self, user_id: int, code: str) -> bool:
        """Consume the pending token matching ``(user_id, code)``.

        Returns:
            bool: True if this call completed the token; False when the code
            is wrong, expired, already completed, or another caller won the
            race.
        """
        token = await self.find_pending(user_id, code)
        if token is None:
            return False
        return await self.mark_completed(token)

    async def find_pending(self, user_id: int, code: str) -> Optional[Token]:
        """Locate the token a completion request refers to.

        Unlike ``find_active``, the code is mandatory: an empty code never
        matches anything.
        """
        if not code:
            logger.debug("Completion attempted without a code", kind=self._kind.value, user_id=user_id)
            return None

        token = await self._store.find_one(self._pending_filter(user_id, code))
        if token is None:
            logger.info(
                "No pending token for completion",
                kind=self._kind.value,
                user_id=user_id,
                code_prefix=mask_code(code),
            )
        return token

    async def mark_completed(self, token: Token) -> bool:
        """Atomically move a pending token to completed.

        The update is guarded on the record still being uncompleted, so only
        one of several concurrent callers succeeds.
        """
        changes = TokenChanges(completed=True, completed_at=self._clock.now())
        updated = await self._store.conditional_update(
            token.id, TokenFilter(completed=False), changes
        )

        if updated:
            logger.info(
                "Token completed",
                kind=self._kind.value,
                user_id=token.user_id,
                token_id=token.id,
            )
        else:
            logger.warning(
                "Token completion not applied, record changed concurrently",
                kind=self._kind.value,
                user_id=token.user_id,
                token_id=token.id,
            )
        return updated

    async def find_completed(self, user_id: int) -> Optional[Token]:
        """Return the first completed token for the user, regardless of age."""
        return await self._store.find_one(TokenFilter(user_id=user_id, completed=True))

    async def remove(self, user_id: int) -> bool:
        """Delete the user's completed token.

        Returns:
            bool: False if the user has no completed token
        """
        token = await self.find_completed(user_id)
        if token is None:
            return False

        deleted = await self._store.delete(token.id)
        logger.info(
            "Completed token removed",
            kind=self._kind.value,
            user_id=user_id,
            token_id=token.id,
            deleted=deleted,
        )
        return deleted

    async def sweep_expired(self) -> int:
        """Delete every uncompleted token whose window has elapsed.

        Completed tokens and tokens still inside their window are untouched.
        """
        threshold = self._clock.now() - self._window
        count = await self._store.delete_where(
            TokenFilter(completed=False, created_at_or_before=threshold)
        )

        logger.info(
            "Expired tokens swept",
            kind=self._kind.value,
            threshold=threshold.isoformat(),
            deleted=count,
        )
        return count

    def _pending_filter(self, user_id: int, code: Optional[str]) -> TokenFilter:
        return TokenFilter(
            user_id=user_id,
            code=code,
            completed=False,
            created_after=self._clock.now() - self._window,
        )
