"""In-process token store.

Keeps tokens in a dictionary ordered by id. All reads and writes go through
a ``threading.Lock`` so the store is safe to share between threads and
event loops, and ``conditional_update`` performs its check and its write
under the same lock acquisition.

Suitable for tests and single-process deployments; records do not survive
a restart.
"""

import threading
from dataclasses import replace
from typing import Dict, Optional

import structlog

from onetime.domain.entities.token import Token
from onetime.domain.interfaces.infrastructure import IClock
from onetime.domain.interfaces.repositories import ITokenStore
from onetime.domain.value_objects.token_filter import TokenChanges, TokenFilter

logger = structlog.get_logger(__name__)


class InMemoryTokenStore(ITokenStore):
    """Dictionary-backed implementation of ``ITokenStore``.

    Args:
        clock: Supplies ``created_at`` for inserted tokens
    """

    def __init__(self, clock: IClock):
        self._clock = clock
        self._tokens: Dict[int, Token] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    async def insert(self, user_id: int, code: str) -> Token:
        with self._lock:
            token = Token(
                id=self._next_id,
                user_id=user_id,
                code=code,
                completed=False,
                created_at=self._clock.now(),
            )
            self._tokens[token.id] = token
            self._next_id += 1
        logger.debug("Token inserted", token_id=token.id, user_id=user_id)
        return token

    async def find_one(self, token_filter: TokenFilter) -> Optional[Token]:
        with self._lock:
            return next((t for t in self._tokens.values() if token_filter.matches(t)), None)

    async def conditional_update(
        self, token_id: int, expected: TokenFilter, changes: TokenChanges
    ) -> bool:
        with self._lock:
            current = self._tokens.get(token_id)
            if current is None or not expected.matches(current):
                return False
            self._tokens[token_id] = replace(
                current, completed=changes.completed, completed_at=changes.completed_at
            )
            return True

    async def delete(self, token_id: int) -> bool:
        with self._lock:
            return self._tokens.pop(token_id, None) is not None

    async def delete_where(self, token_filter: TokenFilter) -> int:
        with self._lock:
            doomed = [token_id for token_id, t in self._tokens.items() if token_filter.matches(t)]
            for token_id in doomed:
                del self._tokens[token_id]
        logger.debug("Tokens deleted by filter", count=len(doomed))
        return len(doomed)

    def __len__(self) -> int:
        with self._lock:
            return len(self._tokens)
