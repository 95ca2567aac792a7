"""Typed query and update objects for token stores."""

import secrets
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from onetime.domain.entities.token import Token


@dataclass(frozen=True)
class TokenFilter:
    """A conjunction of conditions over token fields.

    Fields left as ``None`` do not constrain the match. Time bounds
    mirror the expiry rule: a token is live while
    ``created_at > now - window`` and expired once ``created_at <= now - window``.

    Attributes:
        user_id: Owning user
        code: Exact code
        completed: Completion flag
        created_after: Strict lower bound on ``created_at``
        created_at_or_before: Inclusive upper bound on ``created_at``
    """

    user_id: Optional[int] = None
    code: Optional[str] = None
    completed: Optional[bool] = None
    created_after: Optional[datetime] = None
    created_at_or_before: Optional[datetime] = None

    def matches(self, token: Token) -> bool:
        """Evaluate the filter against an in-memory token."""
        if self.user_id is not None and token.user_id != self.user_id:
            return False
        if self.code is not None and not secrets.compare_digest(token.code.encode(), self.code.encode()):
            return False
        if self.completed is not None and token.completed is not self.completed:
            return False
        if self.created_after is not None and not token.created_at > self.created_after:
            return False
        if self.created_at_or_before is not None and not token.created_at <= self.created_at_or_before:
            return False
        return True


@dataclass(frozen=True)
class TokenChanges:
    """Fields written by a conditional update.

    Completion is the only mutation a token ever receives, so the change set
    is exactly the completion pair.
    """

    completed: bool
    completed_at: datetime

    def __post_init__(self) -> None:
        if not self.completed:
            raise ValueError("A token can only transition to completed")
