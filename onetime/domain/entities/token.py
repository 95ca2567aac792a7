"""Token entity shared by activations and reminders."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


def mask_code(code: str) -> str:
    """Return the loggable prefix of a code; the rest is never logged."""
    return f"{code[:8]}..."


class TokenKind(str, Enum):
    """The two purposes a token is issued for.

    Both kinds have the same shape and lifecycle; they only differ in where
    they are stored and in what completing them does.
    """

    ACTIVATION = "activation"
    REMINDER = "reminder"


@dataclass(frozen=True)
class Token:
    """A single issued activation or reminder bound to one user.

    A token is never mutated in place. The store returns a fresh ``Token``
    after every read, so an instance is a snapshot of the record at the time
    it was read.

    Attributes:
        id: Identifier assigned by the store on insertion
        user_id: Identifier of the owning user (existence is not checked)
        code: Opaque random code handed to the user
        completed: Whether the token has been consumed
        created_at: Insertion timestamp, the sole basis for expiry
        completed_at: Set exactly when ``completed`` is true
    """

    id: int
    user_id: int
    code: str
    completed: bool
    created_at: datetime
    completed_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.completed and self.completed_at is None:
            raise ValueError("A completed token must carry completed_at")
        if not self.completed and self.completed_at is not None:
            raise ValueError("A pending token cannot carry completed_at")

    @property
    def code_prefix(self) -> str:
        """First characters of the code, safe to log."""
        return mask_code(self.code)
