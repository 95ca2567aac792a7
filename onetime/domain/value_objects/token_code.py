"""Token code value object and generator.

Codes are bearer secrets: whoever presents one may complete the token it
belongs to. They are drawn from the operating system CSPRNG through the
``secrets`` module over an alphanumeric alphabet, so a 32 character code
carries about 190 bits of entropy.
"""

import secrets
import string
from dataclasses import dataclass
from typing import ClassVar

from onetime.core.config.tokens import MIN_CODE_LENGTH


@dataclass(frozen=True)
class TokenCode:
    """An opaque random code of fixed length.

    Attributes:
        value: The code string
    """

    value: str

    ALPHABET: ClassVar[str] = string.ascii_letters + string.digits
    DEFAULT_LENGTH: ClassVar[int] = MIN_CODE_LENGTH

    def __post_init__(self) -> None:
        if len(self.value) < MIN_CODE_LENGTH:
            raise ValueError(f"Token code must be at least {MIN_CODE_LENGTH} characters long")
        if any(char not in self.ALPHABET for char in self.value):
            raise ValueError("Token code must be alphanumeric")

    @classmethod
    def generate(cls, length: int = DEFAULT_LENGTH) -> "TokenCode":
        """Generate a new code.

        Args:
            length: Number of characters (at least 32)

        Returns:
            TokenCode: New random code

        Raises:
            ValueError: If ``length`` is below the minimum
        """
        if length < MIN_CODE_LENGTH:
            raise ValueError(f"Token code must be at least {MIN_CODE_LENGTH} characters long")
        # Entropy failures from the OS propagate; there is no fallback source.
        return cls(value="".join(secrets.choice(cls.ALPHABET) for _ in range(length)))


class CodeGenerator:
    """Produces codes of a fixed, configured length."""

    def __init__(self, length: int = TokenCode.DEFAULT_LENGTH):
        if length < MIN_CODE_LENGTH:
            raise ValueError(f"Token code must be at least {MIN_CODE_LENGTH} characters long")
        self._length = length

    @property
    def length(self) -> int:
        return self._length

    def generate(self) -> str:
        return TokenCode.generate(self._length).value
