from .token import Token, TokenKind
from .user import User

__all__ = ["Token", "TokenKind", "User"]
