"""Domain interfaces for dependency inversion.

The token lifecycle depends only on these contracts; concrete adapters live
in ``onetime.infrastructure``.
"""

from .infrastructure import IClock
from .repositories import ITokenStore, IUserRepository
from .services import IUserDirectory

__all__ = ["IClock", "ITokenStore", "IUserDirectory", "IUserRepository"]
