"""Password-based user directory.

Implements the credential step of reminder completion against the ``users``
table: a proposed password is acceptable when the user exists, the password
satisfies the configured policy, and it differs from the current one.
"""

from datetime import timezone
from typing import Optional

import structlog
from passlib.context import CryptContext

from onetime.core.exceptions import PasswordPolicyError, PasswordReuseError, UserNotFoundError
from onetime.domain.interfaces.infrastructure import IClock
from onetime.domain.interfaces.repositories import IUserRepository
from onetime.domain.interfaces.services import IUserDirectory
from onetime.domain.services.password_policy import PasswordPolicyValidator
from onetime.infrastructure.services.clock import SystemClock
from onetime.utils.security import hash_password, pwd_context, verify_password

logger = structlog.get_logger(__name__)


class PasswordUserDirectory(IUserDirectory):
    """``IUserDirectory`` backed by a user repository and bcrypt hashes.

    Args:
        user_repository: Loads and saves users
        policy: Password policy, defaults to the configured one
        password_context: Crypt context used for hashing and reuse checks
        clock: Source of ``updated_at``
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        policy: Optional[PasswordPolicyValidator] = None,
        password_context: CryptContext = pwd_context,
        clock: Optional[IClock] = None,
    ):
        self._user_repository = user_repository
        self._policy = policy or PasswordPolicyValidator()
        self._password_context = password_context
        self._clock = clock or SystemClock()

    async def validate_credential(self, user_id: int, proposed: str) -> bool:
        user = await self._user_repository.get_by_id(user_id)
        if user is None:
            logger.warning("Credential validation for unknown user", user_id=user_id)
            return False

        try:
            self._policy.validate(proposed)
            self._check_reuse(user.hashed_password, proposed)
        except (PasswordPolicyError, PasswordReuseError) as e:
            logger.info(
                "Proposed credential rejected",
                user_id=user_id,
                reason=e.code,
            )
            return False

        return True

    async def update_credential(self, user_id: int, proposed: str) -> None:
        """Hash and store the new password.

        Raises:
            UserNotFoundError: If the user does not exist
        """
        user = await self._user_repository.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(f"User {user_id} not found")

        user.hashed_password = hash_password(proposed, self._password_context)
        user.updated_at = self._clock.now().astimezone(timezone.utc)
        await self._user_repository.save(user)

        logger.info("Credential updated", user_id=user_id)

    def _check_reuse(self, hashed_password: Optional[str], proposed: str) -> None:
        if hashed_password and verify_password(proposed, hashed_password, self._password_context):
            raise PasswordReuseError("New password must differ from the current password")
