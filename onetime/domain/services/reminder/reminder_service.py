"""Credential Reset (Reminder) Service.

Completing a reminder changes the user's credential. The steps run in a
fixed order:

1. Locate the pending, unexpired reminder for ``(user_id, code)``.
2. Ask the user directory whether the proposed credential is acceptable.
   A rejection leaves the reminder pending so the user can try again.
3. Ask the user directory to store the new credential. If this raises, the
   reminder stays pending and the error reaches the caller.
4. Mark the reminder completed with a conditional update.

If step 4 loses a race against a concurrent completion, the credential set
in step 3 is kept. No compensating rollback is attempted.
"""

import structlog

from onetime.domain.interfaces.services import IUserDirectory
from onetime.domain.services.base import TokenService
from onetime.domain.services.token_lifecycle import TokenLifecycle

logger = structlog.get_logger(__name__)


class ReminderService(TokenService):
    """Reminder tokens whose completion resets a credential.

    Args:
        lifecycle: Lifecycle configured for the reminder store and window
        user_directory: Validates and stores credentials
    """

    def __init__(self, lifecycle: TokenLifecycle, user_directory: IUserDirectory):
        super().__init__(lifecycle)
        self._user_directory = user_directory

    async def complete(self, user_id: int, code: str, credential: str) -> bool:
        """Reset the user's credential using a reminder code.

        Args:
            user_id: User presenting the code
            code: Reminder code
            credential: Proposed new credential

        Returns:
            bool: True if the credential was updated and this call completed
            the reminder
        """
        token = await self._lifecycle.find_pending(user_id, code)
        if token is None:
            return False

        if not await self._user_directory.validate_credential(user_id, credential):
            logger.info(
                "Reminder completion rejected by credential policy",
                user_id=user_id,
                token_id=token.id,
            )
            return False

        await self._user_directory.update_credential(user_id, credential)

        completed = await self._lifecycle.mark_completed(token)
        if not completed:
            logger.warning(
                "Credential updated but reminder was completed concurrently",
                user_id=user_id,
                token_id=token.id,
            )
        return completed
