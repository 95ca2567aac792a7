"""Account Activation Service.

Activation tokens prove that whoever registered an account can receive the
code sent to its owner. Completing one has no side effect beyond consuming
the token; activating the account itself is left to the caller.
"""

from onetime.domain.services.base import TokenService


class ActivationService(TokenService):
    """Activation tokens: create, check, complete, remove.

    Usage:
        token = await activations.create(user.id)
        # deliver token.code to the user
        if await activations.complete(user.id, presented_code):
            user.is_active = True
    """

    async def complete(self, user_id: int, code: str) -> bool:
        """Consume the user's pending activation matching ``code``.

        Returns:
            bool: True only for the call that completed the token
        """
        return await self._lifecycle.complete(user_id, code)
