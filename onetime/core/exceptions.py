"""Structured exception hierarchy for onetime.

Every error carries a human-readable ``message`` for logging and a
machine-readable ``code`` for programmatic handling.

Expected negative outcomes of the token lifecycle (wrong code, expired token,
already completed, nothing to remove) are never raised; they are returned as
``False`` or ``None``. The exceptions below cover collaborator failures and
input that violates a policy.
"""

from typing import Final

__all__: Final = [
    "OnetimeError",
    "ValidationError",
    "PasswordPolicyError",
    "PasswordReuseError",
    "UserNotFoundError",
]


class OnetimeError(Exception):
    """Base exception class for all custom errors in the package.

    Attributes:
        message (str): A human-readable error message, suitable for logging.
        code (str): A unique, machine-readable error code.
    """

    message: str
    code: str = "generic_error"

    def __init__(self, message: str, code: str = "generic_error"):
        self.message = message
        self.code = code
        Exception.__init__(self, self.message)

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Validation errors
# ---------------------------------------------------------------------------


class ValidationError(OnetimeError):
    """Raised for general data validation failures."""

    def __init__(self, message: str, code: str = "validation_error"):
        super().__init__(message, code)


class PasswordPolicyError(ValidationError):
    """Raised when a password does not meet the configured security policy.

    The user directory catches it and reports the credential as invalid, so
    it never escapes a reminder completion.
    """

    def __init__(self, message: str, code: str = "password_policy_error"):
        super().__init__(message, code)


class PasswordReuseError(ValidationError):
    """Raised when a reset would set the password the user already has."""

    def __init__(self, message: str, code: str = "password_reuse_error"):
        super().__init__(message, code)


# ---------------------------------------------------------------------------
# Lookup errors
# ---------------------------------------------------------------------------


class UserNotFoundError(OnetimeError):
    """Raised when a credential update targets a user that does not exist."""

    def __init__(self, message: str = "User not found", code: str = "user_not_found"):
        super().__init__(message, code)
