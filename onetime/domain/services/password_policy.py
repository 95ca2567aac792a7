import re
from typing import Optional

from onetime.core.config.settings import Settings, settings as default_settings
from onetime.core.exceptions import PasswordPolicyError

SPECIAL_CHARS_PATTERN = r"[!@#$%^&*(),.?:{}|<>_=\-\[\];'\"/\\+~`]"


class PasswordPolicyValidator:
    """Validates passwords against a defined security policy.

    The policy requires passwords to meet a minimum length and, depending on
    configuration, include uppercase letters, lowercase letters, digits and
    special characters.
    """

    def __init__(self, config: Optional[Settings] = None):
        config = config or default_settings
        self.min_length = config.PASSWORD_MIN_LENGTH
        self.require_uppercase = config.PASSWORD_REQUIRE_UPPERCASE
        self.require_lowercase = config.PASSWORD_REQUIRE_LOWERCASE
        self.require_digit = config.PASSWORD_REQUIRE_DIGIT
        self.require_special_char = config.PASSWORD_REQUIRE_SPECIAL_CHAR

    def validate(self, password: str) -> None:
        """Validates the given password against the policy.

        Args:
            password (str): The password to validate.

        Raises:
            PasswordPolicyError: If the password does not meet the policy requirements.
        """
        if len(password) < self.min_length:
            raise PasswordPolicyError(f"Password must be at least {self.min_length} characters long")

        if self.require_uppercase and not re.search(r"[A-Z]", password):
            raise PasswordPolicyError("Password must contain at least one uppercase letter")

        if self.require_lowercase and not re.search(r"[a-z]", password):
            raise PasswordPolicyError("Password must contain at least one lowercase letter")

        if self.require_digit and not re.search(r"\d", password):
            raise PasswordPolicyError("Password must contain at least one digit")

        if self.require_special_char and not re.search(SPECIAL_CHARS_PATTERN, password):
            raise PasswordPolicyError("Password must contain at least one special character")
