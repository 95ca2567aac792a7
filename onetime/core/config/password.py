"""
Password policy and hashing settings.
"""
from pydantic import Field
from pydantic_settings import BaseSettings


class PasswordSettings(BaseSettings):
    """
    Defines the policy a new password must satisfy when a reminder completes,
    and the bcrypt work factor used to hash it.
    """
    PASSWORD_MIN_LENGTH: int = Field(ge=1, default=8)
    PASSWORD_REQUIRE_UPPERCASE: bool = True
    PASSWORD_REQUIRE_LOWERCASE: bool = True
    PASSWORD_REQUIRE_DIGIT: bool = True
    PASSWORD_REQUIRE_SPECIAL_CHAR: bool = True
    BCRYPT_WORK_FACTOR: int = Field(ge=4, le=31, default=12)
