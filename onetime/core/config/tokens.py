"""
Activation and reminder token settings.
"""
from datetime import timedelta

from pydantic import Field
from pydantic_settings import BaseSettings

MIN_CODE_LENGTH = 32
DEFAULT_EXPIRES_SECONDS = 259200


class TokenSettings(BaseSettings):
    """
    Defines code length and validity windows for both token kinds.

    Windows are expressed in seconds, measured from the moment the store
    inserted the token.
    """
    TOKEN_CODE_LENGTH: int = Field(ge=MIN_CODE_LENGTH, default=MIN_CODE_LENGTH)
    ACTIVATION_EXPIRES: int = Field(gt=0, default=DEFAULT_EXPIRES_SECONDS)
    REMINDER_EXPIRES: int = Field(gt=0, default=DEFAULT_EXPIRES_SECONDS)

    @property
    def activation_window(self) -> timedelta:
        return timedelta(seconds=self.ACTIVATION_EXPIRES)

    @property
    def reminder_window(self) -> timedelta:
        return timedelta(seconds=self.REMINDER_EXPIRES)
