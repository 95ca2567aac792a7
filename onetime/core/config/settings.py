"""Main settings and configuration management.

This module composes the settings mixins (app, database, tokens, password)
into a single ``Settings`` class loaded from environment variables and an
optional ``.env`` file.

The module-level ``settings`` instance is read by the wiring factories in
``onetime.infrastructure.dependency_injection``. Services and the token
lifecycle never read it; they receive their configuration through their
constructors.
"""

import logging

from pydantic_settings import SettingsConfigDict

from .app import AppSettings
from .database import DatabaseSettings
from .password import PasswordSettings
from .tokens import TokenSettings

logger = logging.getLogger(__name__)


class Settings(AppSettings, DatabaseSettings, TokenSettings, PasswordSettings):
    """The main settings class that aggregates all configuration mixins."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )


def create_settings() -> Settings:
    """Create a settings instance from the environment.

    Returns:
        Settings: Validated settings instance
    """
    settings_instance = Settings()
    logger.debug(
        "Settings loaded for %s environment (activation window %ss, reminder window %ss)",
        settings_instance.APP_ENV,
        settings_instance.ACTIVATION_EXPIRES,
        settings_instance.REMINDER_EXPIRES,
    )
    return settings_instance


settings = create_settings()
