"""
Application-wide settings.
"""
from pydantic_settings import BaseSettings


class AppSettings(BaseSettings):
    """
    Defines the environment name and how log output is rendered.

    LOG_JSON switches structlog between the JSON renderer used in deployed
    environments and the console renderer used during development.
    """
    PROJECT_NAME: str = "onetime"
    APP_ENV: str = "development"

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False
