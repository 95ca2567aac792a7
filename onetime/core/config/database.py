"""
Database connection settings.
"""
from pydantic import Field
from pydantic_settings import BaseSettings


class DatabaseSettings(BaseSettings):
    """
    Defines the connection used by the SQL token store.

    The URL must name an async driver (``sqlite+aiosqlite``,
    ``postgresql+asyncpg``). Statement timeouts belong in the URL or the
    driver options; the stores never wait on their own.
    """
    DATABASE_URL: str = "sqlite+aiosqlite:///./onetime.db"
    DATABASE_ECHO: bool = False
    DATABASE_POOL_PRE_PING: bool = True
    DATABASE_HEALTH_RETRIES: int = Field(ge=1, default=3)
