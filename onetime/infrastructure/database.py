"""
Asynchronous Database Utilities Module

Builds the SQLAlchemy asyncio engine and session factory used by the SQL
token store and user repository, creates the tables, and checks
connectivity.

Key Components:
    - build_engine: Async engine for the configured DATABASE_URL.
    - build_session_factory: Factory for AsyncSession objects.
    - create_db_and_tables: Creates the users, activations and reminders tables.
    - check_database_health: Connectivity probe, retried on OperationalError.
"""

import time
from typing import Optional

from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from onetime.core.config.settings import Settings, settings as default_settings
from onetime.core.logging import logger

# Register table metadata before create_all runs.
from onetime.domain.entities.user import User  # noqa: F401
from onetime.infrastructure.persistence.models import ActivationRecord, ReminderRecord  # noqa: F401


def build_engine(url: Optional[str] = None, config: Optional[Settings] = None) -> AsyncEngine:
    """
    Create the async engine.

    Args:
        url: Database URL, defaults to ``DATABASE_URL`` from settings.
        config: Settings instance, defaults to the module-level settings.

    Returns:
        AsyncEngine: Engine bound to the database.
    """
    config = config or default_settings
    return create_async_engine(
        url or config.DATABASE_URL,
        echo=config.DATABASE_ECHO,
        pool_pre_ping=config.DATABASE_POOL_PRE_PING,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def create_db_and_tables(engine: AsyncEngine) -> None:
    """
    Creates database tables with logging.
    """
    start_time = time.time()
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info(
        "database_tables_created",
        execution_time=time.time() - start_time,
        tables=list(SQLModel.metadata.tables.keys()),
    )


HEALTH_CHECK_WAIT = wait_exponential(multiplier=1, min=1, max=10)


async def _ping(engine: AsyncEngine, attempts: int) -> None:
    async for attempt in AsyncRetrying(
        stop=stop_after_attempt(attempts),
        wait=HEALTH_CHECK_WAIT,
        retry=retry_if_exception_type(OperationalError),
        reraise=True,
    ):
        with attempt:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))


async def check_database_health(engine: AsyncEngine, config: Optional[Settings] = None) -> bool:
    """
    Performs a health check on the database connection.

    Transient ``OperationalError`` failures are retried with exponential
    backoff, up to ``DATABASE_HEALTH_RETRIES`` attempts, before the check is
    reported as failed.

    Args:
        engine: Engine to check.
        config: Settings instance, defaults to the module-level settings.

    Returns:
        bool: True if the database answered, False otherwise.
    """
    config = config or default_settings
    start_time = time.time()
    try:
        await _ping(engine, config.DATABASE_HEALTH_RETRIES)
    except Exception as e:
        logger.error(
            "database_health_check_failed",
            error=str(e),
            execution_time=time.time() - start_time,
        )
        return False

    logger.info("database_health_check_success", execution_time=time.time() - start_time)
    return True
