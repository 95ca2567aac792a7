"""Factories wiring token services to their infrastructure.

This is the only place that reads the module-level settings to configure a
``TokenLifecycle``; everything below it receives plain constructor
arguments.

Usage:
    engine = build_engine()
    session_factory = build_session_factory(engine)
    activations = build_activation_service(session_factory)
    reminders = build_reminder_service(
        session_factory,
        PasswordUserDirectory(SqlUserRepository(session_factory)),
    )
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from onetime.core.config.settings import Settings, settings as default_settings
from onetime.domain.entities.token import TokenKind
from onetime.domain.interfaces.infrastructure import IClock
from onetime.domain.interfaces.services import IUserDirectory
from onetime.domain.services.activation.activation_service import ActivationService
from onetime.domain.services.reminder.reminder_service import ReminderService
from onetime.domain.services.token_lifecycle import TokenLifecycle
from onetime.domain.value_objects.token_code import CodeGenerator
from onetime.infrastructure.persistence.models import ActivationRecord, ReminderRecord
from onetime.infrastructure.repositories.sql_token_store import SqlTokenStore
from onetime.infrastructure.services.clock import SystemClock


def build_activation_service(
    session_factory: async_sessionmaker[AsyncSession],
    config: Optional[Settings] = None,
    clock: Optional[IClock] = None,
) -> ActivationService:
    """Create an activation service backed by the ``activations`` table."""
    config = config or default_settings
    clock = clock or SystemClock()
    lifecycle = TokenLifecycle(
        store=SqlTokenStore(session_factory, ActivationRecord, clock),
        window=config.activation_window,
        clock=clock,
        code_generator=CodeGenerator(config.TOKEN_CODE_LENGTH),
        kind=TokenKind.ACTIVATION,
    )
    return ActivationService(lifecycle)


def build_reminder_service(
    session_factory: async_sessionmaker[AsyncSession],
    user_directory: IUserDirectory,
    config: Optional[Settings] = None,
    clock: Optional[IClock] = None,
) -> ReminderService:
    """Create a reminder service backed by the ``reminders`` table."""
    config = config or default_settings
    clock = clock or SystemClock()
    lifecycle = TokenLifecycle(
        store=SqlTokenStore(session_factory, ReminderRecord, clock),
        window=config.reminder_window,
        clock=clock,
        code_generator=CodeGenerator(config.TOKEN_CODE_LENGTH),
        kind=TokenKind.REMINDER,
    )
    return ReminderService(lifecycle, user_directory)
