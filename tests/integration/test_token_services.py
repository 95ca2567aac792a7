"""Activation and reminder services wired to SQLite through the factories."""

import pytest
import pytest_asyncio

from onetime.core.config.settings import Settings
from onetime.domain.entities.user import User
from onetime.domain.services.password_policy import PasswordPolicyValidator
from onetime.infrastructure.dependency_injection.token_dependencies import (
    build_activation_service,
    build_reminder_service,
)
from onetime.infrastructure.repositories.user_repository import SqlUserRepository
from onetime.infrastructure.services.password_user_directory import PasswordUserDirectory
from onetime.utils.security import hash_password, verify_password

CONFIG = Settings(ACTIVATION_EXPIRES=3600, REMINDER_EXPIRES=1800, TOKEN_CODE_LENGTH=40)


@pytest_asyncio.fixture
async def user_repository(session_factory):
    return SqlUserRepository(session_factory)


@pytest_asyncio.fixture
async def alice(user_repository, password_context):
    return await user_repository.save(
        User(username="alice", hashed_password=hash_password("Old-Passw0rd!", password_context))
    )


@pytest_asyncio.fixture
async def reminders(session_factory, user_repository, password_context, clock):
    directory = PasswordUserDirectory(
        user_repository,
        policy=PasswordPolicyValidator(CONFIG),
        password_context=password_context,
        clock=clock,
    )
    return build_reminder_service(session_factory, directory, config=CONFIG, clock=clock)


@pytest.mark.asyncio
async def test_activation_service_uses_configured_window_and_length(session_factory, clock):
    activations = build_activation_service(session_factory, config=CONFIG, clock=clock)
    token = await activations.create(1)

    assert len(token.code) == 40

    clock.advance(3599)
    assert await activations.complete(1, token.code) is True
    assert await activations.remove(1) is True
    assert await activations.completed(1) is None


@pytest.mark.asyncio
async def test_reminder_resets_password(reminders, user_repository, alice, password_context):
    token = await reminders.create(alice.id)

    assert await reminders.complete(alice.id, token.code, "weakpass") is False
    assert await reminders.exists(alice.id, token.code) == token

    assert await reminders.complete(alice.id, token.code, "Brand-N3w-Pass!") is True
    assert await reminders.complete(alice.id, token.code, "An0ther-Pass!") is False

    stored = await user_repository.get_by_id(alice.id)
    assert verify_password("Brand-N3w-Pass!", stored.hashed_password, password_context)
    assert stored.updated_at is not None


@pytest.mark.asyncio
async def test_reminder_window_is_separate_from_activation_window(reminders, alice, clock):
    token = await reminders.create(alice.id)
    clock.advance(1800)

    assert await reminders.complete(alice.id, token.code, "Brand-N3w-Pass!") is False
    assert await reminders.remove_expired() == 1


@pytest.mark.asyncio
async def test_reminder_for_unknown_user_fails(reminders):
    token = await reminders.create(999)
    assert await reminders.complete(999, token.code, "Brand-N3w-Pass!") is False
