"""SQL token store tests against a file-backed SQLite database."""

import asyncio
from datetime import timedelta

import pytest
import pytest_asyncio

from onetime.domain.entities.token import TokenKind
from onetime.domain.services.token_lifecycle import TokenLifecycle
from onetime.domain.value_objects.token_filter import TokenChanges, TokenFilter
from onetime.infrastructure.persistence.models import ActivationRecord, ReminderRecord
from onetime.infrastructure.repositories.sql_token_store import SqlTokenStore


@pytest_asyncio.fixture
async def sql_store(session_factory, clock):
    return SqlTokenStore(session_factory, ActivationRecord, clock)


@pytest.mark.asyncio
async def test_insert_round_trips_timezone_aware_timestamps(sql_store, clock):
    token = await sql_store.insert(7, "a" * 32)

    assert token.id is not None
    assert token.created_at == clock.now()
    assert token.created_at.tzinfo is not None

    found = await sql_store.find_one(TokenFilter(user_id=7))
    assert found == token


@pytest.mark.asyncio
async def test_find_one_applies_every_condition(sql_store, clock):
    old = await sql_store.insert(7, "a" * 32)
    clock.advance(100)
    new = await sql_store.insert(7, "b" * 32)

    assert await sql_store.find_one(TokenFilter(user_id=7)) == old
    assert await sql_store.find_one(TokenFilter(user_id=7, code="b" * 32)) == new
    assert await sql_store.find_one(TokenFilter(user_id=8)) is None
    assert await sql_store.find_one(TokenFilter(completed=True)) is None
    assert await sql_store.find_one(TokenFilter(created_after=old.created_at)) == new
    assert await sql_store.find_one(TokenFilter(created_at_or_before=old.created_at)) == old
    assert await sql_store.find_one(
        TokenFilter(created_at_or_before=old.created_at - timedelta(seconds=1))
    ) is None


@pytest.mark.asyncio
async def test_conditional_update_is_guarded(sql_store, clock):
    token = await sql_store.insert(7, "a" * 32)
    changes = TokenChanges(completed=True, completed_at=clock.now())

    assert await sql_store.conditional_update(token.id, TokenFilter(completed=False), changes)
    assert not await sql_store.conditional_update(token.id, TokenFilter(completed=False), changes)
    assert not await sql_store.conditional_update(token.id + 1, TokenFilter(completed=False), changes)

    stored = await sql_store.find_one(TokenFilter(completed=True))
    assert stored.id == token.id
    assert stored.completed_at == clock.now()


@pytest.mark.asyncio
async def test_delete_and_delete_where(sql_store):
    first = await sql_store.insert(1, "a" * 32)
    await sql_store.insert(2, "b" * 32)
    await sql_store.insert(2, "c" * 32)

    assert await sql_store.delete(first.id) is True
    assert await sql_store.delete(first.id) is False
    assert await sql_store.delete_where(TokenFilter(user_id=2)) == 2
    assert await sql_store.find_one(TokenFilter()) is None


@pytest.mark.asyncio
async def test_token_kinds_use_separate_tables(session_factory, clock):
    activations = SqlTokenStore(session_factory, ActivationRecord, clock)
    reminders = SqlTokenStore(session_factory, ReminderRecord, clock)

    await activations.insert(7, "a" * 32)

    assert await reminders.find_one(TokenFilter(user_id=7)) is None


@pytest.mark.asyncio
async def test_concurrent_completions_succeed_exactly_once(sql_store, clock):
    lifecycle = TokenLifecycle(store=sql_store, window=timedelta(hours=1), clock=clock, kind=TokenKind.ACTIVATION)
    token = await lifecycle.create(7)

    results = await asyncio.gather(*(lifecycle.complete(7, token.code) for _ in range(5)))

    assert results.count(True) == 1
    assert (await lifecycle.find_completed(7)).id == token.id


@pytest.mark.asyncio
async def test_lifecycle_expiry_and_sweep(sql_store, clock):
    lifecycle = TokenLifecycle(store=sql_store, window=timedelta(hours=1), clock=clock, kind=TokenKind.ACTIVATION)
    expired = await lifecycle.create(1)
    done = await lifecycle.create(2)
    await lifecycle.complete(2, done.code)

    clock.advance(1800)
    fresh = await lifecycle.create(3)

    clock.advance(1800)
    assert await lifecycle.complete(1, expired.code) is False
    assert await lifecycle.sweep_expired() == 1

    assert await lifecycle.find_active(1) is None
    assert (await lifecycle.find_completed(2)).id == done.id
    assert await lifecycle.find_active(3, fresh.code) == fresh
