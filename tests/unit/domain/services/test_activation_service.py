import pytest


@pytest.mark.asyncio
async def test_activation_flow(activations):
    token = await activations.create(7)

    assert await activations.exists(7) == token
    assert await activations.exists(7, token.code) == token
    assert await activations.completed(7) is None

    assert await activations.complete(7, token.code) is True

    assert await activations.exists(7) is None
    assert (await activations.completed(7)).id == token.id


@pytest.mark.asyncio
async def test_second_completion_fails(activations):
    token = await activations.create(7)

    assert await activations.complete(7, token.code) is True
    assert await activations.complete(7, token.code) is False


@pytest.mark.asyncio
async def test_remove_requires_completed_activation(activations):
    token = await activations.create(7)
    assert await activations.remove(7) is False

    await activations.complete(7, token.code)

    assert await activations.remove(7) is True
    assert await activations.completed(7) is None


@pytest.mark.asyncio
async def test_remove_expired(activations, clock):
    token = await activations.create(7)
    clock.advance(3601)

    assert await activations.complete(7, token.code) is False
    assert await activations.remove_expired() == 1
    assert await activations.exists(7) is None
    assert await activations.completed(7) is None
