from datetime import timedelta

import pytest
import pytest_asyncio

from onetime.domain.entities.token import TokenKind
from onetime.domain.services.activation.activation_service import ActivationService
from onetime.domain.services.token_lifecycle import TokenLifecycle
from onetime.infrastructure.database import build_engine, build_session_factory, create_db_and_tables
from onetime.infrastructure.repositories.in_memory_token_store import InMemoryTokenStore
from onetime.utils.security import build_password_context
from tests.utils.clock import FrozenClock

WINDOW = timedelta(seconds=3600)


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def store(clock):
    return InMemoryTokenStore(clock)


@pytest.fixture
def lifecycle(store, clock):
    return TokenLifecycle(store=store, window=WINDOW, clock=clock, kind=TokenKind.ACTIVATION)


@pytest.fixture
def activations(lifecycle):
    return ActivationService(lifecycle)


@pytest.fixture(scope="session")
def password_context():
    # Minimum bcrypt work factor keeps hashing fast in tests.
    return build_password_context(rounds=4)


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'onetime.db'}")
    await create_db_and_tables(engine)
    yield build_session_factory(engine)
    await engine.dispose()
