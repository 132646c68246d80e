"""
Shared fixtures: a migrated on-disk SQLite database per test and a
``ServiceContext`` wired to it.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

from auth.jwt import TokenIssuer
from core.context import ServiceContext
from database.migrations import upgrade

TEST_SECRET = "test-signing-key-for-minichat-suite-0123456789"
FAST_ROUNDS = 4


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'minichat.db'}")
    await upgrade(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def issuer() -> TokenIssuer:
    return TokenIssuer(TEST_SECRET, expiry_seconds=3600)


@pytest_asyncio.fixture
async def context(engine, issuer):
    ctx = ServiceContext(engine, issuer, bcrypt_rounds=FAST_ROUNDS)
    yield ctx


@pytest_asyncio.fixture
async def session(context):
    async with context.session() as session:
        yield session


@pytest_asyncio.fixture
async def identity_client(context):
    from main import create_identity_app

    app = create_identity_app(context=context)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://identity") as client:
        yield client


@pytest_asyncio.fixture
async def room_client(context):
    from main import create_room_app

    app = create_room_app(context=context)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://room") as client:
        yield client
