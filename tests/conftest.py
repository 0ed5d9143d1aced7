import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.dependencies import get_db
from app.db.session import Base
from app.main import app
from app.models import user, bet, poker_session, poker_player  # noqa: F401


@pytest_asyncio.fixture
async def test_engine():
    """Fresh in-memory database per test"""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_engine):
    return sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def users(client):
    """Alice, Bob and Carol, keyed by name"""
    out = {}
    for name in ("Alice", "Bob", "Carol"):
        res = await client.post("/api/users", json={"name": name})
        assert res.status_code == 201
        out[name] = res.json()["id"]
    return out


@pytest_asyncio.fixture
async def make_bet(client):
    async def _make_bet(user_id, opponent_id, amount, outcome, bet_date="2026-03-14", wager_type="Pool"):
        res = await client.post("/api/bets", json={
            "user_id": user_id,
            "opponent_id": opponent_id,
            "wager_type": wager_type,
            "amount": amount,
            "bet_date": bet_date,
            "outcome": outcome,
        })
        assert res.status_code == 201, res.text
        return res.json()

    return _make_bet
