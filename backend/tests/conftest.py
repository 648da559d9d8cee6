"""Root conftest — shared test configuration and store fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database with the schema created
    - Ids come from a deterministic sequence, timestamps from a ticking fake clock

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for the store contract
    - Clock ticks one second per read so insertion order is observable in created_at
"""

import os
from datetime import datetime, timedelta, timezone

# Ensure tests never pick up a developer database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402

from user_dal.db.base import Base  # noqa: E402
from user_dal.infrastructure.database import DatabaseSessionManager  # noqa: E402
from user_dal.infrastructure.user_repository import SqlUserRepository  # noqa: E402

EPOCH = datetime(2020, 7, 23, tzinfo=timezone.utc)


class SequentialIdGenerator:
    """Deterministic IdGenerator: 00000000-0000-0000-0000-000000000001, ...002, ..."""

    def __init__(self, ids: list[str] | None = None):
        self._fixed = list(ids or [])
        self.count = 0

    def generate(self) -> str:
        self.count += 1
        if self._fixed:
            return self._fixed.pop(0)
        return f"00000000-0000-0000-0000-{self.count:012d}"


class FakeClock:
    """Clock that advances one second on every read."""

    def __init__(self, start: datetime = EPOCH, step: timedelta = timedelta(seconds=1)):
        self.start = start
        self.current = start
        self.step = step

    def now(self) -> datetime:
        value = self.current
        self.current += self.step
        return value


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_manager(test_engine):
    return DatabaseSessionManager.from_engine(test_engine)


@pytest.fixture
def id_generator():
    return SequentialIdGenerator()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
async def store(db_manager, id_generator, clock):
    return SqlUserRepository(db_manager, id_generator, clock)


@pytest.fixture
def store_factory(db_manager, clock):
    """Build a store with a chosen id sequence and, optionally, its own clock step."""
    def make(
        ids: list[str] | None = None,
        id_generator=None,
        clock_step: timedelta | None = None,
    ) -> SqlUserRepository:
        store_clock = clock if clock_step is None else FakeClock(step=clock_step)
        return SqlUserRepository(
            db_manager, id_generator or SequentialIdGenerator(ids), store_clock,
        )
    return make
