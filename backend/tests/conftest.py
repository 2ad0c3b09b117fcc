"""Root conftest — shared test configuration, async DB, and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test engine
    - db_manager patched so readiness probes see the test engine
    - bcrypt runs at its minimum work factor (tests stay fast)
    - Foreign keys are enforced, as on the app's own SQLite engines

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for forum queries
    - Env set before any app import: get_settings() is cached on first use
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SESSION_SECRET_KEY", "test-session-secret")
os.environ.setdefault("CREATE_SCHEMA_ON_STARTUP", "false")

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from app.db.base import Base
from app.infrastructure.database import (
    get_db, DatabaseSessionManager, enable_sqlite_foreign_keys,
)
from app.infrastructure.forum_repository import SqlAlchemyForumRepository
from app.infrastructure.password_hashing import hash_password
import app.infrastructure.database as db_module
import app.models  # noqa: F401
from app.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def repo(test_db):
    return SqlAlchemyForumRepository(test_db)


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def alice(repo):
    """Registered user alice / pw1234, inserted directly."""
    await repo.insert_user("alice", await hash_password("pw1234", rounds=4))
    await repo.commit()
    return "alice"


class StepClock:
    """Deterministic clock: returns queued timestamps, then repeats the last."""

    def __init__(self, *times: int):
        self.times = list(times)
        self.last = times[0] if times else 0

    def __call__(self) -> int:
        if self.times:
            self.last = self.times.pop(0)
        return self.last


@pytest.fixture
def step_clock():
    return StepClock
