"""Service test fixtures — async DB, RecordService, and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - Retry delays are recorded, never slept
    - Fault injection is off unless a test overrides get_fault_decision

Design Decisions:
    - SQLite in-memory with StaticPool: all sessions share one connection, so
      the tables created by the engine fixture are visible everywhere
    - db_manager patched: the readiness probe uses it directly
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)
from sqlalchemy.pool import StaticPool

import person_registry.infrastructure.database as db_module
import person_registry.models  # noqa: F401
from person_registry.api.dependencies import (
    get_fault_decision, get_retry_executor,
)
from person_registry.db.base import Base
from person_registry.infrastructure.database import (
    DatabaseSessionManager, get_db,
)
from person_registry.infrastructure.retry_executor import RetryExecutor, never_fail
from person_registry.main import app
from person_registry.schemas.person import PersonCreate
from person_registry.services.person_repository import SqlPersonRepository
from person_registry.services.record_service import RecordService


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
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
def sleeps():
    """Delays the retry executor asked for, in order."""
    return []


@pytest.fixture
def retry_executor(sleeps):
    async def fake_sleep(seconds: float) -> None:
        sleeps.append(seconds)

    return RetryExecutor(max_retries=3, backoff_base_seconds=2.0, sleep=fake_sleep)


@pytest.fixture
def record_service(test_db, retry_executor):
    return RecordService(SqlPersonRepository(test_db), retry_executor)


@pytest.fixture
def make_person():
    """Build a PersonCreate from plain snake_case dicts."""
    def _make(record_id, *, gender=None, deceased=False,
              addresses=(), dates=(), names=()):
        return PersonCreate(
            id=record_id,
            gender=gender,
            deceased=deceased,
            addresses=list(addresses),
            dates=list(dates),
            names=list(names),
        )
    return _make


@pytest.fixture
async def client(test_engine, test_session_factory, retry_executor):
    """FastAPI test client with DB and retry dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_retry_executor] = lambda: retry_executor
    app.dependency_overrides[get_fault_decision] = lambda: never_fail

    # Patch db_manager for the readiness probe
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
