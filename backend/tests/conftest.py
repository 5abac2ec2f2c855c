"""Root conftest - shared test configuration, async DB and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database with foreign keys enforced
    - Concurrency tests use a file-backed database so each session has its own connection
    - get_db dependency overridden to use the test database
    - db_manager patched for code paths that bypass get_db
    - Seeding and assertions use short-lived sessions, never the request's session
"""

import os

os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("SEED_CATALOGUE", "false")

import pytest  # noqa: E402
from sqlalchemy import func, select  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.db.base import Base  # noqa: E402
from app.infrastructure.database import (  # noqa: E402
    DatabaseSessionManager, enable_sqlite_foreign_keys, get_db,
)
from app.models.infection_report import InfectionReport  # noqa: E402
from app.models.ownership import OwnershipLine  # noqa: E402
from app.models.survivor import Survivor  # noqa: E402
from app.models.trade_item import TradeItem  # noqa: E402
import app.infrastructure.database as db_module  # noqa: E402
from app.main import app  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
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


class LedgerFixture:
    """Seeds catalogue/survivors and reads ledger state through fresh sessions."""

    def __init__(self, session_factory):
        self._factory = session_factory

    async def item(self, name: str, points: int) -> int:
        async with self._factory() as db:
            item = TradeItem(name=name, points=points)
            db.add(item)
            await db.commit()
            return item.id

    async def survivor(
        self,
        name: str = "Rick Grimes",
        items: dict[int, int] | None = None,
        infected: bool = False,
    ) -> int:
        async with self._factory() as db:
            survivor = Survivor(
                name=name, age=16, gender="male",
                latitude=34.0522, longitude=-118.2437,
                infected=infected,
                ownership_lines=[
                    OwnershipLine(item_id=item_id, quantity=quantity)
                    for item_id, quantity in (items or {}).items()
                ],
            )
            db.add(survivor)
            await db.commit()
            return survivor.id

    async def holdings(self, survivor_id: int) -> dict[int, int]:
        async with self._factory() as db:
            result = await db.execute(
                select(OwnershipLine.item_id, OwnershipLine.quantity).where(
                    OwnershipLine.survivor_id == survivor_id,
                ),
            )
            return {item_id: qty for item_id, qty in result.all() if qty}

    async def is_infected(self, survivor_id: int) -> bool:
        async with self._factory() as db:
            return await db.scalar(
                select(Survivor.infected).where(Survivor.id == survivor_id),
            )

    async def report_count(self, accused_id: int) -> int:
        async with self._factory() as db:
            return await db.scalar(
                select(func.count()).select_from(InfectionReport).where(
                    InfectionReport.accused_id == accused_id,
                ),
            )


@pytest.fixture
async def ledger(test_session_factory):
    return LedgerFixture(test_session_factory)


@pytest.fixture
async def file_engine(tmp_path):
    """File-backed SQLite with a real connection pool, for concurrent sessions."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'exchange.db'}", echo=False,
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def file_session_factory(file_engine):
    return async_sessionmaker(
        file_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def file_ledger(file_session_factory):
    return LedgerFixture(file_session_factory)


@pytest.fixture
async def catalogue(ledger):
    """Four items: Water 10, Soup 8, First Aid Kit 9, Rifle 5."""
    return {
        "water": await ledger.item("Water", 10),
        "soup": await ledger.item("Soup", 8),
        "first_aid": await ledger.item("First Aid Kit", 9),
        "rifle": await ledger.item("Rifle", 5),
    }
