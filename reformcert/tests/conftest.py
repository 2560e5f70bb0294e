"""
Test configuration for reformcert.

sys.path includes the project root so 'from reformcert...' resolves whether
pytest runs from the project root or from reformcert/.

Database tests run against in-memory SQLite (aiosqlite). StaticPool keeps a
single connection alive so every session sees the same database.
"""
import sys
from pathlib import Path

_project_root = Path(__file__).parent.parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import reformcert.models  # noqa: F401  (registers tables on Base.metadata)
from reformcert.database import Base, get_db
from reformcert.engine.catalogs import CatalogSet
from reformcert.engine.schemas import Category, WorkTypeDefinition
from reformcert.main import app


# ---------------------------------------------------------------------------
# Fixture catalogs: round prices so expected figures are easy to read
# ---------------------------------------------------------------------------

def _entry(code, category, unit_price, unit="式", **extra) -> WorkTypeDefinition:
    return WorkTypeDefinition(
        code=code, name=code, category=category, unit_price=unit_price, unit=unit, **extra,
    )


FIXTURE_TABLES = {
    Category.seismic: [_entry("wall", "木造住宅", 100_000, "㎡")],
    Category.barrier_free: [_entry("handrail", "手すり", 10_000, "m")],
    Category.energy: [
        _entry("window", "窓", 100_000, "㎡", needs_window_ratio=True),
        _entry("solar_panel", "太陽光発電", 500_000, "kW"),
        _entry("solar_heater", "設備", 500_000, "台"),
    ],
    Category.cohabitation: [_entry("kitchen", "台所", 500_000, "箇所")],
    Category.childcare: [_entry("fence", "子どもの事故を防止するための工事", 100_000, "箇所")],
    Category.other_renovation: [_entry("extension", "その他増改築等", None)],
    Category.long_term_housing: [_entry("attic_vent", "小屋裏の換気工事", 100_000, "箇所")],
}


@pytest.fixture
def fixture_catalogs() -> CatalogSet:
    return CatalogSet(FIXTURE_TABLES)


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


# ---------------------------------------------------------------------------
# HTTP client: ASGI transport, get_db bound to the SQLite session factory
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def client(session_factory):
    """Async httpx client using ASGI transport: no live server, no lifespan."""
    async def _get_test_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_test_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
