"""Fixtures de test / Test fixtures.

Base SQLite desechable por test y get_db redirigido a ella.
Throwaway SQLite database per test, with get_db pointed at it.
"""

import os

os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import flota_admin.models  # noqa: F401
from flota_admin.database import Base, enable_sqlite_foreign_keys, get_db
from flota_admin.main import app
from flota_admin.models.fuel_card import FuelCard
from flota_admin.models.vehicle import Vehicle
from flota_admin.rate_limit import limiter


@pytest.fixture
async def engine(tmp_path):
    test_engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    enable_sqlite_foreign_keys(test_engine)
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def _get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_db
    limiter.enabled = False
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def card(db):
    """Tarjeta a 1.50 / litro / Card priced at 1.50 per liter."""
    fuel_card = FuelCard(
        card_number="TC-0001",
        card_type="Prepago",
        fuel_type="Diésel",
        fuel_price=Decimal("1.50"),
        currency="CUP",
        expiry_date="2027-12-31",
    )
    db.add(fuel_card)
    await db.commit()
    return fuel_card


@pytest.fixture
async def other_card(db):
    fuel_card = FuelCard(card_number="TC-0002", fuel_price=Decimal("2.00"), currency="USD")
    db.add(fuel_card)
    await db.commit()
    return fuel_card


@pytest.fixture
async def vehicles(db):
    truck = Vehicle(license_plate="P123456", brand="Hino", model="500")
    van = Vehicle(license_plate="B654321", brand="Toyota", model="Hiace")
    db.add_all([truck, van])
    await db.commit()
    return truck, van


@pytest.fixture
async def lenient_client(session_factory):
    """Cliente que recibe la respuesta 500 en vez de la excepcion / Client that gets the 500 instead of the exception."""
    async def _get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_db
    limiter.enabled = False
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
