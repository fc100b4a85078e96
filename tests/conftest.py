"""
Shared test fixtures.

Uses an in-memory SQLite database (via aiosqlite) so tests run without
Docker / PostgreSQL, and an ``httpx.MockTransport`` standing in for the
Google Places API so no API key or network access is needed.
"""

from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from src.domain.entities import PricingTable
from src.domain.enums import DistanceBucket, TripType, VehicleCategory
from src.infrastructure import models  # noqa: F401  (registers tables)
from src.infrastructure.database import Base
from src.infrastructure.geocoding import GeocodingClient


# ── Test DB (SQLite in-memory) ────────────────────────────────────────

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


# ── Fake Places API ───────────────────────────────────────────────────

PLACES_BASE_URL = "https://maps.test/maps/api/place"

PLACES = {
    "place-mumbai": {
        "description": "Mumbai, Maharashtra, India",
        "main_text": "Mumbai",
        "secondary_text": "Maharashtra, India",
        "lat": 19.0760,
        "lng": 72.8777,
    },
    "place-pune": {
        "description": "Pune, Maharashtra, India",
        "main_text": "Pune",
        "secondary_text": "Maharashtra, India",
        "lat": 18.5204,
        "lng": 73.8567,
    },
}


def places_api(request: httpx.Request) -> httpx.Response:
    """Minimal Places Autocomplete / Details responder."""
    params = request.url.params
    if params.get("key") != "test-key":
        return httpx.Response(200, json={"status": "REQUEST_DENIED"})

    if request.url.path.endswith("/autocomplete/json"):
        text = params.get("input", "").lower()
        predictions = [
            {
                "place_id": place_id,
                "description": place["description"],
                "structured_formatting": {
                    "main_text": place["main_text"],
                    "secondary_text": place["secondary_text"],
                },
            }
            for place_id, place in PLACES.items()
            if place["main_text"].lower().startswith(text)
        ]
        status = "OK" if predictions else "ZERO_RESULTS"
        return httpx.Response(200, json={"status": status, "predictions": predictions})

    if request.url.path.endswith("/details/json"):
        place = PLACES.get(params.get("place_id"))
        if place is None:
            return httpx.Response(200, json={"status": "NOT_FOUND"})
        return httpx.Response(
            200,
            json={
                "status": "OK",
                "result": {
                    "place_id": params["place_id"],
                    "name": place["main_text"],
                    "formatted_address": place["description"],
                    "geometry": {"location": {"lat": place["lat"], "lng": place["lng"]}},
                },
            },
        )

    return httpx.Response(404)


# ── Fixtures ──────────────────────────────────────────────────────────


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker, None]:
    """Fresh schema per test; StaticPool keeps the in-memory DB alive."""
    engine = create_async_engine(TEST_DB_URL, echo=False, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def geocoder() -> AsyncGenerator[GeocodingClient, None]:
    client = GeocodingClient(
        api_key="test-key",
        base_url=PLACES_BASE_URL,
        transport=httpx.MockTransport(places_api),
    )
    await client.initialize()
    yield client
    await client.aclose()


@pytest_asyncio.fixture
async def client(session_factory, geocoder) -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient backed by SQLite and the fake Places API."""
    from src.api.app import create_app
    from src.api.dependencies import get_db
    from src.api.middleware import limiter

    async def _test_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    limiter.reset()
    app = create_app(geocoder=geocoder)
    app.dependency_overrides[get_db] = _test_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def car_table() -> PricingTable:
    return PricingTable(
        category=VehicleCategory.CAR,
        vehicle_type="Sedan",
        vehicle_model="Swift Dzire",
        distance_rates={
            TripType.ONE_WAY: {
                DistanceBucket.KM_50: 10.0,
                DistanceBucket.KM_100: 9.0,
                DistanceBucket.KM_150: 8.0,
            }
        },
    )


@pytest.fixture
def auto_table() -> PricingTable:
    return PricingTable(
        category=VehicleCategory.AUTO,
        vehicle_type="Fuel Auto-Rickshaw",
        vehicle_model="Standard",
        auto_rates={TripType.ONE_WAY: 15.0},
    )
