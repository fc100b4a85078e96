"""FastAPI dependency injection helpers."""

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.config import settings
from src.domain.pricing import FareEstimator
from src.infrastructure.database import async_session_factory
from src.infrastructure.geocoding import GeocodingClient


async def get_db() -> AsyncSession:  # type: ignore[misc]
    """Yield an async DB session; commit on success, rollback on error."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_geocoder(request: Request) -> GeocodingClient:
    """The client built by ``create_app``; initialised in the lifespan."""
    return request.app.state.geocoder


def get_fare_estimator() -> FareEstimator:
    return FareEstimator(tax_rate=settings.gst_rate)
