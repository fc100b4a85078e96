"""
FastAPI application factory.

* Registers routes for fares, pricing, locations and admin.
* Builds the geocoding client once and opens / closes it via lifespan events.
* Applies rate-limiting middleware.
* Swagger / OpenAPI UI available at ``/docs``.
"""

from contextlib import asynccontextmanager
import logging
from typing import Optional

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from src.api.middleware import limiter
from src.api.routes import admin, fares, locations, pricing
from src.config import settings
from src.infrastructure.geocoding import GeocodingClient

logging.basicConfig(level=settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialise the geocoding client on startup; close it on shutdown."""
    await app.state.geocoder.initialize()
    yield
    await app.state.geocoder.aclose()


def create_app(geocoder: Optional[GeocodingClient] = None) -> FastAPI:
    app = FastAPI(
        title="Fare Estimation API",
        description=(
            "Distance-tiered fare estimation for autos, cars and buses.  "
            "Admin-managed pricing tables, GST checkout totals and "
            "geocoded location search."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.geocoder = geocoder or GeocodingClient(
        api_key=settings.google_maps_api_key,
        base_url=settings.geocoding_base_url,
        country=settings.geocoding_country,
        timeout=settings.geocoding_timeout_seconds,
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Routers
    app.include_router(fares.router, prefix="/api/v1")
    app.include_router(pricing.router, prefix="/api/v1")
    app.include_router(locations.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")

    return app
