"""
Fare endpoints
==============

POST /api/v1/fares/distance -- great-circle distance between two locations
POST /api/v1/fares/estimate -- fare quote plus GST breakdown for a trip

An unpriced vehicle is not an HTTP error here: the estimate comes back with
``is_valid = false`` and a message the UI can show in place of a price.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import get_db, get_fare_estimator
from src.api.middleware import limiter
from src.api.schemas import (
    DistanceRequest,
    DistanceResponse,
    FareRequest,
    FareResponse,
    LocationIn,
)
from src.config import settings
from src.domain.distance import distance_between
from src.domain.pricing import FareEstimator
from src.infrastructure.repositories import VehiclePricingRepository

router = APIRouter(prefix="/fares", tags=["fares"])


def _to_domain(location: Optional[LocationIn]):
    return location.to_domain() if location else None


@router.post(
    "/distance",
    response_model=DistanceResponse,
    summary="Distance between two locations",
    description="Missing coordinates yield a distance of 0.",
)
@limiter.limit(settings.rate_limit)
async def get_distance(request: Request, body: DistanceRequest):
    return DistanceResponse(
        distance_km=distance_between(
            _to_domain(body.origin), _to_domain(body.destination)
        )
    )


@router.post(
    "/estimate",
    response_model=FareResponse,
    summary="Estimate the fare for a trip",
)
@limiter.limit(settings.rate_limit)
async def estimate_fare(
    request: Request,
    body: FareRequest,
    db: AsyncSession = Depends(get_db),
    estimator: FareEstimator = Depends(get_fare_estimator),
):
    table = await VehiclePricingRepository(db).get_pricing_table(
        body.category, body.vehicle_type, body.vehicle_model
    )
    estimate = estimator.estimate(
        table,
        body.trip_type,
        distance_km=body.distance_km,
        origin=_to_domain(body.origin),
        destination=_to_domain(body.destination),
    )
    quote = estimate.quote
    return FareResponse(
        distance_km=estimate.distance_km,
        trip_type=estimate.trip_type,
        price=quote.price,
        display_text=quote.display_text,
        is_valid=quote.is_valid,
        bucket=quote.bucket,
        rate_per_km=quote.rate_per_km,
        tax=estimate.tax,
        total=estimate.total,
    )
