"""
Public pricing endpoints
========================

GET /api/v1/vehicle-pricing/categories -- active categories, types and models
GET /api/v1/vehicle-pricing/lookup     -- pricing record for a configuration
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import get_db
from src.api.middleware import limiter
from src.api.schemas import PricingCategory, VehiclePricingResponse
from src.config import settings
from src.domain.enums import TripType, VehicleCategory
from src.domain.pricing import default_rates
from src.infrastructure.models import VehiclePricingModel
from src.infrastructure.repositories import VehiclePricingRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/vehicle-pricing", tags=["pricing"])


async def create_default_pricing(
    repo: VehiclePricingRepository,
    category: VehicleCategory,
    vehicle_type: str,
    vehicle_model: Optional[str],
    trip_type: TripType,
) -> VehiclePricingModel:
    """Insert starter pricing for a configuration nobody has priced yet."""
    auto_rate, bucket_rates = default_rates(
        category,
        trip_type,
        settings.default_auto_rate_one_way,
        settings.default_auto_rate_return,
    )
    model = vehicle_model or f"Standard {category.value.capitalize()}"
    pricing = VehiclePricingModel(
        category=category,
        vehicle_type=vehicle_type,
        vehicle_model=model,
        trip_type=trip_type,
        auto_rate=auto_rate,
        base_price=0.0,
        is_active=True,
        is_default=True,
        notes=f"Default {model} {category.value} pricing",
    )
    pricing.distance_pricing = bucket_rates
    pricing = await repo.create(pricing)
    logger.info(
        "Created default pricing for %s %s %s (%s)",
        category.value,
        vehicle_type,
        model,
        trip_type.value,
    )
    return pricing


@router.get(
    "/categories",
    response_model=list[PricingCategory],
    summary="List priced categories, vehicle types and models",
)
@limiter.limit(settings.rate_limit)
async def get_pricing_categories(
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    return await VehiclePricingRepository(db).categories()


@router.get(
    "/lookup",
    response_model=VehiclePricingResponse,
    summary="Get pricing for a vehicle configuration",
    description=(
        "Without ``vehicle_model`` the default record of the vehicle type is "
        "returned.  Unpriced configurations get starter pricing when "
        "``AUTO_CREATE_DEFAULT_PRICING`` is on."
    ),
)
@limiter.limit(settings.rate_limit)
async def lookup_pricing(
    request: Request,
    category: VehicleCategory,
    vehicle_type: str,
    vehicle_model: Optional[str] = None,
    trip_type: TripType = TripType.ONE_WAY,
    db: AsyncSession = Depends(get_db),
):
    repo = VehiclePricingRepository(db)
    pricing = await repo.lookup(category, vehicle_type, vehicle_model, trip_type)

    if pricing is None and settings.auto_create_default_pricing:
        existing = await repo.find_by_config(
            category,
            vehicle_type,
            vehicle_model or f"Standard {category.value.capitalize()}",
            trip_type,
        )
        # Soft-deleted configurations stay deleted
        if existing is None:
            pricing = await create_default_pricing(
                repo, category, vehicle_type, vehicle_model, trip_type
            )

    if pricing is None:
        raise HTTPException(
            status_code=404,
            detail="No pricing found for the specified vehicle configuration",
        )
    return pricing
