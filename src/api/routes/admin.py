"""
Admin / pricing-management endpoints
====================================

GET    /api/v1/admin/health                 -- simple health check
GET    /api/v1/admin/vehicle-pricing        -- list active pricing (paginated)
GET    /api/v1/admin/vehicle-pricing/{id}   -- one pricing record
POST   /api/v1/admin/vehicle-pricing        -- create pricing (409 if it exists)
PUT    /api/v1/admin/vehicle-pricing/{id}   -- update rates / notes / status
DELETE /api/v1/admin/vehicle-pricing/{id}   -- soft delete
POST   /api/v1/admin/vehicle-pricing/bulk   -- create-or-update many records
"""

import logging
import math
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import get_db
from src.api.middleware import limiter
from src.api.schemas import (
    BulkPricingRequest,
    BulkPricingResult,
    HealthResponse,
    VehiclePricingCreate,
    VehiclePricingPage,
    VehiclePricingResponse,
    VehiclePricingUpdate,
)
from src.config import settings
from src.domain.enums import TripType, VehicleCategory
from src.domain.pricing import pricing_problem
from src.infrastructure.models import VehiclePricingModel
from src.infrastructure.repositories import VehiclePricingRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


def _apply_rates(pricing: VehiclePricingModel, body: VehiclePricingCreate) -> None:
    pricing.auto_rate = body.auto_rate
    pricing.distance_pricing = body.distance_pricing
    pricing.base_price = body.base_price
    pricing.notes = body.notes
    pricing.is_active = body.is_active
    pricing.is_default = body.is_default


async def _get_or_404(
    repo: VehiclePricingRepository, pricing_id: int
) -> VehiclePricingModel:
    pricing = await repo.get_by_id(pricing_id)
    if not pricing:
        raise HTTPException(status_code=404, detail="Vehicle pricing not found")
    return pricing


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health():
    return HealthResponse()


@router.get(
    "/vehicle-pricing",
    response_model=VehiclePricingPage,
    summary="List active vehicle pricing",
)
@limiter.limit(settings.rate_limit)
async def list_vehicle_pricing(
    request: Request,
    category: Optional[VehicleCategory] = None,
    trip_type: Optional[TripType] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    db: AsyncSession = Depends(get_db),
):
    records, total = await VehiclePricingRepository(db).list_active(
        category=category, trip_type=trip_type, page=page, limit=limit
    )
    return VehiclePricingPage(
        data=[VehiclePricingResponse.model_validate(r) for r in records],
        total=total,
        page=page,
        total_pages=max(1, math.ceil(total / limit)),
    )


@router.get(
    "/vehicle-pricing/{pricing_id}",
    response_model=VehiclePricingResponse,
    summary="Get one vehicle pricing record",
)
@limiter.limit(settings.rate_limit)
async def get_vehicle_pricing(
    request: Request,
    pricing_id: int,
    db: AsyncSession = Depends(get_db),
):
    return await _get_or_404(VehiclePricingRepository(db), pricing_id)


@router.post(
    "/vehicle-pricing",
    status_code=201,
    response_model=VehiclePricingResponse,
    summary="Create vehicle pricing",
    responses={409: {"description": "Pricing for this configuration exists."}},
)
@limiter.limit(settings.rate_limit)
async def create_vehicle_pricing(
    request: Request,
    body: VehiclePricingCreate,
    db: AsyncSession = Depends(get_db),
):
    problem = pricing_problem(body.category, body.auto_rate, body.distance_pricing)
    if problem:
        raise HTTPException(status_code=422, detail=problem)

    repo = VehiclePricingRepository(db)
    existing = await repo.find_by_config(
        body.category, body.vehicle_type, body.vehicle_model, body.trip_type
    )
    if existing:
        raise HTTPException(
            status_code=409,
            detail="Pricing for this vehicle configuration already exists",
        )

    pricing = VehiclePricingModel(
        category=body.category,
        vehicle_type=body.vehicle_type,
        vehicle_model=body.vehicle_model,
        trip_type=body.trip_type,
    )
    _apply_rates(pricing, body)
    return await repo.create(pricing)


@router.put(
    "/vehicle-pricing/{pricing_id}",
    response_model=VehiclePricingResponse,
    summary="Update vehicle pricing",
    description="Only the fields present in the body are changed.",
)
@limiter.limit(settings.rate_limit)
async def update_vehicle_pricing(
    request: Request,
    pricing_id: int,
    body: VehiclePricingUpdate,
    db: AsyncSession = Depends(get_db),
):
    pricing = await _get_or_404(VehiclePricingRepository(db), pricing_id)

    for field, value in body.model_dump(exclude_unset=True).items():
        if value is None and field != "notes":
            continue
        setattr(pricing, field, value)

    problem = pricing_problem(
        pricing.category, pricing.auto_rate, pricing.distance_pricing
    )
    if problem:
        raise HTTPException(status_code=422, detail=problem)

    await db.flush()
    await db.refresh(pricing)
    return pricing


@router.delete(
    "/vehicle-pricing/{pricing_id}",
    response_model=VehiclePricingResponse,
    summary="Soft-delete vehicle pricing",
    description="Marks the record inactive; it disappears from look-ups.",
)
@limiter.limit(settings.rate_limit)
async def delete_vehicle_pricing(
    request: Request,
    pricing_id: int,
    db: AsyncSession = Depends(get_db),
):
    repo = VehiclePricingRepository(db)
    pricing = await _get_or_404(repo, pricing_id)
    await repo.soft_delete(pricing)
    return pricing


@router.post(
    "/vehicle-pricing/bulk",
    response_model=list[BulkPricingResult],
    summary="Create or update many pricing records",
    description=(
        "Each item is upserted on its (category, type, model, trip type) "
        "configuration.  Failures are reported per item."
    ),
)
@limiter.limit(settings.rate_limit)
async def bulk_update_vehicle_pricing(
    request: Request,
    body: BulkPricingRequest,
    db: AsyncSession = Depends(get_db),
):
    repo = VehiclePricingRepository(db)
    results: list[BulkPricingResult] = []

    for item in body.pricing_data:
        outcome = BulkPricingResult(
            category=item.category,
            vehicle_type=item.vehicle_type,
            vehicle_model=item.vehicle_model,
            trip_type=item.trip_type,
            action="error",
        )
        results.append(outcome)

        problem = pricing_problem(item.category, item.auto_rate, item.distance_pricing)
        if problem:
            logger.info(
                "Bulk pricing skipped %s %s: %s",
                item.vehicle_type,
                item.vehicle_model,
                problem,
            )
            outcome.error = problem
            continue

        try:
            async with db.begin_nested():
                pricing = await repo.find_by_config(
                    item.category, item.vehicle_type, item.vehicle_model, item.trip_type
                )
                if pricing:
                    _apply_rates(pricing, item)
                    await db.flush()
                    action = "updated"
                else:
                    pricing = VehiclePricingModel(
                        category=item.category,
                        vehicle_type=item.vehicle_type,
                        vehicle_model=item.vehicle_model,
                        trip_type=item.trip_type,
                    )
                    _apply_rates(pricing, item)
                    await repo.create(pricing)
                    action = "created"
        except SQLAlchemyError as exc:
            logger.warning(
                "Bulk pricing failed for %s %s: %s",
                item.vehicle_type,
                item.vehicle_model,
                exc,
            )
            outcome.error = "Could not save pricing"
            continue

        outcome.action = action
        outcome.id = pricing.id

    logger.info(
        "Bulk pricing update: %d items, %d errors",
        len(results),
        sum(1 for r in results if r.action == "error"),
    )
    return results
