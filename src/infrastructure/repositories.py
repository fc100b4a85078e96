"""
Repository Pattern -- abstracts DB access so domain logic stays DB-agnostic.

Each repository receives an ``AsyncSession`` (unit-of-work) and exposes
domain-relevant queries only.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import VehiclePricingModel
from src.domain.entities import PricingTable
from src.domain.enums import TripType, VehicleCategory


class VehiclePricingRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, pricing: VehiclePricingModel) -> VehiclePricingModel:
        self.session.add(pricing)
        await self.session.flush()
        await self.session.refresh(pricing)
        return pricing

    async def get_by_id(self, pricing_id: int) -> Optional[VehiclePricingModel]:
        return await self.session.get(VehiclePricingModel, pricing_id)

    async def find_by_config(
        self,
        category: VehicleCategory,
        vehicle_type: str,
        vehicle_model: str,
        trip_type: TripType,
    ) -> Optional[VehiclePricingModel]:
        """Exact configuration match, active or not."""
        result = await self.session.execute(
            select(VehiclePricingModel).where(
                VehiclePricingModel.category == category,
                VehiclePricingModel.vehicle_type == vehicle_type,
                VehiclePricingModel.vehicle_model == vehicle_model,
                VehiclePricingModel.trip_type == trip_type,
            )
        )
        return result.scalar_one_or_none()

    async def list_active(
        self,
        *,
        category: VehicleCategory | None = None,
        trip_type: TripType | None = None,
        page: int = 1,
        limit: int = 50,
    ) -> tuple[list[VehiclePricingModel], int]:
        """One page of active records plus the total match count."""
        filters = [VehiclePricingModel.is_active.is_(True)]
        if category:
            filters.append(VehiclePricingModel.category == category)
        if trip_type:
            filters.append(VehiclePricingModel.trip_type == trip_type)

        total = (
            await self.session.execute(
                select(func.count()).select_from(VehiclePricingModel).where(*filters)
            )
        ).scalar() or 0

        result = await self.session.execute(
            select(VehiclePricingModel)
            .where(*filters)
            .order_by(
                VehiclePricingModel.category,
                VehiclePricingModel.vehicle_type,
                VehiclePricingModel.vehicle_model,
                VehiclePricingModel.id,
            )
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list(result.scalars().all()), total

    async def soft_delete(self, pricing: VehiclePricingModel) -> None:
        pricing.is_active = False
        await self.session.flush()
        await self.session.refresh(pricing)

    async def get_pricing(
        self,
        category: VehicleCategory,
        vehicle_type: str,
        vehicle_model: str,
        trip_type: TripType,
    ) -> Optional[VehiclePricingModel]:
        pricing = await self.find_by_config(
            category, vehicle_type, vehicle_model, trip_type
        )
        if pricing is None or not pricing.is_active:
            return None
        return pricing

    async def get_default_pricing(
        self,
        category: VehicleCategory,
        vehicle_type: str,
        trip_type: TripType,
    ) -> Optional[VehiclePricingModel]:
        """The type's default record, else its oldest active record."""
        result = await self.session.execute(
            select(VehiclePricingModel)
            .where(
                VehiclePricingModel.category == category,
                VehiclePricingModel.vehicle_type == vehicle_type,
                VehiclePricingModel.trip_type == trip_type,
                VehiclePricingModel.is_active.is_(True),
            )
            .order_by(
                VehiclePricingModel.is_default.desc(), VehiclePricingModel.id
            )
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def lookup(
        self,
        category: VehicleCategory,
        vehicle_type: str,
        vehicle_model: str | None,
        trip_type: TripType,
    ) -> Optional[VehiclePricingModel]:
        if vehicle_model:
            return await self.get_pricing(
                category, vehicle_type, vehicle_model, trip_type
            )
        return await self.get_default_pricing(category, vehicle_type, trip_type)

    async def get_pricing_table(
        self,
        category: VehicleCategory,
        vehicle_type: str,
        vehicle_model: str | None = None,
    ) -> Optional[PricingTable]:
        """Assemble the one-way and return records into a ``PricingTable``."""
        records = {}
        for trip_type in TripType:
            record = await self.lookup(category, vehicle_type, vehicle_model, trip_type)
            if record is not None:
                records[trip_type] = record
        if not records:
            return None
        return to_pricing_table(category, vehicle_type, records)

    async def categories(self) -> list[dict]:
        """Active configurations grouped as category -> type -> models."""
        result = await self.session.execute(
            select(
                VehiclePricingModel.category,
                VehiclePricingModel.vehicle_type,
                VehiclePricingModel.vehicle_model,
            )
            .where(VehiclePricingModel.is_active.is_(True))
            .distinct()
            .order_by(
                VehiclePricingModel.category,
                VehiclePricingModel.vehicle_type,
                VehiclePricingModel.vehicle_model,
            )
        )
        grouped: dict[VehicleCategory, dict[str, list[str]]] = defaultdict(
            lambda: defaultdict(list)
        )
        for category, vehicle_type, vehicle_model in result.all():
            grouped[category][vehicle_type].append(vehicle_model)

        return [
            {
                "category": category,
                "types": [
                    {"type": vehicle_type, "models": models}
                    for vehicle_type, models in types.items()
                ],
            }
            for category, types in grouped.items()
        ]


def to_pricing_table(
    category: VehicleCategory,
    vehicle_type: str,
    records: dict[TripType, VehiclePricingModel],
) -> PricingTable:
    table = PricingTable(category=category, vehicle_type=vehicle_type)
    for trip_type, record in records.items():
        table.vehicle_model = table.vehicle_model or record.vehicle_model
        if record.auto_rate:
            table.auto_rates[trip_type] = record.auto_rate
        if record.distance_pricing:
            table.distance_rates[trip_type] = record.distance_pricing
        if record.base_price:
            table.base_prices[trip_type] = record.base_price
    return table
