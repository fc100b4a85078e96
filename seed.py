"""
Seed script -- populates the database with starter pricing for reviewers.

Run after migrations:
    python seed.py

Creates one-way and return pricing for:
  - 2 auto-rickshaw types (flat per-km rate)
  - 4 car types (distance buckets)
  - 2 bus types (distance buckets + flat base price)
"""

import asyncio

from sqlalchemy import func, select

from src.domain.enums import DistanceBucket, TripType, VehicleCategory
from src.infrastructure.database import async_session_factory, engine
from src.infrastructure.models import VehiclePricingModel

KM_50, KM_100, KM_150, KM_200 = (
    DistanceBucket.KM_50,
    DistanceBucket.KM_100,
    DistanceBucket.KM_150,
    DistanceBucket.KM_200,
)

# (vehicle type, model, {trip type: auto rate}) for autos
AUTOS = [
    ("Fuel Auto-Rickshaw", "Standard", {TripType.ONE_WAY: 15.0, TripType.RETURN: 25.0}),
    ("Electric Auto-Rickshaw", "Standard", {TripType.ONE_WAY: 18.0, TripType.RETURN: 30.0}),
]

# (vehicle type, model, {trip type: bucket rates}, base price)
CARS = [
    (
        "Sedan", "Swift Dzire",
        {
            TripType.ONE_WAY: {KM_50: 12.0, KM_100: 10.0, KM_150: 9.0, KM_200: 8.0},
            TripType.RETURN: {KM_50: 11.0, KM_100: 9.0, KM_150: 8.0, KM_200: 7.5},
        },
        0.0,
    ),
    (
        "Sedan", "Honda City",
        {
            TripType.ONE_WAY: {KM_50: 14.0, KM_100: 12.0, KM_150: 10.0},
            TripType.RETURN: {KM_50: 13.0, KM_100: 11.0, KM_150: 9.5},
        },
        0.0,
    ),
    (
        "SUV", "Toyota Innova Crysta",
        {
            TripType.ONE_WAY: {KM_50: 18.0, KM_100: 16.0, KM_150: 14.0, KM_200: 13.0},
            TripType.RETURN: {KM_50: 17.0, KM_100: 15.0, KM_150: 13.0, KM_200: 12.0},
        },
        0.0,
    ),
    (
        "Hatchback", "Maruti Wagon R",
        {TripType.ONE_WAY: {KM_50: 10.0, KM_100: 9.0, KM_150: 8.0}},
        0.0,
    ),
]

BUSES = [
    (
        "Mini Bus", "Tempo Traveller 17 Seater",
        {
            TripType.ONE_WAY: {KM_50: 25.0, KM_100: 20.0, KM_150: 18.0},
            TripType.RETURN: {KM_50: 23.0, KM_100: 19.0, KM_150: 17.0},
        },
        500.0,
    ),
    (
        "Luxury Bus", "Volvo 45 Seater",
        {
            TripType.ONE_WAY: {KM_50: 60.0, KM_100: 55.0, KM_150: 50.0, KM_200: 45.0},
            TripType.RETURN: {KM_50: 55.0, KM_100: 50.0, KM_150: 45.0, KM_200: 42.0},
        },
        2000.0,
    ),
]


def _auto_records():
    for vehicle_type, model, rates in AUTOS:
        for trip_type, rate in rates.items():
            yield VehiclePricingModel(
                category=VehicleCategory.AUTO,
                vehicle_type=vehicle_type,
                vehicle_model=model,
                trip_type=trip_type,
                auto_rate=rate,
                is_default=True,
                notes=f"{vehicle_type} {trip_type.value} pricing",
            )


def _bucket_records(category, rows):
    for i, (vehicle_type, model, tables, base_price) in enumerate(rows):
        for trip_type, buckets in tables.items():
            record = VehiclePricingModel(
                category=category,
                vehicle_type=vehicle_type,
                vehicle_model=model,
                trip_type=trip_type,
                auto_rate=0.0,
                base_price=base_price,
                # first model listed for a type is its default
                is_default=all(r[0] != vehicle_type for r in rows[:i]),
                notes=f"{model} {trip_type.value} pricing",
            )
            record.distance_pricing = buckets
            yield record


async def seed():
    async with async_session_factory() as session:
        # Check if already seeded
        result = await session.execute(
            select(func.count()).select_from(VehiclePricingModel)
        )
        if result.scalar() > 0:
            print("Database already seeded. Skipping.")
            return

        records = [
            *_auto_records(),
            *_bucket_records(VehicleCategory.CAR, CARS),
            *_bucket_records(VehicleCategory.BUS, BUSES),
        ]
        session.add_all(records)
        await session.flush()
        print(f"  Created {len(records)} pricing records")

        await session.commit()
        print("\nSeed complete!")


async def main():
    print("Seeding database...")
    await seed()
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
