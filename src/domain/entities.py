"""
Domain value objects for fare estimation.

``PricingTable`` is the read-only view of a vehicle's admin-managed pricing
as seen by the booking flow: one flat auto rate and/or one set of bucket
rates per trip type.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .enums import DistanceBucket, TripType, VehicleCategory


# ── Value Objects ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class LocationData:
    lat: float
    lng: float
    description: str = ""


@dataclass(frozen=True)
class LocationSuggestion:
    place_id: str
    description: str
    main_text: str = ""
    secondary_text: str = ""


@dataclass
class PricingTable:
    category: VehicleCategory
    vehicle_type: str = ""
    vehicle_model: str = ""
    auto_rates: dict[TripType, float] = field(default_factory=dict)
    distance_rates: dict[TripType, dict[DistanceBucket, float]] = field(
        default_factory=dict
    )
    base_prices: dict[TripType, float] = field(default_factory=dict)

    @property
    def is_flat_rate(self) -> bool:
        return self.category == VehicleCategory.AUTO

    def auto_rate(self, trip_type: TripType) -> float:
        return self.auto_rates.get(trip_type) or 0.0

    def bucket_rates(
        self, trip_type: TripType
    ) -> Optional[dict[DistanceBucket, float]]:
        """Rates for *trip_type*, falling back to the one-way table."""
        return self.distance_rates.get(trip_type) or self.distance_rates.get(
            TripType.ONE_WAY
        )

    def base_price(self, trip_type: TripType) -> float:
        return self.base_prices.get(trip_type) or 0.0


@dataclass(frozen=True)
class FareQuote:
    price: float
    display_text: str
    is_valid: bool
    bucket: Optional[DistanceBucket] = None
    rate_per_km: Optional[float] = None

    @classmethod
    def unavailable(cls, message: str) -> "FareQuote":
        return cls(price=0, display_text=message, is_valid=False)


@dataclass(frozen=True)
class FareEstimate:
    distance_km: float
    trip_type: Optional[TripType]
    quote: FareQuote
    tax: Optional[float] = None
    total: Optional[float] = None
