"""
Tiered Pricing Engine  (Strategy Pattern)
=========================================

Formula
-------
Price = Rate_Per_KM x Distance + Base_Price        (rounded half-up to INR)

* **Auto** vehicles use a single flat per-km rate per trip type.
* **Car / bus** vehicles look the rate up in distance buckets
  (``50km``, ``100km``, ``150km``).  A ``200km`` rate may be stored with
  the record but is not part of the tier lookup.

Bucket selection
----------------
Up to 150 km the distance alone picks the bucket: <= 50 km -> ``50km``,
<= 100 km -> ``100km``, <= 150 km -> ``150km``.  If that bucket has no
positive rate the fare is unavailable; a neighbouring bucket is never
borrowed.  Past 150 km the largest bucket with a rate is the ceiling
(``150km``, else ``100km``, else ``50km``); rates are never extrapolated.

The resolver never raises: missing tables or rates, unknown trip types and
unknown bucket labels produce an invalid ``FareQuote`` with a
human-readable message, so callers can tell "price is zero" apart from
"price could not be determined".

Complexity: O(1) per quote (bucket table has at most four entries).
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Mapping, Optional

from .distance import distance_between, round_half_up
from .entities import FareEstimate, FareQuote, LocationData, PricingTable
from .enums import TIERED_BUCKETS, DistanceBucket, TripType, VehicleCategory

PRICING_UNAVAILABLE = "Pricing unavailable"
PRICE_NOT_FOUND = "Price not found"
INVALID_DISTANCE = "Invalid distance"

CURRENCY_SYMBOL = "₹"


def format_price(price: float) -> str:
    """``1080`` -> ``"₹1,080"``; fractional amounts keep their paise."""
    if float(price).is_integer():
        return f"{CURRENCY_SYMBOL}{int(price):,}"
    return f"{CURRENCY_SYMBOL}{price:,.2f}"


def format_rate(rate: float) -> str:
    """``9.0`` -> ``"₹9"``, ``9.5`` -> ``"₹9.5"``."""
    return f"{CURRENCY_SYMBOL}{rate:g}"


def known_buckets(
    rates: Mapping[DistanceBucket, Optional[float]],
) -> dict[DistanceBucket, Optional[float]]:
    """Key *rates* by ``DistanceBucket``, dropping labels that are not one."""
    known = {}
    for key, rate in rates.items():
        try:
            known[DistanceBucket(key)] = rate
        except ValueError:
            continue
    return known


def select_bucket(
    rates: Mapping[DistanceBucket, Optional[float]], distance_km: float
) -> Optional[DistanceBucket]:
    """
    Pick the bucket that prices *distance_km*, or ``None``.

    Within the tiers the answer depends on the distance only; whether the
    bucket carries a rate is for the caller to check.
    """
    for bucket in TIERED_BUCKETS:
        if distance_km <= bucket.limit_km:
            return bucket

    rates = known_buckets(rates)
    for bucket in reversed(TIERED_BUCKETS):
        if (rates.get(bucket) or 0) > 0:
            return bucket
    return None


# ── Strategy hierarchy ────────────────────────────────────────────────


class PricingStrategy(ABC):
    @abstractmethod
    def quote(
        self, table: PricingTable, distance_km: float, trip_type: TripType
    ) -> FareQuote: ...

    @staticmethod
    def _price(rate: float, distance_km: float, base_price: float) -> int:
        return int(round_half_up(rate * distance_km + base_price))


class FlatRatePricing(PricingStrategy):
    """Auto-rickshaws: one per-km rate, no tiers."""

    def quote(
        self, table: PricingTable, distance_km: float, trip_type: TripType
    ) -> FareQuote:
        rate = table.auto_rate(trip_type)
        if rate <= 0:
            return FareQuote.unavailable(PRICE_NOT_FOUND)

        price = self._price(rate, distance_km, table.base_price(trip_type))
        return FareQuote(
            price=price,
            display_text=format_price(price),
            is_valid=True,
            rate_per_km=rate,
        )


class TieredDistancePricing(PricingStrategy):
    """Cars and buses: the rate depends on the distance bucket."""

    def quote(
        self, table: PricingTable, distance_km: float, trip_type: TripType
    ) -> FareQuote:
        rates = known_buckets(table.bucket_rates(trip_type) or {})
        if not rates:
            return FareQuote.unavailable(PRICING_UNAVAILABLE)

        bucket = select_bucket(rates, distance_km)
        rate = rates.get(bucket) or 0
        if rate <= 0:
            return FareQuote.unavailable(PRICE_NOT_FOUND)

        price = self._price(rate, distance_km, table.base_price(trip_type))
        return FareQuote(
            price=price,
            display_text=(
                f"{format_price(price)} "
                f"({bucket.value} rate: {format_rate(rate)}/km)"
            ),
            is_valid=True,
            bucket=bucket,
            rate_per_km=rate,
        )


STRATEGIES: dict[VehicleCategory, PricingStrategy] = {
    VehicleCategory.AUTO: FlatRatePricing(),
    VehicleCategory.CAR: TieredDistancePricing(),
    VehicleCategory.BUS: TieredDistancePricing(),
}


def resolve_fare(
    table: Optional[PricingTable],
    distance_km: float,
    trip_type: TripType = TripType.ONE_WAY,
) -> FareQuote:
    """Quote a fare for *distance_km*; never raises on bad pricing data."""
    if table is None:
        return FareQuote.unavailable(PRICING_UNAVAILABLE)
    if (
        isinstance(distance_km, bool)
        or not isinstance(distance_km, (int, float))
        or not math.isfinite(distance_km)
        or distance_km < 0
    ):
        return FareQuote.unavailable(INVALID_DISTANCE)

    trip_type = as_trip_type(trip_type)
    if trip_type is None:
        return FareQuote.unavailable(PRICING_UNAVAILABLE)

    strategy = STRATEGIES.get(table.category, TieredDistancePricing())
    return strategy.quote(table, distance_km, trip_type)


def as_trip_type(value) -> Optional[TripType]:
    try:
        return TripType(value)
    except ValueError:
        return None


# ── Default pricing ───────────────────────────────────────────────────


DEFAULT_BUCKET_RATES: dict[VehicleCategory, dict[DistanceBucket, float]] = {
    VehicleCategory.CAR: {
        DistanceBucket.KM_50: 12.0,
        DistanceBucket.KM_100: 10.0,
        DistanceBucket.KM_150: 8.0,
    },
    VehicleCategory.BUS: {
        DistanceBucket.KM_50: 25.0,
        DistanceBucket.KM_100: 20.0,
        DistanceBucket.KM_150: 18.0,
    },
}


def default_rates(
    category: VehicleCategory,
    trip_type: TripType,
    auto_rate_one_way: float = 15.0,
    auto_rate_return: float = 25.0,
) -> tuple[float, dict[DistanceBucket, float]]:
    """Starter ``(auto_rate, bucket_rates)`` for a configuration with no record."""
    if category == VehicleCategory.AUTO:
        rate = auto_rate_one_way if trip_type == TripType.ONE_WAY else auto_rate_return
        return rate, {}
    return 0.0, dict(DEFAULT_BUCKET_RATES[category])


# ── Engine facade ─────────────────────────────────────────────────────


class FareEstimator:
    """High-level API used by the fare routes and the checkout flow."""

    def __init__(self, tax_rate: float = 0.18):
        self.tax_rate = tax_rate

    def tax_for(self, price: float) -> int:
        return int(round_half_up(price * self.tax_rate))

    def estimate(
        self,
        table: Optional[PricingTable],
        trip_type: TripType = TripType.ONE_WAY,
        distance_km: Optional[float] = None,
        origin: Optional[LocationData] = None,
        destination: Optional[LocationData] = None,
    ) -> FareEstimate:
        if distance_km is None:
            distance_km = distance_between(origin, destination)

        quote = resolve_fare(table, distance_km, trip_type)
        trip_type = as_trip_type(trip_type)
        if not quote.is_valid:
            return FareEstimate(distance_km, trip_type, quote)

        tax = self.tax_for(quote.price)
        return FareEstimate(
            distance_km=distance_km,
            trip_type=trip_type,
            quote=quote,
            tax=tax,
            total=quote.price + tax,
        )


# ── Record validation ─────────────────────────────────────────────────


def pricing_problem(
    category: VehicleCategory,
    auto_rate: float,
    distance_pricing: Mapping[DistanceBucket, float],
) -> Optional[str]:
    """Why a pricing record could never produce a fare, or ``None``."""
    if any(rate is not None and rate < 0 for rate in distance_pricing.values()):
        return "Distance pricing cannot be negative"
    if category == VehicleCategory.AUTO:
        if not auto_rate or auto_rate <= 0:
            return "Auto pricing needs a positive per-km rate"
        return None
    tiered = known_buckets(distance_pricing)
    if not any((tiered.get(b) or 0) > 0 for b in TIERED_BUCKETS):
        return "Distance pricing needs a positive 50km, 100km or 150km rate"
    return None
