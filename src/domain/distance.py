"""
Distance calculation using the Haversine formula.

Assumption
----------
Fares are quoted on great-circle (Haversine) distance between the geocoded
pickup and drop-off points, not on road distance.  Road distance is always
longer, so operators tune their per-km rates with that in mind.

Complexity: O(1) per call.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from .entities import LocationData

EARTH_RADIUS_KM = 6_371.0


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round like a till does: halves always go away from zero."""
    quantum = Decimal(1).scaleb(-ndigits)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def haversine_km(
    lat1: float, lng1: float, lat2: float, lng2: float
) -> float:
    """Return the great-circle distance in **km** between two points."""
    lat1_r, lat2_r = math.radians(lat1), math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlng = math.radians(lng2 - lng1)

    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1_r) * math.cos(lat2_r) * math.sin(dlng / 2) ** 2
    )
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def _is_coordinate(value: object) -> bool:
    # bool is an int subclass but never a coordinate
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def distance_between(
    origin: Optional[LocationData], destination: Optional[LocationData]
) -> float:
    """
    Distance in km between two locations, rounded to 2 decimal places.

    Returns ``0.0`` when either location is missing or carries a
    non-numeric coordinate; callers treat that as "distance not known yet"
    rather than an error.
    """
    if origin is None or destination is None:
        return 0.0

    coords = (
        getattr(origin, "lat", None),
        getattr(origin, "lng", None),
        getattr(destination, "lat", None),
        getattr(destination, "lng", None),
    )
    if not all(_is_coordinate(c) for c in coords):
        return 0.0

    return round_half_up(haversine_km(*coords), 2)
