"""Domain enumerations and distance-bucket ordering."""

import enum


class VehicleCategory(str, enum.Enum):
    AUTO = "auto"
    CAR = "car"
    BUS = "bus"


class TripType(str, enum.Enum):
    ONE_WAY = "one-way"
    RETURN = "return"


class DistanceBucket(str, enum.Enum):
    KM_50 = "50km"
    KM_100 = "100km"
    KM_150 = "150km"
    KM_200 = "200km"

    @property
    def limit_km(self) -> float:
        return float(self.value[: -len("km")])


# Tiers used by the fare lookup, smallest upper bound first.  200km is
# stored with a record but never selected.
TIERED_BUCKETS: tuple[DistanceBucket, ...] = (
    DistanceBucket.KM_50,
    DistanceBucket.KM_100,
    DistanceBucket.KM_150,
)
