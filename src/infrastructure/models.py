"""
SQLAlchemy ORM models.

Tables
------
* ``vehicle_pricing`` -- admin-managed pricing, one row per
  (category, vehicle type, vehicle model, trip type)

Indexes
-------
* **Unique** on the configuration columns; a second record for the same
  configuration is a conflict, not a new version.
* **B-Tree** on ``is_active`` and ``(category, vehicle_type)`` for the
  public look-ups used by the fare routes.
"""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    Float,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)

from .database import Base
from src.domain.enums import DistanceBucket, TripType, VehicleCategory

# Bucket -> column name on VehiclePricingModel
BUCKET_COLUMNS: dict[DistanceBucket, str] = {
    DistanceBucket.KM_50: "rate_50km",
    DistanceBucket.KM_100: "rate_100km",
    DistanceBucket.KM_150: "rate_150km",
    DistanceBucket.KM_200: "rate_200km",
}


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class VehiclePricingModel(Base):
    __tablename__ = "vehicle_pricing"

    id = Column(Integer, primary_key=True, autoincrement=True)
    category = Column(
        Enum(VehicleCategory, values_callable=_enum_values), nullable=False
    )
    vehicle_type = Column(String(120), nullable=False)
    vehicle_model = Column(String(120), nullable=False)
    trip_type = Column(
        Enum(TripType, values_callable=_enum_values),
        default=TripType.ONE_WAY,
        nullable=False,
    )

    # Flat per-km rate (auto only)
    auto_rate = Column(Float, default=0.0, nullable=False)

    # Per-km rate by distance bucket (car / bus)
    rate_50km = Column(Float, nullable=True)
    rate_100km = Column(Float, nullable=True)
    rate_150km = Column(Float, nullable=True)
    rate_200km = Column(Float, nullable=True)

    base_price = Column(Float, default=0.0, nullable=False)
    notes = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    is_default = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __mapper_args__ = {"eager_defaults": True}

    __table_args__ = (
        UniqueConstraint(
            "category",
            "vehicle_type",
            "vehicle_model",
            "trip_type",
            name="uq_vehicle_pricing_config",
        ),
        Index("idx_vehicle_pricing_active", "is_active"),
        Index("idx_vehicle_pricing_type", "category", "vehicle_type"),
    )

    @property
    def distance_pricing(self) -> dict[DistanceBucket, float]:
        """Configured bucket rates, skipping empty columns."""
        rates = {}
        for bucket, column in BUCKET_COLUMNS.items():
            value = getattr(self, column)
            if value is not None:
                rates[bucket] = value
        return rates

    @distance_pricing.setter
    def distance_pricing(self, rates: dict) -> None:
        # str-valued enum members do not hash like their values
        normalised = {DistanceBucket(k): v for k, v in rates.items()}
        for bucket, column in BUCKET_COLUMNS.items():
            setattr(self, column, normalised.get(bucket))
