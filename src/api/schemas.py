"""Pydantic request / response schemas for the REST API."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from src.domain.entities import LocationData
from src.domain.enums import DistanceBucket, TripType, VehicleCategory


# ── Shared ────────────────────────────────────────────────────────────


class LocationIn(BaseModel):
    """Geocoded point; incomplete coordinates are tolerated (distance 0)."""

    lat: Optional[float] = Field(None, ge=-90, le=90)
    lng: Optional[float] = Field(None, ge=-180, le=180)
    description: str = ""

    def to_domain(self) -> Optional[LocationData]:
        if self.lat is None or self.lng is None:
            return None
        return LocationData(lat=self.lat, lng=self.lng, description=self.description)


# ── Requests ──────────────────────────────────────────────────────────


class VehiclePricingCreate(BaseModel):
    category: VehicleCategory
    vehicle_type: str = Field(..., min_length=1, max_length=120)
    vehicle_model: str = Field(..., min_length=1, max_length=120)
    trip_type: TripType = TripType.ONE_WAY
    auto_rate: float = Field(0.0, ge=0, description="Flat INR / km (auto only).")
    distance_pricing: dict[DistanceBucket, float] = Field(
        default_factory=dict,
        description="INR / km per distance bucket (car / bus).",
    )
    base_price: float = Field(0.0, ge=0)
    notes: Optional[str] = None
    is_active: bool = True
    is_default: bool = False


class VehiclePricingUpdate(BaseModel):
    auto_rate: Optional[float] = Field(None, ge=0)
    distance_pricing: Optional[dict[DistanceBucket, float]] = None
    base_price: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None
    is_active: Optional[bool] = None


class BulkPricingRequest(BaseModel):
    pricing_data: list[VehiclePricingCreate]


class DistanceRequest(BaseModel):
    origin: Optional[LocationIn] = None
    destination: Optional[LocationIn] = None


class FareRequest(BaseModel):
    category: VehicleCategory
    vehicle_type: str = Field(..., min_length=1)
    vehicle_model: Optional[str] = None
    trip_type: TripType = TripType.ONE_WAY
    distance_km: Optional[float] = Field(
        None,
        ge=0,
        description="Known trip distance; computed from the locations if omitted.",
    )
    origin: Optional[LocationIn] = None
    destination: Optional[LocationIn] = None


# ── Responses ─────────────────────────────────────────────────────────


class VehiclePricingResponse(BaseModel):
    id: int
    category: VehicleCategory
    vehicle_type: str
    vehicle_model: str
    trip_type: TripType
    auto_rate: float
    distance_pricing: dict[DistanceBucket, float]
    base_price: float
    notes: Optional[str] = None
    is_active: bool
    is_default: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class VehiclePricingPage(BaseModel):
    data: list[VehiclePricingResponse]
    total: int
    page: int
    total_pages: int


class BulkPricingResult(BaseModel):
    category: VehicleCategory
    vehicle_type: str
    vehicle_model: str
    trip_type: TripType
    action: str
    id: Optional[int] = None
    error: Optional[str] = None


class VehicleTypeModels(BaseModel):
    type: str
    models: list[str]


class PricingCategory(BaseModel):
    category: VehicleCategory
    types: list[VehicleTypeModels]


class DistanceResponse(BaseModel):
    distance_km: float


class FareResponse(BaseModel):
    distance_km: float
    trip_type: TripType
    price: float
    display_text: str
    is_valid: bool
    bucket: Optional[DistanceBucket] = None
    rate_per_km: Optional[float] = None
    tax: Optional[float] = None
    total: Optional[float] = None


class LocationResponse(BaseModel):
    lat: float
    lng: float
    description: str

    model_config = {"from_attributes": True}


class LocationSuggestionResponse(BaseModel):
    place_id: str
    description: str
    main_text: str = ""
    secondary_text: str = ""

    model_config = {"from_attributes": True}


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    detail: str
