"""
Location endpoints
==================

GET /api/v1/locations/suggestions?q=... -- autocomplete a typed place name
GET /api/v1/locations/{place_id}        -- coordinates for a suggestion
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from src.api.dependencies import get_geocoder
from src.api.middleware import limiter
from src.api.schemas import LocationResponse, LocationSuggestionResponse
from src.config import settings
from src.infrastructure.geocoding import (
    GeocodingClient,
    GeocodingError,
    GeocodingUnavailable,
)

router = APIRouter(prefix="/locations", tags=["locations"])


def _upstream_error(exc: GeocodingError) -> HTTPException:
    if isinstance(exc, GeocodingUnavailable):
        return HTTPException(status_code=503, detail="Location search unavailable")
    return HTTPException(status_code=502, detail="Location search failed")


@router.get(
    "/suggestions",
    response_model=list[LocationSuggestionResponse],
    summary="Autocomplete a place name",
)
@limiter.limit(settings.rate_limit)
async def get_suggestions(
    request: Request,
    q: str = Query(..., max_length=200),
    geocoder: GeocodingClient = Depends(get_geocoder),
):
    try:
        return await geocoder.suggest(q)
    except GeocodingError as exc:
        raise _upstream_error(exc) from exc


@router.get(
    "/{place_id}",
    response_model=LocationResponse,
    summary="Resolve a place to coordinates",
)
@limiter.limit(settings.rate_limit)
async def get_location(
    request: Request,
    place_id: str,
    geocoder: GeocodingClient = Depends(get_geocoder),
):
    try:
        location = await geocoder.place_details(place_id)
    except GeocodingError as exc:
        raise _upstream_error(exc) from exc

    if location is None:
        raise HTTPException(status_code=404, detail="Location not found")
    return location
