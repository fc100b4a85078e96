"""
Google Places geocoding client.

Produces the ``LocationData`` consumed by the distance calculator.

Lifecycle
---------
One client is constructed by the app factory and handed to routes through
dependency injection.  ``await initialize()`` opens the shared HTTP client
and releases everyone blocked in ``await ready()``.  Without an API key the
client stays disabled and every lookup raises ``GeocodingUnavailable``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import httpx

from src.domain.entities import LocationData, LocationSuggestion

logger = logging.getLogger(__name__)

DETAIL_FIELDS = "name,formatted_address,geometry,place_id"


class GeocodingError(Exception):
    """Raised when the geocoding API cannot be reached or answers garbage."""


class GeocodingUnavailable(GeocodingError):
    """Raised when the client is disabled or not initialised yet."""


class GeocodingClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = "https://maps.googleapis.com/maps/api/place",
        country: str = "in",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.country = country
        self.timeout = timeout
        self._transport = transport
        self._http: Optional[httpx.AsyncClient] = None
        self._ready = asyncio.Event()

    @property
    def is_ready(self) -> bool:
        return self._ready.is_set() and self._http is not None

    async def initialize(self) -> None:
        """Open the HTTP client.  Safe to call more than once."""
        if self._ready.is_set():
            return
        if not self.api_key:
            logger.warning(
                "Google Maps API key not configured; location lookups disabled"
            )
        else:
            self._http = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            )
            logger.info("Geocoding client ready (country=%s)", self.country)
        self._ready.set()

    async def ready(self) -> None:
        """Wait until ``initialize`` has run."""
        await self._ready.wait()

    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None
        self._ready.clear()

    # ── Lookups ───────────────────────────────────────────────────────

    async def suggest(self, text: str) -> list[LocationSuggestion]:
        """Autocomplete *text* into place suggestions."""
        if not text.strip():
            return []

        payload = await self._get(
            "/autocomplete/json",
            {
                "input": text,
                "types": "geocode",
                "components": f"country:{self.country}",
            },
        )
        if payload.get("status") != "OK":
            return []

        return [
            LocationSuggestion(
                place_id=p["place_id"],
                description=p.get("description", ""),
                main_text=p.get("structured_formatting", {}).get("main_text", ""),
                secondary_text=p.get("structured_formatting", {}).get(
                    "secondary_text", ""
                ),
            )
            for p in payload.get("predictions", [])
            if p.get("place_id")
        ]

    async def place_details(self, place_id: str) -> Optional[LocationData]:
        """Resolve a place id to coordinates, or ``None`` if unknown."""
        payload = await self._get(
            "/details/json", {"place_id": place_id, "fields": DETAIL_FIELDS}
        )
        if payload.get("status") != "OK":
            return None

        result = payload.get("result") or {}
        location = result.get("geometry", {}).get("location") or {}
        if "lat" not in location or "lng" not in location:
            return None

        return LocationData(
            lat=float(location["lat"]),
            lng=float(location["lng"]),
            description=result.get("formatted_address") or result.get("name", ""),
        )

    async def _get(self, path: str, params: dict) -> dict:
        if not self.is_ready:
            raise GeocodingUnavailable("Geocoding client is not available")

        try:
            response = await self._http.get(
                path, params={**params, "key": self.api_key}
            )
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Geocoding request %s failed: %s", path, exc)
            raise GeocodingError(f"Geocoding request failed: {exc}") from exc
