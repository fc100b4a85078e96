"""Tests for the geocoding client lifecycle and lookups (mocked transport)."""

import asyncio

import httpx
import pytest

from src.domain.entities import LocationData
from src.infrastructure.geocoding import (
    GeocodingClient,
    GeocodingError,
    GeocodingUnavailable,
)
from tests.conftest import PLACES_BASE_URL, places_api


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_not_ready_before_initialize(self):
        client = GeocodingClient(
            "test-key", PLACES_BASE_URL, transport=httpx.MockTransport(places_api)
        )
        assert not client.is_ready
        with pytest.raises(GeocodingUnavailable):
            await client.suggest("Mum")

    @pytest.mark.asyncio
    async def test_ready_resolves_after_initialize(self):
        client = GeocodingClient(
            "test-key", PLACES_BASE_URL, transport=httpx.MockTransport(places_api)
        )
        waiter = asyncio.create_task(client.ready())
        await asyncio.sleep(0)
        assert not waiter.done()

        await client.initialize()
        await asyncio.wait_for(waiter, timeout=1)
        assert client.is_ready
        await client.aclose()
        assert not client.is_ready

    @pytest.mark.asyncio
    async def test_initialize_is_idempotent(self, geocoder):
        await geocoder.initialize()
        assert geocoder.is_ready

    @pytest.mark.asyncio
    async def test_without_api_key_stays_disabled(self):
        client = GeocodingClient("")
        await client.initialize()
        await asyncio.wait_for(client.ready(), timeout=1)
        assert not client.is_ready
        with pytest.raises(GeocodingUnavailable):
            await client.place_details("place-pune")


class TestSuggest:
    @pytest.mark.asyncio
    async def test_returns_suggestions(self, geocoder):
        suggestions = await geocoder.suggest("Mum")
        assert [s.place_id for s in suggestions] == ["place-mumbai"]
        assert suggestions[0].main_text == "Mumbai"
        assert suggestions[0].secondary_text == "Maharashtra, India"

    @pytest.mark.asyncio
    async def test_no_results(self, geocoder):
        assert await geocoder.suggest("Atlantis") == []

    @pytest.mark.asyncio
    async def test_blank_input_skips_request(self):
        def fail(request):
            raise AssertionError("no request expected")

        client = GeocodingClient(
            "test-key", PLACES_BASE_URL, transport=httpx.MockTransport(fail)
        )
        await client.initialize()
        assert await client.suggest("   ") == []
        await client.aclose()

    @pytest.mark.asyncio
    async def test_sends_country_restriction(self):
        seen = []

        def record(request):
            seen.append(request)
            return httpx.Response(200, json={"status": "ZERO_RESULTS"})

        client = GeocodingClient(
            "test-key", PLACES_BASE_URL, country="in",
            transport=httpx.MockTransport(record),
        )
        await client.initialize()
        await client.suggest("Pune")
        await client.aclose()

        params = seen[0].url.params
        assert params["components"] == "country:in"
        assert params["types"] == "geocode"
        assert params["key"] == "test-key"


class TestPlaceDetails:
    @pytest.mark.asyncio
    async def test_resolves_coordinates(self, geocoder):
        location = await geocoder.place_details("place-pune")
        assert location == LocationData(18.5204, 73.8567, "Pune, Maharashtra, India")

    @pytest.mark.asyncio
    async def test_unknown_place(self, geocoder):
        assert await geocoder.place_details("nowhere") is None

    @pytest.mark.asyncio
    async def test_missing_geometry(self):
        def no_geometry(request):
            return httpx.Response(200, json={"status": "OK", "result": {"name": "X"}})

        client = GeocodingClient(
            "test-key", PLACES_BASE_URL, transport=httpx.MockTransport(no_geometry)
        )
        await client.initialize()
        assert await client.place_details("x") is None
        await client.aclose()


class TestUpstreamFailures:
    @pytest.mark.asyncio
    async def test_http_error_raises(self):
        client = GeocodingClient(
            "test-key",
            PLACES_BASE_URL,
            transport=httpx.MockTransport(lambda request: httpx.Response(500)),
        )
        await client.initialize()
        with pytest.raises(GeocodingError):
            await client.suggest("Mum")
        await client.aclose()

    @pytest.mark.asyncio
    async def test_malformed_json_raises(self):
        client = GeocodingClient(
            "test-key",
            PLACES_BASE_URL,
            transport=httpx.MockTransport(
                lambda request: httpx.Response(200, content=b"<html>")
            ),
        )
        await client.initialize()
        with pytest.raises(GeocodingError):
            await client.place_details("place-pune")
        await client.aclose()
