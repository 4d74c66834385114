"""
Tests for ElevationClient.

Uses httpx.MockTransport as a stand-in for the elevation API.
"""

import asyncio
import json

import httpx
import pytest

from app.features.elevation import (
    ElevationClient,
    ElevationClientConfig,
    ElevationSource,
)

API_URL = "https://elevation.test/api/v1/lookup"


def make_coords(n):
    return [(14.0 + i * 0.0001, 58.0 + i * 0.0001) for i in range(n)]


class FakeElevationAPI:
    """Answers lookups with elevation = request index within the batch + offset."""

    def __init__(self, fail_calls=(), status_code=503):
        self.calls = []
        self.fail_calls = set(fail_calls)
        self.status_code = status_code

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        locations = body["locations"]
        call_number = len(self.calls) + 1
        self.calls.append(locations)

        if call_number in self.fail_calls:
            return httpx.Response(self.status_code, text="upstream unavailable")

        results = [
            {
                "latitude": loc["latitude"],
                "longitude": loc["longitude"],
                "elevation": round(loc["latitude"] * 10000) - 580000 + 100,
            }
            for loc in locations
        ]
        return httpx.Response(200, json={"results": results})


def make_client(api, batch_size=1000, max_retries=0):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(api.handler))
    config = ElevationClientConfig(
        endpoint_url=API_URL,
        max_batch_size=batch_size,
        max_retries=max_retries,
    )
    return ElevationClient(config, http_client=http_client)


def expected_elevation(coord):
    return round(coord[1] * 10000) - 580000 + 100


# =============================================================================
# Test Batching
# =============================================================================

class TestBatching:
    """Tests for batch splitting and ordering."""

    def test_2500_points_three_requests(self):
        api = FakeElevationAPI()
        client = make_client(api)
        coords = make_coords(2500)

        elevations = asyncio.run(client.fetch_elevations(coords))

        assert [len(c) for c in api.calls] == [1000, 1000, 500]
        assert len(elevations) == 2500
        assert elevations == [expected_elevation(c) for c in coords]

    def test_request_body_lat_lon(self):
        """Coordinates are (lon, lat); the API wants named latitude/longitude."""
        api = FakeElevationAPI()
        client = make_client(api)

        asyncio.run(client.fetch_elevations([(18.0, 59.3)]))

        assert api.calls[0] == [{"latitude": 59.3, "longitude": 18.0}]

    def test_custom_batch_size(self):
        api = FakeElevationAPI()
        client = make_client(api, batch_size=3)

        asyncio.run(client.fetch_elevations(make_coords(7)))

        assert [len(c) for c in api.calls] == [3, 3, 1]

    def test_empty_input_no_requests(self):
        api = FakeElevationAPI()
        client = make_client(api)

        assert asyncio.run(client.fetch_elevations([])) == []
        assert api.calls == []

    def test_invalid_batch_size(self):
        with pytest.raises(ValueError):
            ElevationClient(ElevationClientConfig(endpoint_url=API_URL, max_batch_size=0))


# =============================================================================
# Test Fallback
# =============================================================================

class TestFallback:
    """Failed batches are zero-filled, other batches are kept."""

    def test_failed_batch_zero_filled(self):
        api = FakeElevationAPI(fail_calls={2})
        client = make_client(api)
        coords = make_coords(2500)

        series = asyncio.run(client.fetch_elevation_series(coords))

        assert len(series.elevations) == 2500
        assert series.elevations[:1000] == [expected_elevation(c) for c in coords[:1000]]
        assert series.elevations[1000:2000] == [0.0] * 1000
        assert series.elevations[2000:] == [expected_elevation(c) for c in coords[2000:]]
        assert series.sources[1500] is ElevationSource.FALLBACK
        assert series.sources[0] is ElevationSource.MEASURED
        assert series.fallback_count == 1000
        assert series.is_degraded

    def test_no_retry_by_default(self):
        api = FakeElevationAPI(fail_calls={1})
        client = make_client(api)

        elevations = asyncio.run(client.fetch_elevations(make_coords(10)))

        assert elevations == [0.0] * 10
        assert len(api.calls) == 1

    def test_retry_when_configured(self):
        api = FakeElevationAPI(fail_calls={1})
        client = make_client(api, max_retries=1)
        coords = make_coords(10)

        series = asyncio.run(client.fetch_elevation_series(coords))

        assert len(api.calls) == 2
        assert series.elevations == [expected_elevation(c) for c in coords]
        assert not series.is_degraded

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        client = ElevationClient(
            ElevationClientConfig(endpoint_url=API_URL),
            http_client=http_client,
        )

        assert asyncio.run(client.fetch_elevations(make_coords(5))) == [0.0] * 5

    def test_malformed_body(self):
        def handler(request):
            return httpx.Response(200, json={"unexpected": []})

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        client = ElevationClient(
            ElevationClientConfig(endpoint_url=API_URL),
            http_client=http_client,
        )

        series = asyncio.run(client.fetch_elevation_series(make_coords(4)))
        assert series.elevations == [0.0] * 4
        assert series.fallback_count == 4

    def test_result_count_mismatch(self):
        def handler(request):
            return httpx.Response(200, json={"results": [{"elevation": 10}]})

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        client = ElevationClient(
            ElevationClientConfig(endpoint_url=API_URL),
            http_client=http_client,
        )

        assert asyncio.run(client.fetch_elevations(make_coords(3))) == [0.0] * 3
