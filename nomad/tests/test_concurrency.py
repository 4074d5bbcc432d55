"""
Tests that slow upstream calls in one request do not hold up others.

Requests are sent concurrently through httpx's ASGI transport; handlers
that block on network I/O run in the worker threadpool, so wall-clock
time stays close to a single call instead of the sum of all calls.
"""

import asyncio
import time

import httpx
import pytest

from nomad.booking.orchestrator import BookingOrchestrator
from nomad.booking.schemas import RunResult
from nomad.flights.client import FlightSearchClient
from nomad.flights.mock_data import mock_flight_results
from nomad.main import app
from nomad.shared.config import Settings, get_settings


UPSTREAM_DELAY = 0.5
FLIGHT_BODY = {
    "origin": "JFK",
    "destination": "LHR",
    "departureDate": "2024-01-15",
    "passengers": {"adults": 1},
}
BOOKING_BODY = {"destination": "Lisbon", "checkIn": "2024-03-01", "checkOut": "2024-03-08"}


@pytest.fixture(autouse=True)
def _settings(monkeypatch):
    monkeypatch.setitem(app.dependency_overrides, get_settings, lambda: Settings())


async def _send_all(requests):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://nomad.test") as client:
        start = time.perf_counter()
        responses = await asyncio.gather(
            *(client.request(method, path, json=body) for method, path, body in requests)
        )
        return time.perf_counter() - start, [r.status_code for r in responses]


class TestConcurrentRequests:
    """Slow handlers overlap and leave /health responsive."""

    def test_flight_searches_overlap(self, monkeypatch):
        def _slow_search(self, params):
            time.sleep(UPSTREAM_DELAY)
            return mock_flight_results(params)

        monkeypatch.setattr(FlightSearchClient, "search_flights", _slow_search)

        elapsed, codes = asyncio.run(
            _send_all([("POST", "/api/flights", FLIGHT_BODY)] * 4 + [("GET", "/health", None)])
        )

        assert codes == [200] * 5
        assert elapsed < 4 * UPSTREAM_DELAY * 0.75

    def test_health_answers_while_search_is_pending(self, monkeypatch):
        def _slow_search(self, params):
            time.sleep(UPSTREAM_DELAY)
            return mock_flight_results(params)

        monkeypatch.setattr(FlightSearchClient, "search_flights", _slow_search)

        async def _scenario():
            transport = httpx.ASGITransport(app=app)
            async with httpx.AsyncClient(transport=transport, base_url="http://nomad.test") as client:
                search = asyncio.create_task(client.post("/api/flights", json=FLIGHT_BODY))
                await asyncio.sleep(0.05)
                start = time.perf_counter()
                health = await client.get("/health")
                health_elapsed = time.perf_counter() - start
                await search
                return health.status_code, health_elapsed, search.done()

        status_code, health_elapsed, search_done = asyncio.run(_scenario())

        assert status_code == 200
        assert health_elapsed < UPSTREAM_DELAY / 2
        assert search_done

    def test_booking_runs_overlap(self, monkeypatch):
        def _slow_run(self, request):
            time.sleep(UPSTREAM_DELAY)
            return RunResult(orchestration_id=self.orchestration_id, steps=self.steps, status="completed")

        monkeypatch.setattr(BookingOrchestrator, "run", _slow_run)

        elapsed, codes = asyncio.run(_send_all([("POST", "/api/accommodation", BOOKING_BODY)] * 4))

        assert codes == [200] * 4
        assert elapsed < 4 * UPSTREAM_DELAY * 0.75
