"""
Requests must not wait on each other's store calls.
"""

import asyncio
import time

import httpx

from timetable_api.core.dependencies import get_db
from timetable_api.main import app

STORE_LATENCY = 0.4
REQUESTS = 4


async def _fetch_courses_concurrently() -> list[httpx.Response]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        return await asyncio.gather(*(http.get("/api/courses") for _ in range(REQUESTS)))


class TestConcurrentRequests:
    def test_slow_store_does_not_serialize_requests(self, db):
        db.latency = STORE_LATENCY
        app.dependency_overrides[get_db] = lambda: db
        try:
            started = time.perf_counter()
            responses = asyncio.run(_fetch_courses_concurrently())
            elapsed = time.perf_counter() - started
        finally:
            app.dependency_overrides.clear()

        assert [r.status_code for r in responses] == [200] * REQUESTS
        assert len(db.calls) == REQUESTS
        # serialized handlers would need REQUESTS * STORE_LATENCY
        assert elapsed < STORE_LATENCY * REQUESTS / 2
