"""Tests that slow backend calls do not serialize requests."""

import asyncio
import time

import httpx
import pytest

from eduportal.backend.repository import ContentRepository
from fake_supabase import ADMIN_TOKEN, STUDENT_TOKEN

DELAY = 0.3
REQUESTS = 4


def _slow(monkeypatch, method_name: str) -> None:
    """Make one repository method block like a slow network round trip."""
    original = getattr(ContentRepository, method_name)

    def slow(self, *args, **kwargs):
        time.sleep(DELAY)
        return original(self, *args, **kwargs)

    monkeypatch.setattr(ContentRepository, method_name, slow)


async def _timed_burst(app, token: str, path: str) -> tuple[list[int], float]:
    transport = httpx.ASGITransport(app=app)
    cookies = {"sb-access-token": token, "sb-refresh-token": f"refresh-{token}"}
    async with httpx.AsyncClient(
        transport=transport, base_url="http://testserver", cookies=cookies
    ) as client:
        started = time.perf_counter()
        responses = await asyncio.gather(*(client.get(path) for _ in range(REQUESTS)))
        elapsed = time.perf_counter() - started
    return [r.status_code for r in responses], elapsed


class TestConcurrentRequests:
    """Blocking store calls run off the event loop."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/class/1", "/dashboard", "/class/1/subject/10"])
    async def test_student_pages_overlap(self, app, monkeypatch, path):
        _slow(monkeypatch, "get_selected_class_id")

        statuses, elapsed = await _timed_burst(app, STUDENT_TOKEN, path)

        assert statuses == [200] * REQUESTS
        # serialized handling would take DELAY * REQUESTS
        assert elapsed < DELAY * REQUESTS * 0.6

    @pytest.mark.asyncio
    async def test_admin_dashboard_overlaps(self, app, monkeypatch):
        _slow(monkeypatch, "is_admin")

        statuses, elapsed = await _timed_burst(app, ADMIN_TOKEN, "/admin")

        assert statuses == [200] * REQUESTS
        assert elapsed < DELAY * REQUESTS * 0.6
