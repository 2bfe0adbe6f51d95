"""
Pytest configuration and shared fixtures.
"""

from datetime import date

import pytest
from fastapi.testclient import TestClient

from errors import UpstreamError
from config import Settings
from main import app, get_settings, get_source, get_today
from models import CandidateRecord

TODAY = date(2024, 3, 1)


class FakeSource:
    """Stands in for NotionSource; returns canned records or raises."""

    def __init__(self, records=None, error: Exception | None = None):
        self.records = records or []
        self.error = error
        self.calls: list[date] = []

    async def fetch_candidates(self, today: date):
        self.calls.append(today)
        if self.error is not None:
            raise self.error
        return list(self.records)


def rec(date_start, title):
    return CandidateRecord(date_start=date_start, title=title)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def make_client():
    """Build a TestClient wired to a FakeSource and a pinned 'today'."""

    def _make(
        source: FakeSource,
        today: date = TODAY,
        raise_server_exceptions: bool = True,
        settings: Settings | None = None,
    ):
        if settings is not None:
            app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[get_source] = lambda: source
        app.dependency_overrides[get_today] = lambda: today
        return TestClient(app, raise_server_exceptions=raise_server_exceptions)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def failing_source():
    return FakeSource(error=UpstreamError("notion status 502"))
