"""Tests for API endpoints."""
from datetime import date
from zoneinfo import ZoneInfo

from fastapi.testclient import TestClient

from config import Settings
import main
from main import app, get_today
from conftest import FakeSource, rec


def test_health():
    response = TestClient(app).get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_widget_page():
    response = TestClient(app).get("/")
    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert 'fetch("/api/days")' in response.text
    assert "Loading..." in response.text


def test_event_today(make_client):
    client = make_client(FakeSource([rec("2024-03-01T08:00:00Z", "A")]))
    response = client.get("/api/days")
    assert response.status_code == 200
    assert response.json() == {"status": "today", "title": "A"}


def test_event_in_future(make_client):
    client = make_client(FakeSource([rec("2024-03-05", "B")]))
    response = client.get("/api/days")
    assert response.status_code == 200
    assert response.json() == {"days": 4, "title": "B"}


def test_unsorted_source_is_resorted(make_client):
    source = FakeSource([
        rec("2024-05-01", "May"),
        rec("2024-02-01", "Feb"),
        rec("2024-03-03", "Soon"),
    ])
    response = make_client(source).get("/api/days")
    assert response.json() == {"days": 2, "title": "Soon"}


def test_today_is_passed_to_source(make_client):
    source = FakeSource([rec("2024-06-10", "x")])
    make_client(source, today=date(2024, 6, 1)).get("/api/days")
    assert source.calls == [date(2024, 6, 1)]


def test_past_only_is_not_found(make_client):
    response = make_client(FakeSource([rec("2024-02-20", "Old")])).get("/api/days")
    assert response.status_code == 404
    assert response.json() == {"error": "No valid future or today events found"}


def test_empty_source_is_not_found(make_client):
    response = make_client(FakeSource([])).get("/api/days")
    assert response.status_code == 404
    assert response.json() == {"error": "No upcoming pages found"}


def test_malformed_records_only_is_not_found(make_client):
    response = make_client(FakeSource([rec(None, "x"), rec("2024-03-02", None)])).get("/api/days")
    assert response.status_code == 404


def test_upstream_error_is_internal_error(make_client, failing_source):
    response = make_client(failing_source).get("/api/days")
    assert response.status_code == 500
    assert response.json() == {"error": "Internal Server Error"}


def test_unexpected_error_does_not_leak(make_client):
    source = FakeSource(error=RuntimeError("secret detail"))
    response = make_client(source, raise_server_exceptions=False).get("/api/days")
    assert response.status_code == 500
    assert response.json() == {"error": "Internal Server Error"}
    assert "secret" not in response.text


def test_unknown_route_uses_error_shape():
    response = TestClient(app).get("/nope")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


TOKYO_SETTINGS = Settings(timezone="Asia/Tokyo", untitled="タイトルなし")


def test_configured_timezone_decides_the_event_day(make_client):
    # 23:30 UTC on 3/1 is 08:30 on 3/2 in Tokyo
    source = FakeSource([rec("2024-03-01T23:30:00Z", "Launch")])
    tokyo = make_client(source, today=date(2024, 3, 2), settings=TOKYO_SETTINGS).get("/api/days")
    assert tokyo.json() == {"status": "today", "title": "Launch"}

    app.dependency_overrides.clear()
    utc = make_client(source, today=date(2024, 3, 2)).get("/api/days")
    assert utc.status_code == 404


def test_blank_title_uses_configured_placeholder(make_client):
    settings = Settings(untitled="(no name)")
    response = make_client(FakeSource([rec("2024-03-03", "  ")]), settings=settings).get("/api/days")
    assert response.json() == {"days": 2, "title": "(no name)"}


def test_today_is_taken_in_configured_timezone(monkeypatch):
    seen = []
    monkeypatch.setattr(main, "today_in", lambda tz: seen.append(tz) or date(2024, 3, 2))
    assert get_today(TOKYO_SETTINGS) == date(2024, 3, 2)
    assert seen == [ZoneInfo("Asia/Tokyo")]
