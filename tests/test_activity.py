"""Tests for the admin activity log endpoints and retention."""

from __future__ import annotations

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from portfolio_api.application.use_cases.activity import (
    RequestContext,
    list_activities,
    normalize_activity_filters,
    purge_expired_activities,
    record_activity,
)
from portfolio_api.domain.entities import Activity
from portfolio_api.domain.errors import ValidationError
from portfolio_api.infrastructure.repositories import ActivityRepository
from portfolio_api.utils import now_in_app_timezone


def _post(client: TestClient, **overrides) -> dict:
    payload = {"type": "blog", "action": "create", "title": "New post"}
    payload.update(overrides)
    response = client.post("/admin/activity", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def test_record_activity_captures_request_headers(client: TestClient) -> None:
    response = client.post(
        "/admin/activity",
        json={"type": "blog", "action": "publish", "title": "Launch", "actor": "admin"},
        headers={
            "X-Forwarded-For": "203.0.113.7, 10.0.0.1",
            "User-Agent": "pytest-agent",
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    activity = body["data"]
    assert activity["ip"] == "203.0.113.7"
    assert activity["userAgent"] == "pytest-agent"
    assert activity["status"] == "success"
    assert activity["importance"] == "low"
    assert activity["createdAt"]


def test_request_context_falls_back_to_real_ip() -> None:
    context = RequestContext.from_headers({"x-real-ip": "198.51.100.2"})

    assert context == RequestContext(ip="198.51.100.2", user_agent=None)
    assert RequestContext.from_headers({}) == RequestContext()


def test_record_activity_rejects_unknown_type(client: TestClient) -> None:
    response = client.post(
        "/admin/activity", json={"type": "video", "action": "create", "title": "x"}
    )

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_inserted_activity_is_listed(client: TestClient) -> None:
    created = _post(client)

    body = client.get("/admin/activity").json()

    assert body["success"] is True
    assert [item["id"] for item in body["data"]["activities"]] == [created["id"]]
    assert body["data"]["pagination"]["limit"] == 10
    assert body["data"]["pagination"]["hasMore"] is False


def test_list_filters_by_type_and_status(client: TestClient) -> None:
    _post(client, type="blog", title="a")
    _post(client, type="project", title="b", status="error", importance="high")
    _post(client, type="project", title="c")

    projects = client.get("/admin/activity", params={"type": "project"}).json()
    assert {item["title"] for item in projects["data"]["activities"]} == {"b", "c"}

    errors = client.get("/admin/activity", params={"status": "error"}).json()
    assert [item["title"] for item in errors["data"]["activities"]] == ["b"]


def test_date_range_is_inclusive(db_session) -> None:
    repository = ActivityRepository(db_session)
    base = now_in_app_timezone().replace(microsecond=0)
    for offset in range(3):
        repository.create(
            Activity(
                id=None,
                type="system",
                action="settings",
                title=f"t{offset}",
                created_at=base - timedelta(days=offset),
            )
        )

    filters = normalize_activity_filters(
        start_date=base - timedelta(days=1), end_date=base
    )
    page = list_activities(db_session, filters=filters)

    assert [item.title for item in page.items] == ["t0", "t1"]


def test_delete_with_filters(client: TestClient) -> None:
    _post(client, type="blog", title="a")
    _post(client, type="project", title="b")

    response = client.delete("/admin/activity", params={"type": "blog"})

    assert response.json() == {"success": True, "data": {"deleted": 1}}
    remaining = client.get("/admin/activity").json()["data"]["activities"]
    assert [item["title"] for item in remaining] == ["b"]


def test_delete_without_filters_clears_log(client: TestClient) -> None:
    _post(client, title="a")
    _post(client, title="b")

    assert client.delete("/admin/activity").json()["data"]["deleted"] == 2
    assert client.get("/admin/activity").json()["data"]["pagination"]["total"] == 0


def test_retention_purges_only_expired_records(db_session) -> None:
    record_activity(db_session, type="system", action="login", title="recent")
    now = now_in_app_timezone()

    assert purge_expired_activities(db_session, now=now) == 0
    assert list_activities(db_session).pagination.total == 1

    later = now + timedelta(days=8)
    assert purge_expired_activities(db_session, now=later) == 1
    assert list_activities(db_session).pagination.total == 0


def test_retention_window_is_configurable(db_session) -> None:
    record_activity(db_session, type="system", action="login", title="recent")

    deleted = purge_expired_activities(
        db_session,
        now=now_in_app_timezone() + timedelta(minutes=2),
        retention=timedelta(minutes=1),
    )

    assert deleted == 1


def test_invalid_filter_values_raise() -> None:
    with pytest.raises(ValidationError):
        normalize_activity_filters(action="explode")


def test_list_reports_empty_page_when_store_is_down(client: TestClient, monkeypatch) -> None:
    from portfolio_api.domain.errors import StoreUnavailable

    def broken(self, filters):
        raise StoreUnavailable("The data store is unavailable")

    monkeypatch.setattr(ActivityRepository, "count", broken)

    response = client.get("/admin/activity")

    assert response.status_code == 503
    body = response.json()
    assert body["success"] is False
    assert body["data"]["activities"] == []
    assert body["data"]["pagination"]["total"] == 0
    assert body["data"]["pagination"]["hasMore"] is False
