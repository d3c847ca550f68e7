"""Tests for the injected visitor session tracker."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from portfolio_api.application.use_cases.analytics import AnalyticsEvent, SessionTracker
from portfolio_api.domain.errors import ValidationError


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def tracker(clock: FakeClock) -> SessionTracker:
    return SessionTracker(active_window=timedelta(minutes=5), clock=clock)


def test_pageviews_feed_counters_and_top_pages(tracker: SessionTracker) -> None:
    tracker.record_event(AnalyticsEvent(type="pageview", session_id="a", path="/"))
    tracker.record_event(AnalyticsEvent(type="pageview", session_id="b", path="/blog"))
    tracker.record_event(AnalyticsEvent(type="pageview", session_id="a", path="/blog"))

    metrics = tracker.snapshot()

    assert metrics["activeUsers"] == 2
    assert metrics["pageViews"] == 3
    assert metrics["topPages"][0] == {"path": "/blog", "views": 2}
    assert len(metrics["recentActions"]) == 3


def test_idle_sessions_drop_out_of_active_users(
    tracker: SessionTracker, clock: FakeClock
) -> None:
    tracker.record_event(AnalyticsEvent(type="pageview", session_id="a", path="/"))
    clock.advance(minutes=3)
    tracker.record_event(AnalyticsEvent(type="pageview", session_id="b", path="/"))
    clock.advance(minutes=3)

    assert tracker.snapshot()["activeUsers"] == 1


def test_session_updates_compute_duration_and_bounce_rate(tracker: SessionTracker) -> None:
    tracker.record_event(
        AnalyticsEvent(type="session_update", session_id="a", duration_ms=1000, bounced=True)
    )
    tracker.record_event(
        AnalyticsEvent(type="session_update", session_id="b", duration_ms=3000, bounced=False)
    )

    metrics = tracker.snapshot()

    assert metrics["totalSessions"] == 2
    assert metrics["avgSessionDuration"] == 2000
    assert metrics["bounceRate"] == 50.0


def test_recent_actions_keep_the_last_ten(tracker: SessionTracker) -> None:
    for index in range(12):
        tracker.record_event(
            AnalyticsEvent(type="user_action", session_id="a", action=f"click-{index}")
        )

    actions = tracker.snapshot()["recentActions"]

    assert len(actions) == 10
    assert actions[0]["type"] == "click-11"


def test_unknown_event_is_rejected(tracker: SessionTracker) -> None:
    with pytest.raises(ValidationError):
        tracker.record_event(AnalyticsEvent(type="scroll", session_id="a"))


def test_reset_clears_everything(tracker: SessionTracker) -> None:
    tracker.record_event(AnalyticsEvent(type="pageview", session_id="a", path="/"))

    tracker.reset()

    assert tracker.snapshot()["pageViews"] == 0
    assert tracker.snapshot()["activeUsers"] == 0


def test_events_endpoint_uses_the_app_tracker(client: TestClient) -> None:
    response = client.post(
        "/analytics/events",
        json={"type": "pageview", "sessionId": "visitor-1", "path": "/projects"},
    )

    assert response.status_code == 202
    assert response.json() == {"success": True}
    metrics = client.app.state.session_tracker.snapshot()
    assert metrics["pageViews"] == 1
    assert metrics["topPages"] == [{"path": "/projects", "views": 1}]


def test_events_endpoint_rejects_unknown_type(client: TestClient) -> None:
    response = client.post(
        "/analytics/events", json={"type": "hover", "sessionId": "visitor-1"}
    )

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_each_app_gets_its_own_tracker() -> None:
    from main import create_app

    first, second = create_app(), create_app()
    with TestClient(first) as first_client, TestClient(second) as second_client:
        first_client.post(
            "/analytics/events", json={"type": "pageview", "sessionId": "s", "path": "/"}
        )

        assert second_client.app.state.session_tracker.snapshot()["pageViews"] == 0


def test_idle_sessions_are_forgotten_while_recording(clock: FakeClock) -> None:
    tracker = SessionTracker(active_window=timedelta(seconds=1), clock=clock)

    for index in range(500):
        tracker.record_event(
            AnalyticsEvent(type="pageview", session_id=f"s{index}", path="/")
        )
        clock.advance(seconds=10)

    assert len(tracker._last_seen) == 1


def test_tracked_pages_are_capped() -> None:
    tracker = SessionTracker(max_tracked_pages=20)

    for _ in range(3):
        tracker.record_event(AnalyticsEvent(type="pageview", session_id="a", path="/home"))
    for index in range(500):
        tracker.record_event(
            AnalyticsEvent(type="pageview", session_id="a", path=f"/p/{index}")
        )

    assert len(tracker._page_counts) <= 20
    metrics = tracker.snapshot()
    assert metrics["topPages"][0] == {"path": "/home", "views": 3}
    assert metrics["pageViews"] == 503


def test_page_cap_must_keep_the_top_pages() -> None:
    with pytest.raises(ValueError):
        SessionTracker(max_tracked_pages=5)
