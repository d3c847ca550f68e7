"""Drive the event-stream endpoints at the ASGI level.

A client disconnect is reported in two ways depending on the server: older
servers (ASGI spec 2.3) deliver ``http.disconnect`` through ``receive`` while
newer ones (2.4) make ``send`` raise ``OSError``. The snapshot fetches must
stop in both cases.
"""

from __future__ import annotations

import contextlib
import json

import anyio
import pytest
from starlette.requests import ClientDisconnect

from portfolio_api.application.use_cases.analytics import AnalyticsEvent, SessionTracker
from portfolio_api.application.use_cases.notifications import (
    build_unread_snapshot,
    create_notification,
)
from portfolio_api.config import get_settings
from portfolio_api.interfaces.api.routes import notifications as notification_routes


@pytest.fixture()
def fast_ticks(monkeypatch):
    monkeypatch.setattr(get_settings(), "realtime_interval_seconds", 0.02)


@pytest.fixture()
def counted_snapshots(monkeypatch):
    calls: list[int] = []

    def counting_snapshot(session, **kwargs):
        calls.append(1)
        return build_unread_snapshot(session, **kwargs)

    monkeypatch.setattr(notification_routes, "build_unread_snapshot", counting_snapshot)
    return calls


@pytest.fixture()
def app():
    from main import create_app

    return create_app()


async def _stream(app, path: str, *, frames: int, spec_version: str):
    """Run one GET against ``app`` and hang up after ``frames`` body chunks."""

    start_messages: list[dict] = []
    bodies: list[bytes] = []
    disconnected = anyio.Event()
    fail_send = spec_version >= "2.4"

    async def receive():
        await disconnected.wait()
        return {"type": "http.disconnect"}

    async def send(message):
        if message["type"] == "http.response.start":
            start_messages.append(message)
            return
        if len(bodies) >= frames:
            if fail_send:
                raise OSError("connection reset by peer")
            return
        bodies.append(message.get("body", b""))
        if len(bodies) >= frames:
            disconnected.set()

    scope = {
        "type": "http",
        "asgi": {"version": "3.0", "spec_version": spec_version},
        "http_version": "1.1",
        "method": "GET",
        "scheme": "http",
        "path": path,
        "raw_path": path.encode(),
        "root_path": "",
        "query_string": b"",
        "headers": [(b"host", b"testserver")],
        "client": ("testclient", 50000),
        "server": ("testserver", 80),
    }
    with contextlib.suppress(OSError, ClientDisconnect):
        await app(scope, receive, send)
    return start_messages, bodies


def _frame_payload(body: bytes) -> dict:
    data_line = next(
        line for line in body.decode().splitlines() if line.startswith("data: ")
    )
    return json.loads(data_line.removeprefix("data: "))


@pytest.mark.anyio
@pytest.mark.parametrize("spec_version", ["2.3", "2.4"])
async def test_notification_stream_stops_fetching_after_disconnect(
    app, db_session, fast_ticks, counted_snapshots, spec_version
) -> None:
    create_notification(db_session, message="fresh", category="system")

    start, bodies = await _stream(
        app, "/notifications/realtime", frames=2, spec_version=spec_version
    )
    calls_at_close = len(counted_snapshots)
    await anyio.sleep(0.15)

    assert start[0]["status"] == 200
    headers = dict(start[0]["headers"])
    assert headers[b"content-type"].startswith(b"text/event-stream")
    assert headers[b"cache-control"] == b"no-cache"
    first = _frame_payload(bodies[0])
    assert first["unreadCount"] == 1
    assert first["notifications"][0]["message"] == "fresh"
    assert calls_at_close >= 2
    assert len(counted_snapshots) == calls_at_close


@pytest.mark.anyio
async def test_notification_stream_reports_failed_ticks(
    app, fast_ticks, monkeypatch
) -> None:
    def broken_snapshot(session, **kwargs):
        raise RuntimeError("store down")

    monkeypatch.setattr(notification_routes, "build_unread_snapshot", broken_snapshot)

    _, bodies = await _stream(app, "/notifications/realtime", frames=2, spec_version="2.3")

    assert bodies[0].startswith(b"event: error\n")
    assert _frame_payload(bodies[0]) == {"error": "Failed to fetch notifications"}
    assert bodies[1].startswith(b"event: error\n")


@pytest.mark.anyio
@pytest.mark.parametrize("spec_version", ["2.3", "2.4"])
async def test_analytics_stream_pushes_metrics(app, fast_ticks, spec_version) -> None:
    tracker = SessionTracker()
    tracker.record_event(AnalyticsEvent(type="pageview", session_id="v1", path="/blog"))
    app.state.session_tracker = tracker

    start, bodies = await _stream(
        app, "/admin/analytics/realtime", frames=1, spec_version=spec_version
    )

    assert dict(start[0]["headers"])[b"content-type"].startswith(b"text/event-stream")
    payload = _frame_payload(bodies[0])
    assert payload["metrics"]["pageViews"] == 1
    assert payload["metrics"]["topPages"] == [{"path": "/blog", "views": 1}]
    assert payload["timestamp"]
