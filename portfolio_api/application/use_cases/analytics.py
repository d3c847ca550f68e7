"""Visitor session tracking backing the realtime analytics stream."""

from __future__ import annotations

import logging
import threading
from collections import Counter, deque
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from portfolio_api.domain.errors import ValidationError
from portfolio_api.utils import isoformat_or_none, now_in_app_timezone

logger = logging.getLogger(__name__)

EVENT_PAGEVIEW = "pageview"
EVENT_SESSION_UPDATE = "session_update"
EVENT_USER_ACTION = "user_action"
SUPPORTED_EVENTS = (EVENT_PAGEVIEW, EVENT_SESSION_UPDATE, EVENT_USER_ACTION)

_RECENT_ACTIONS_LIMIT = 10
_TOP_PAGES_LIMIT = 5
_MAX_TRACKED_PAGES = 1000


@dataclass(frozen=True)
class AnalyticsEvent:
    """Event reported by the public site for a visitor session."""

    type: str
    session_id: str
    path: str | None = None
    title: str | None = None
    action: str | None = None
    duration_ms: int | None = None
    bounced: bool | None = None


class SessionTracker:
    """Aggregate visitor activity in memory.

    One instance is created per process when the application starts and is
    handed to the request handlers through a dependency. State lives only as
    long as the instance; a restart starts from zero.
    """

    def __init__(
        self,
        *,
        active_window: timedelta = timedelta(minutes=5),
        clock: Callable[[], datetime] = now_in_app_timezone,
        max_tracked_pages: int = _MAX_TRACKED_PAGES,
    ) -> None:
        if max_tracked_pages < 2 * _TOP_PAGES_LIMIT:
            raise ValueError(f"max_tracked_pages must be at least {2 * _TOP_PAGES_LIMIT}")
        self._active_window = active_window
        self._max_tracked_pages = max_tracked_pages
        self._clock = clock
        self._lock = threading.Lock()
        self.reset()

    def reset(self) -> None:
        """Forget every session and counter."""

        with self._lock:
            self._last_seen: dict[str, datetime] = {}
            self._page_views = 0
            self._page_counts: Counter[str] = Counter()
            self._recent_actions: deque[dict[str, Any]] = deque(maxlen=_RECENT_ACTIONS_LIMIT)
            self._finished_sessions = 0
            self._bounced_sessions = 0
            self._total_duration_ms = 0

    def record_event(self, event: AnalyticsEvent) -> None:
        """Fold ``event`` into the aggregate counters."""

        if event.type not in SUPPORTED_EVENTS:
            raise ValidationError(
                f"Unsupported analytics event '{event.type}'. "
                f"Expected one of: {', '.join(SUPPORTED_EVENTS)}"
            )
        if not event.session_id:
            raise ValidationError("sessionId is required")

        now = self._clock()
        with self._lock:
            self._evict_idle_sessions(now)
            self._last_seen[event.session_id] = now
            if event.type == EVENT_PAGEVIEW:
                self._page_views += 1
                if event.path:
                    self._count_page(event.path)
                self._push_action(EVENT_PAGEVIEW, event.path, now)
            elif event.type == EVENT_USER_ACTION:
                self._push_action(event.action or EVENT_USER_ACTION, event.path, now)
            else:
                self._finished_sessions += 1
                self._total_duration_ms += max(event.duration_ms or 0, 0)
                if event.bounced:
                    self._bounced_sessions += 1

    def snapshot(self, now: datetime | None = None) -> dict[str, Any]:
        """Return the current metrics; sessions idle past the window are dropped."""

        now = now or self._clock()
        with self._lock:
            self._evict_idle_sessions(now)
            finished = self._finished_sessions
            return {
                "activeUsers": len(self._last_seen),
                "pageViews": self._page_views,
                "topPages": [
                    {"path": path, "views": views}
                    for path, views in self._page_counts.most_common(_TOP_PAGES_LIMIT)
                ],
                "recentActions": list(self._recent_actions),
                "avgSessionDuration": (self._total_duration_ms // finished) if finished else 0,
                "bounceRate": (self._bounced_sessions / finished * 100) if finished else 0.0,
                "totalSessions": finished,
            }

    def _evict_idle_sessions(self, now: datetime) -> None:
        cutoff = now - self._active_window
        expired = [sid for sid, seen in self._last_seen.items() if seen < cutoff]
        for session_id in expired:
            del self._last_seen[session_id]

    def _count_page(self, path: str) -> None:
        self._page_counts[path] += 1
        if len(self._page_counts) > self._max_tracked_pages:
            # Keep the busiest half; rarely visited paths are forgotten.
            keep = self._page_counts.most_common(self._max_tracked_pages // 2)
            self._page_counts = Counter(dict(keep))

    def _push_action(self, action: str, path: str | None, when: datetime) -> None:
        self._recent_actions.appendleft(
            {"type": action, "path": path, "timestamp": isoformat_or_none(when)}
        )


def build_metrics_snapshot(tracker: SessionTracker) -> dict[str, Any]:
    """Return the payload pushed on each analytics channel tick."""

    return {
        "timestamp": isoformat_or_none(now_in_app_timezone()),
        "metrics": tracker.snapshot(),
    }


__all__ = [
    "AnalyticsEvent",
    "EVENT_PAGEVIEW",
    "EVENT_SESSION_UPDATE",
    "EVENT_USER_ACTION",
    "SessionTracker",
    "build_metrics_snapshot",
]
