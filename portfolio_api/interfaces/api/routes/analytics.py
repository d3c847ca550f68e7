"""Visitor analytics ingestion and the realtime metrics stream."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from portfolio_api.application.use_cases.analytics import (
    AnalyticsEvent,
    SessionTracker,
    build_metrics_snapshot,
)
from portfolio_api.config import get_settings
from portfolio_api.infrastructure.realtime import LiveUpdateChannel
from portfolio_api.interfaces.api.dependencies import get_session_tracker
from portfolio_api.interfaces.api.schemas import AnalyticsEventCreate, SuccessResponse
from portfolio_api.interfaces.api.streaming import sse_response

router = APIRouter(tags=["analytics"])


@router.post(
    "/analytics/events",
    response_model=SuccessResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
def record_analytics_event(
    payload: AnalyticsEventCreate,
    tracker: SessionTracker = Depends(get_session_tracker),
) -> SuccessResponse:
    """Fold a visitor event into the in-memory session metrics."""

    tracker.record_event(
        AnalyticsEvent(
            type=payload.type,
            session_id=payload.session_id,
            path=payload.path,
            title=payload.title,
            action=payload.action,
            duration_ms=payload.duration_ms,
            bounced=payload.bounced,
        )
    )
    return SuccessResponse()


@router.get("/admin/analytics/realtime")
async def stream_metrics(tracker: SessionTracker = Depends(get_session_tracker)):
    """Stream aggregated visitor metrics as server-sent events."""

    async def fetch():
        return build_metrics_snapshot(tracker)

    channel = LiveUpdateChannel(
        fetch,
        interval=get_settings().realtime_interval_seconds,
        name="analytics",
        error_message="Failed to fetch real-time metrics",
    )
    return sse_response(channel)


__all__ = ["router"]
