"""Endpoints and live-update stream for admin notifications."""

from __future__ import annotations

import logging
from functools import partial

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from portfolio_api.application.use_cases.notifications import (
    build_unread_snapshot,
    clear_notifications as clear_notifications_uc,
    count_unread,
    create_notification as create_notification_uc,
    delete_notification as delete_notification_uc,
    get_notification as get_notification_uc,
    list_notifications as list_notifications_uc,
    mark_all_notifications_read,
    mark_notification_read,
    normalize_notification_filters,
)
from portfolio_api.config import get_settings
from portfolio_api.domain.entities import Notification
from portfolio_api.domain.errors import StoreUnavailable
from portfolio_api.infrastructure.database import get_db
from portfolio_api.infrastructure.realtime import LiveUpdateChannel, database_snapshot
from portfolio_api.interfaces.api.dependencies import PageParams, notification_page_params
from portfolio_api.interfaces.api.exception_handlers import error_response
from portfolio_api.interfaces.api.schemas import (
    DeletedCountResponse,
    ModifiedCountResponse,
    NotificationCreate,
    NotificationListResponse,
    NotificationRead,
    NotificationResponse,
    PaginationRead,
    SuccessResponse,
    UnreadCountResponse,
)
from portfolio_api.interfaces.api.streaming import sse_response

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id or 0,
        message=notification.message,
        type=notification.kind,
        category=notification.category,
        read=notification.read,
        link=notification.link,
        importance=notification.importance,
        metadata=notification.metadata or {},
        created_at=notification.created_at,
    )


@router.post("", response_model=NotificationResponse, status_code=status.HTTP_201_CREATED)
def create_notification(
    payload: NotificationCreate,
    db: Session = Depends(get_db),
) -> NotificationResponse:
    """Persist a new unread notification."""

    notification = create_notification_uc(
        db,
        message=payload.message,
        category=payload.category,
        kind=payload.type,
        link=payload.link,
        importance=payload.importance,
        metadata=payload.metadata,
    )
    return NotificationResponse(notification=_notification_to_schema(notification))


@router.get("", response_model=NotificationListResponse)
def list_notifications(
    category: str | None = Query(None),
    type: str | None = Query(None, description="success, warning, error or info"),
    read: bool | None = Query(None),
    importance: str | None = Query(None),
    paging: PageParams = Depends(notification_page_params),
    db: Session = Depends(get_db),
):
    """Return one page of notifications, newest first."""

    filters = normalize_notification_filters(
        category=category, kind=type, read=read, importance=importance
    )
    try:
        result = list_notifications_uc(
            db, filters=filters, page=paging.page, limit=paging.limit
        )
    except StoreUnavailable as exc:
        empty = PaginationRead.empty(page=paging.page, limit=paging.limit)
        return error_response(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            exc.message,
            data=[],
            pagination=empty.model_dump(by_alias=True),
        )

    return NotificationListResponse(
        data=[_notification_to_schema(item) for item in result.items],
        pagination=PaginationRead.from_domain(result.pagination),
    )


@router.get("/unread-count", response_model=UnreadCountResponse)
def read_unread_count(db: Session = Depends(get_db)) -> UnreadCountResponse:
    return UnreadCountResponse(count=count_unread(db))


@router.get("/realtime")
async def stream_notifications():
    """Stream unread-notification snapshots as server-sent events."""

    settings = get_settings()
    channel = LiveUpdateChannel(
        database_snapshot(
            partial(build_unread_snapshot, limit=settings.notification_snapshot_limit)
        ),
        interval=settings.realtime_interval_seconds,
        name="notifications",
        error_message="Failed to fetch notifications",
    )
    return sse_response(channel)


@router.put("/mark-all-read", response_model=ModifiedCountResponse)
def mark_all_read(db: Session = Depends(get_db)) -> ModifiedCountResponse:
    """Flag every unread notification as read."""

    modified = mark_all_notifications_read(db)
    logger.info("Marked %s notifications as read", modified)
    return ModifiedCountResponse(modified_count=modified)


@router.delete("/clear-all", response_model=DeletedCountResponse)
def clear_all(db: Session = Depends(get_db)) -> DeletedCountResponse:
    """Delete every notification."""

    deleted = clear_notifications_uc(db)
    logger.info("Cleared %s notifications", deleted)
    return DeletedCountResponse(deleted_count=deleted)


@router.get("/{notification_id}", response_model=NotificationResponse)
def read_notification(
    notification_id: int,
    db: Session = Depends(get_db),
) -> NotificationResponse:
    notification = get_notification_uc(db, notification_id)
    return NotificationResponse(notification=_notification_to_schema(notification))


@router.put("/{notification_id}/read", response_model=NotificationResponse)
def mark_read(
    notification_id: int,
    db: Session = Depends(get_db),
) -> NotificationResponse:
    """Flag the notification identified by ``notification_id`` as read."""

    notification = mark_notification_read(db, notification_id)
    return NotificationResponse(notification=_notification_to_schema(notification))


@router.delete("/{notification_id}", response_model=SuccessResponse)
def delete_notification(
    notification_id: int,
    db: Session = Depends(get_db),
) -> SuccessResponse:
    delete_notification_uc(db, notification_id)
    return SuccessResponse()


__all__ = ["router"]
