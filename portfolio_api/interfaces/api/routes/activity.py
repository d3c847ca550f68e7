"""Endpoints for the admin activity log."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from portfolio_api.application.use_cases.activity import (
    RequestContext,
    list_activities as list_activities_uc,
    normalize_activity_filters,
    purge_activities,
    record_activity,
)
from portfolio_api.domain.entities import Activity
from portfolio_api.domain.errors import StoreUnavailable
from portfolio_api.infrastructure.database import get_db
from portfolio_api.interfaces.api.dependencies import (
    PageParams,
    activity_page_params,
    get_request_context,
)
from portfolio_api.interfaces.api.exception_handlers import error_response
from portfolio_api.interfaces.api.schemas import (
    ActivityCreate,
    ActivityListResponse,
    ActivityPage,
    ActivityPurgeResponse,
    ActivityPurgeResult,
    ActivityRead,
    ActivityResponse,
    PaginationRead,
)

router = APIRouter(prefix="/admin/activity", tags=["activity"])


def _activity_to_schema(activity: Activity) -> ActivityRead:
    return ActivityRead(
        id=activity.id or 0,
        type=activity.type,
        action=activity.action,
        title=activity.title,
        description=activity.description,
        metadata=activity.metadata or {},
        actor=activity.actor,
        ip=activity.ip,
        user_agent=activity.user_agent,
        status=activity.status,
        importance=activity.importance,
        created_at=activity.created_at,
    )


@router.get("", response_model=ActivityListResponse)
def list_activities(
    type: str | None = Query(None),
    action: str | None = Query(None),
    status_filter: str | None = Query(None, alias="status"),
    importance: str | None = Query(None),
    start_date: datetime | None = Query(None, alias="startDate"),
    end_date: datetime | None = Query(None, alias="endDate"),
    paging: PageParams = Depends(activity_page_params),
    db: Session = Depends(get_db),
):
    """Return activity records newest first; the date range is inclusive."""

    filters = normalize_activity_filters(
        type=type,
        action=action,
        status=status_filter,
        importance=importance,
        start_date=start_date,
        end_date=end_date,
    )
    try:
        result = list_activities_uc(db, filters=filters, page=paging.page, limit=paging.limit)
    except StoreUnavailable as exc:
        empty = ActivityPage(
            activities=[],
            pagination=PaginationRead.empty(page=paging.page, limit=paging.limit),
        )
        return error_response(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            exc.message,
            data=empty.model_dump(by_alias=True),
        )

    return ActivityListResponse(
        data=ActivityPage(
            activities=[_activity_to_schema(item) for item in result.items],
            pagination=PaginationRead.from_domain(result.pagination),
        )
    )


@router.post("", response_model=ActivityResponse, status_code=status.HTTP_201_CREATED)
def create_activity(
    payload: ActivityCreate,
    context: RequestContext = Depends(get_request_context),
    db: Session = Depends(get_db),
) -> ActivityResponse:
    """Record an admin action together with the caller's address and agent."""

    activity = record_activity(
        db,
        type=payload.type,
        action=payload.action,
        title=payload.title,
        description=payload.description,
        metadata=payload.metadata,
        actor=payload.actor,
        status=payload.status,
        importance=payload.importance,
        request_context=context,
    )
    return ActivityResponse(data=_activity_to_schema(activity))


@router.delete("", response_model=ActivityPurgeResponse)
def delete_activities(
    type: str | None = Query(None),
    action: str | None = Query(None),
    status_filter: str | None = Query(None, alias="status"),
    importance: str | None = Query(None),
    older_than: datetime | None = Query(None, alias="olderThan"),
    db: Session = Depends(get_db),
) -> ActivityPurgeResponse:
    """Delete matching records; without filters the whole log is cleared."""

    filters = normalize_activity_filters(
        type=type,
        action=action,
        status=status_filter,
        importance=importance,
        older_than=older_than,
    )
    deleted = purge_activities(db, filters=filters)
    return ActivityPurgeResponse(data=ActivityPurgeResult(deleted=deleted))


__all__ = ["router"]
