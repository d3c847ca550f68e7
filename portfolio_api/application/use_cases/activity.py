"""Use cases for the admin activity log."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any

from sqlalchemy.orm import Session

from portfolio_api.config import get_settings
from portfolio_api.domain.entities import (
    Activity,
    ActivityAction,
    ActivityStatus,
    ActivityType,
    Importance,
    Page,
    Pagination,
)
from portfolio_api.domain.errors import ValidationError
from portfolio_api.domain.filters import ActivityFilters
from portfolio_api.infrastructure.repositories import ActivityRepository
from portfolio_api.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestContext:
    """Client details captured from the inbound request."""

    ip: str | None = None
    user_agent: str | None = None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "RequestContext":
        """Build a context from request headers; missing headers stay empty."""

        forwarded = headers.get("x-forwarded-for") or ""
        ip = forwarded.split(",")[0].strip() or (headers.get("x-real-ip") or "").strip()
        user_agent = (headers.get("user-agent") or "").strip()
        return cls(ip=ip or None, user_agent=user_agent or None)


def _choice(
    value: str | Enum | None,
    choices: type[Enum],
    field_name: str,
    *,
    default: Enum | None = None,
) -> str | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        if default is None:
            return None
        return default.value
    raw = value.value if isinstance(value, Enum) else value.strip().lower()
    allowed = [choice.value for choice in choices]
    if raw not in allowed:
        raise ValidationError(
            f"Invalid {field_name} '{raw}'. Expected one of: {', '.join(allowed)}"
        )
    return raw


def _required_choice(value: str | Enum | None, choices: type[Enum], field_name: str) -> str:
    normalized = _choice(value, choices, field_name)
    if normalized is None:
        raise ValidationError(f"{field_name} is required")
    return normalized


def normalize_activity_filters(
    *,
    type: str | None = None,
    action: str | None = None,
    status: str | None = None,
    importance: str | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    older_than: datetime | None = None,
) -> ActivityFilters:
    """Validate raw filter values against the closed enumerations."""

    return ActivityFilters(
        type=_choice(type, ActivityType, "type"),
        action=_choice(action, ActivityAction, "action"),
        status=_choice(status, ActivityStatus, "status"),
        importance=_choice(importance, Importance, "importance"),
        start_date=start_date,
        end_date=end_date,
        older_than=older_than,
    )


def record_activity(
    session: Session,
    *,
    type: str | ActivityType,
    action: str | ActivityAction,
    title: str,
    description: str | None = None,
    metadata: Mapping[str, Any] | None = None,
    actor: str | None = None,
    status: str | ActivityStatus | None = None,
    importance: str | Importance | None = None,
    request_context: RequestContext | None = None,
) -> Activity:
    """Persist an activity record enriched with the caller's request details."""

    clean_title = title.strip() if isinstance(title, str) else ""
    if not clean_title:
        raise ValidationError("title is required")

    context = request_context or RequestContext()
    entity = Activity(
        id=None,
        type=_required_choice(type, ActivityType, "type"),
        action=_required_choice(action, ActivityAction, "action"),
        title=clean_title,
        description=description,
        metadata=dict(metadata or {}),
        actor=actor,
        ip=context.ip,
        user_agent=context.user_agent,
        status=_choice(status, ActivityStatus, "status", default=ActivityStatus.SUCCESS),
        importance=_choice(importance, Importance, "importance", default=Importance.LOW),
        created_at=now_in_app_timezone(),
    )
    saved = ActivityRepository(session).create(entity)
    logger.debug("Recorded activity %s (%s/%s)", saved.id, saved.type, saved.action)
    return saved


def list_activities(
    session: Session,
    *,
    filters: ActivityFilters | None = None,
    page: int = 1,
    limit: int = 10,
) -> Page[Activity]:
    """Return one page of activity records, newest first."""

    if page < 1 or limit < 1:
        raise ValidationError("page and limit must be positive integers")

    filters = filters or ActivityFilters()
    repository = ActivityRepository(session)
    pagination = Pagination(total=repository.count(filters), page=page, limit=limit)
    items = repository.list(filters, skip=pagination.offset, limit=limit)
    return Page(items=items, pagination=pagination)


def purge_activities(session: Session, *, filters: ActivityFilters | None = None) -> int:
    """Delete every activity matching ``filters``; no filters deletes everything."""

    deleted = ActivityRepository(session).delete_matching(filters or ActivityFilters())
    logger.info("Purged %s activity records", deleted)
    return deleted


def purge_expired_activities(
    session: Session,
    *,
    now: datetime | None = None,
    retention: timedelta | None = None,
) -> int:
    """Delete activity records older than the retention window."""

    if retention is None:
        retention = timedelta(seconds=get_settings().activity_retention_seconds)
    cutoff = (now or now_in_app_timezone()) - retention
    return ActivityRepository(session).delete_created_before(cutoff)


__all__ = [
    "RequestContext",
    "list_activities",
    "normalize_activity_filters",
    "purge_activities",
    "purge_expired_activities",
    "record_activity",
]
