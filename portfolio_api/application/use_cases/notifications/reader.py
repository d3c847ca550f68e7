"""Use cases for querying and updating stored notifications."""

from __future__ import annotations

from enum import Enum

from sqlalchemy.orm import Session

from portfolio_api.domain.entities import (
    Importance,
    Notification,
    NotificationKind,
    Page,
    Pagination,
)
from portfolio_api.domain.errors import NotFoundError, ValidationError
from portfolio_api.domain.filters import NotificationFilters
from portfolio_api.infrastructure.repositories import NotificationRepository

_NOT_FOUND = "Notification not found"


def _optional_choice(value: str | None, choices: type[Enum], field_name: str) -> str | None:
    if value is None or not value.strip():
        return None
    raw = value.strip().lower()
    allowed = [choice.value for choice in choices]
    if raw not in allowed:
        raise ValidationError(
            f"Invalid {field_name} '{raw}'. Expected one of: {', '.join(allowed)}"
        )
    return raw


def normalize_notification_filters(
    *,
    category: str | None = None,
    kind: str | None = None,
    read: bool | None = None,
    importance: str | None = None,
) -> NotificationFilters:
    """Validate raw query values and build the matching filter set."""

    return NotificationFilters(
        category=(category or "").strip().lower() or None,
        kind=_optional_choice(kind, NotificationKind, "type"),
        read=read,
        importance=_optional_choice(importance, Importance, "importance"),
    )


def list_notifications(
    session: Session,
    *,
    filters: NotificationFilters | None = None,
    page: int = 1,
    limit: int = 20,
) -> Page[Notification]:
    """Return one page of notifications, newest first."""

    if page < 1 or limit < 1:
        raise ValidationError("page and limit must be positive integers")

    filters = filters or NotificationFilters()
    repository = NotificationRepository(session)
    total = repository.count(filters)
    pagination = Pagination(total=total, page=page, limit=limit)
    items = repository.list(filters, skip=pagination.offset, limit=limit)
    return Page(items=items, pagination=pagination)


def count_unread(session: Session) -> int:
    """Return how many notifications are still unread."""

    return NotificationRepository(session).count_unread()


def list_unread(session: Session, *, limit: int | None = 50) -> list[Notification]:
    """Return the most recent unread notifications."""

    return list(NotificationRepository(session).list_unread(limit=limit))


def get_notification(session: Session, notification_id: int) -> Notification:
    """Return the notification identified by ``notification_id``."""

    notification = NotificationRepository(session).get(notification_id)
    if notification is None:
        raise NotFoundError(_NOT_FOUND)
    return notification


def mark_notification_read(session: Session, notification_id: int) -> Notification:
    """Flag a single notification as read."""

    notification = NotificationRepository(session).mark_as_read(notification_id)
    if notification is None:
        raise NotFoundError(_NOT_FOUND)
    return notification


def mark_all_notifications_read(session: Session) -> int:
    """Flag every unread notification as read and return the modified count."""

    return NotificationRepository(session).mark_all_as_read()


def delete_notification(session: Session, notification_id: int) -> None:
    """Remove a notification or raise :class:`NotFoundError`."""

    if not NotificationRepository(session).delete(notification_id):
        raise NotFoundError(_NOT_FOUND)


def clear_notifications(session: Session) -> int:
    """Delete every notification and return how many were removed."""

    return NotificationRepository(session).delete_all()


__all__ = [
    "clear_notifications",
    "count_unread",
    "delete_notification",
    "get_notification",
    "list_notifications",
    "list_unread",
    "mark_all_notifications_read",
    "mark_notification_read",
    "normalize_notification_filters",
]
