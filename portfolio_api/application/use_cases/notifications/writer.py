"""Use case for creating notifications."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any

from sqlalchemy.orm import Session

from portfolio_api.domain.entities import Importance, Notification, NotificationKind
from portfolio_api.domain.errors import ValidationError
from portfolio_api.infrastructure.repositories import NotificationRepository
from portfolio_api.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


def _normalize_choice(
    value: str | Enum | None, choices: type[Enum], default: Enum, field_name: str
) -> str:
    if value is None:
        return default.value
    raw = value.value if isinstance(value, Enum) else str(value).strip().lower()
    allowed = {choice.value for choice in choices}
    if raw not in allowed:
        msg = f"Invalid {field_name} '{raw}'. Expected one of: {', '.join(sorted(allowed))}"
        raise ValidationError(msg)
    return raw


def _require_text(value: str | Enum | None, field_name: str) -> str:
    if isinstance(value, Enum):
        value = value.value
    text = value.strip() if isinstance(value, str) else ""
    if not text:
        raise ValidationError(f"{field_name} is required")
    return text


def create_notification(
    session: Session,
    *,
    message: str,
    category: str | Enum,
    kind: str | NotificationKind | None = None,
    link: str | None = None,
    importance: str | Importance | None = None,
    metadata: Mapping[str, Any] | None = None,
) -> Notification:
    """Validate and persist a single unread notification."""

    entity = Notification(
        id=None,
        message=_require_text(message, "Message"),
        category=_require_text(category, "Category").lower(),
        kind=_normalize_choice(kind, NotificationKind, NotificationKind.INFO, "type"),
        read=False,
        link=(link or "").strip() or None,
        importance=_normalize_choice(importance, Importance, Importance.LOW, "importance"),
        metadata=dict(metadata or {}),
        created_at=now_in_app_timezone(),
    )
    saved = NotificationRepository(session).create(entity)
    logger.info(
        "Created %s notification %s in category %s", saved.kind, saved.id, saved.category
    )
    return saved


__all__ = ["create_notification"]
