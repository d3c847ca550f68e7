"""Domain entity representing an admin notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class NotificationKind(str, Enum):
    """Visual severity of a notification (``type`` on the wire)."""

    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    INFO = "info"


class Importance(str, Enum):
    """Relative importance shared by notifications and activity records."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class NotificationCategory(str, Enum):
    """Categories emitted by the built-in event helpers.

    Categories are free text in storage; this list only names the ones the
    application produces itself.
    """

    BLOG = "blog"
    PROJECT = "project"
    SERVICE = "service"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SYSTEM = "system"
    CONTACT = "contact"
    AUTH = "auth"
    GENERAL = "general"


@dataclass
class Notification:
    """Record of a domain event surfaced in the admin notification bell."""

    id: int | None
    message: str
    category: str
    kind: str = NotificationKind.INFO.value
    read: bool = False
    link: str | None = None
    importance: str = Importance.LOW.value
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None


__all__ = ["Importance", "Notification", "NotificationCategory", "NotificationKind"]
