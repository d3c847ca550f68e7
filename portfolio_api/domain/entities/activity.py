"""Domain entity describing an administrative action in the audit trail."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from .notification import Importance


class ActivityType(str, Enum):
    BLOG = "blog"
    PROJECT = "project"
    SERVICE = "service"
    MESSAGE = "message"
    SYSTEM = "system"


class ActivityAction(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    PUBLISH = "publish"
    UNPUBLISH = "unpublish"
    LOGIN = "login"
    SETTINGS = "settings"
    ERROR = "error"


class ActivityStatus(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class Activity:
    """Represents an admin action retained for a limited time."""

    id: int | None
    type: str
    action: str
    title: str
    description: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    actor: str | None = None
    ip: str | None = None
    user_agent: str | None = None
    status: str = ActivityStatus.SUCCESS.value
    importance: str = Importance.LOW.value
    created_at: datetime | None = None


__all__ = ["Activity", "ActivityAction", "ActivityStatus", "ActivityType"]
