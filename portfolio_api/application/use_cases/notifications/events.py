"""Utility helpers to generate notifications for content events."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from portfolio_api.domain.entities import (
    Importance,
    Notification,
    NotificationCategory,
    NotificationKind,
)
from portfolio_api.domain.errors import ValidationError

from .writer import create_notification


@dataclass(frozen=True)
class _ContentEventTemplates:
    category: NotificationCategory
    link: str
    messages: dict[str, str]


_CONTENT_EVENTS: dict[NotificationCategory, _ContentEventTemplates] = {
    NotificationCategory.BLOG: _ContentEventTemplates(
        category=NotificationCategory.BLOG,
        link="/admin/blog",
        messages={
            "create": 'New blog post "{title}" has been created',
            "update": 'Blog post "{title}" has been updated',
            "delete": 'Blog post "{title}" has been deleted',
            "publish": 'Blog post "{title}" has been published',
        },
    ),
    NotificationCategory.PROJECT: _ContentEventTemplates(
        category=NotificationCategory.PROJECT,
        link="/admin/project",
        messages={
            "create": 'New project "{title}" has been created',
            "update": 'Project "{title}" has been updated',
            "delete": 'Project "{title}" has been deleted',
            "launch": 'Project "{title}" has been launched',
        },
    ),
    NotificationCategory.SERVICE: _ContentEventTemplates(
        category=NotificationCategory.SERVICE,
        link="/admin/services",
        messages={
            "create": 'New service "{title}" has been created',
            "update": 'Service "{title}" has been updated',
            "delete": 'Service "{title}" has been deleted',
        },
    ),
    NotificationCategory.EXPERIENCE: _ContentEventTemplates(
        category=NotificationCategory.EXPERIENCE,
        link="/admin/experience",
        messages={
            "create": 'New experience "{title}" has been added',
            "update": 'Experience "{title}" has been updated',
            "delete": 'Experience "{title}" has been deleted',
        },
    ),
    NotificationCategory.EDUCATION: _ContentEventTemplates(
        category=NotificationCategory.EDUCATION,
        link="/admin/education",
        messages={
            "create": 'New education entry "{title}" has been added',
            "update": 'Education entry "{title}" has been updated',
            "delete": 'Education entry "{title}" has been deleted',
        },
    ),
}


def notify_content_event(
    session: Session,
    category: NotificationCategory,
    action: str,
    title: str,
) -> Notification:
    """Persist the notification for ``action`` on a piece of portfolio content.

    Deletions are reported as warnings without a link since the target no
    longer exists; every other action is a success linking to the admin page.
    """

    templates = _CONTENT_EVENTS.get(category)
    if templates is None:
        raise ValidationError(f"No content events are defined for category '{category.value}'")

    template = templates.messages.get(action)
    if template is None:
        allowed = ", ".join(templates.messages)
        raise ValidationError(
            f"Unknown {category.value} action '{action}'. Expected one of: {allowed}"
        )

    is_delete = action == "delete"
    return create_notification(
        session,
        message=template.format(title=title),
        category=templates.category,
        kind=NotificationKind.WARNING if is_delete else NotificationKind.SUCCESS,
        link=None if is_delete else templates.link,
        metadata={"action": action, "title": title},
    )


def notify_blog_event(session: Session, action: str, title: str) -> Notification:
    return notify_content_event(session, NotificationCategory.BLOG, action, title)


def notify_project_event(session: Session, action: str, title: str) -> Notification:
    return notify_content_event(session, NotificationCategory.PROJECT, action, title)


def notify_service_event(session: Session, action: str, title: str) -> Notification:
    return notify_content_event(session, NotificationCategory.SERVICE, action, title)


def notify_experience_event(session: Session, action: str, title: str) -> Notification:
    return notify_content_event(session, NotificationCategory.EXPERIENCE, action, title)


def notify_education_event(session: Session, action: str, title: str) -> Notification:
    return notify_content_event(session, NotificationCategory.EDUCATION, action, title)


def notify_contact_message(
    session: Session, *, name: str, email: str, subject: str
) -> Notification:
    """Announce a message received through the public contact form."""

    return create_notification(
        session,
        message=f'New contact message from {name} ({email}): "{subject}"',
        category=NotificationCategory.CONTACT,
        kind=NotificationKind.INFO,
        link="/admin/messages",
        importance=Importance.HIGH,
        metadata={"name": name, "email": email, "subject": subject},
    )


def notify_system(
    session: Session,
    message: str,
    *,
    kind: str | NotificationKind = NotificationKind.INFO,
    link: str | None = "/admin/settings",
    importance: str | Importance = Importance.LOW,
) -> Notification:
    """Persist a system-level notification."""

    return create_notification(
        session,
        message=message,
        category=NotificationCategory.SYSTEM,
        kind=kind,
        link=link,
        importance=importance,
    )


__all__ = [
    "notify_blog_event",
    "notify_contact_message",
    "notify_content_event",
    "notify_education_event",
    "notify_experience_event",
    "notify_project_event",
    "notify_service_event",
    "notify_system",
]
