"""Tests for the notification use cases and content-event helpers."""

from __future__ import annotations

import pytest

from portfolio_api.application.use_cases.notifications import (
    build_unread_snapshot,
    count_unread,
    create_notification,
    list_notifications,
    mark_notification_read,
    normalize_notification_filters,
    notify_blog_event,
    notify_contact_message,
    notify_education_event,
    notify_project_event,
    notify_system,
)
from portfolio_api.domain.errors import NotFoundError, StoreUnavailable, ValidationError
from portfolio_api.domain.filters import NotificationFilters
from portfolio_api.infrastructure.repositories import NotificationRepository


def test_blog_and_contact_scenario(db_session) -> None:
    blog = create_notification(
        db_session, message="A", category="blog", importance="high"
    )
    create_notification(db_session, message="B", category="contact", importance="low")

    page = list_notifications(db_session, filters=NotificationFilters(category="blog"))
    assert [item.id for item in page.items] == [blog.id]
    assert count_unread(db_session) == 2

    mark_notification_read(db_session, blog.id)

    assert count_unread(db_session) == 1


def test_mark_read_unknown_id_raises(db_session) -> None:
    with pytest.raises(NotFoundError):
        mark_notification_read(db_session, 12345)


def test_blog_publish_links_to_admin_page(db_session) -> None:
    notification = notify_blog_event(db_session, "publish", "Hello World")

    assert notification.message == 'Blog post "Hello World" has been published'
    assert notification.category == "blog"
    assert notification.kind == "success"
    assert notification.link == "/admin/blog"
    assert notification.metadata == {"action": "publish", "title": "Hello World"}


def test_delete_events_are_warnings_without_link(db_session) -> None:
    notification = notify_project_event(db_session, "delete", "Old site")

    assert notification.kind == "warning"
    assert notification.link is None
    assert notification.message == 'Project "Old site" has been deleted'


def test_unknown_content_action_is_rejected(db_session) -> None:
    with pytest.raises(ValidationError):
        notify_education_event(db_session, "publish", "MSc")

    assert count_unread(db_session) == 0


def test_contact_message_is_high_importance(db_session) -> None:
    notification = notify_contact_message(
        db_session, name="Ada", email="ada@example.com", subject="Hire"
    )

    assert notification.category == "contact"
    assert notification.importance == "high"
    assert notification.link == "/admin/messages"
    assert "Ada" in notification.message


def test_system_notification_defaults(db_session) -> None:
    notification = notify_system(db_session, "Backup completed")

    assert notification.category == "system"
    assert notification.kind == "info"
    assert notification.link == "/admin/settings"


def test_unread_snapshot_contains_only_unread(db_session) -> None:
    first = create_notification(db_session, message="one", category="system")
    create_notification(db_session, message="two", category="system")
    mark_notification_read(db_session, first.id)

    snapshot = build_unread_snapshot(db_session, limit=10)

    assert snapshot["unreadCount"] == 1
    assert [item["message"] for item in snapshot["notifications"]] == ["two"]
    assert snapshot["notifications"][0]["type"] == "info"
    assert snapshot["timestamp"]


def test_snapshot_limit_does_not_change_count(db_session) -> None:
    for index in range(5):
        create_notification(db_session, message=f"n{index}", category="system")

    snapshot = build_unread_snapshot(db_session, limit=2)

    assert len(snapshot["notifications"]) == 2
    assert snapshot["unreadCount"] == 5


def test_normalize_filters_validates_choices() -> None:
    filters = normalize_notification_filters(category=" Blog ", kind="SUCCESS")

    assert filters == NotificationFilters(category="blog", kind="success")
    with pytest.raises(ValidationError):
        normalize_notification_filters(kind="fatal")


def test_store_failures_surface_as_store_unavailable(db_session, monkeypatch) -> None:
    from sqlalchemy.exc import OperationalError

    def broken(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(db_session, "scalar", broken)

    with pytest.raises(StoreUnavailable):
        NotificationRepository(db_session).count_unread()
