"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, false, func, select, update
from sqlalchemy.orm import Session

from portfolio_api.domain.entities import Notification
from portfolio_api.domain.filters import NotificationFilters
from portfolio_api.infrastructure.database import translate_store_errors
from portfolio_api.infrastructure.models import NotificationModel
from portfolio_api.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    @translate_store_errors
    def create(self, notification: Notification) -> Notification:
        model = NotificationModel(
            message=notification.message,
            kind=notification.kind,
            category=notification.category,
            read=notification.read,
            link=notification.link,
            importance=notification.importance,
            meta=dict(notification.metadata or {}),
            created_at=ensure_app_naive_datetime(
                notification.created_at or now_in_app_timezone()
            ),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @translate_store_errors
    def get(self, notification_id: int) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        if model is None:
            return None
        return self._to_entity(model)

    @translate_store_errors
    def list(
        self,
        filters: NotificationFilters,
        *,
        skip: int = 0,
        limit: int | None = None,
    ) -> Sequence[Notification]:
        statement = self._apply_filters(select(NotificationModel), filters)
        statement = statement.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        ).offset(skip)
        if limit is not None:
            statement = statement.limit(limit)
        return [self._to_entity(model) for model in self.session.scalars(statement)]

    @translate_store_errors
    def count(self, filters: NotificationFilters) -> int:
        statement = self._apply_filters(
            select(func.count()).select_from(NotificationModel), filters
        )
        return int(self.session.scalar(statement) or 0)

    def list_unread(self, *, limit: int | None = 50) -> Sequence[Notification]:
        return self.list(NotificationFilters(read=False), limit=limit)

    def count_unread(self) -> int:
        return self.count(NotificationFilters(read=False))

    @translate_store_errors
    def mark_as_read(self, notification_id: int) -> Notification | None:
        """Flag one notification as read, returning ``None`` if it does not exist."""

        model = self.session.get(NotificationModel, notification_id)
        if model is None:
            return None
        if not model.read:
            model.read = True
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    @translate_store_errors
    def mark_all_as_read(self) -> int:
        """Flag every unread notification as read in a single statement."""

        result = self.session.execute(
            update(NotificationModel)
            .where(NotificationModel.read == false())
            .values(read=True)
        )
        self.session.commit()
        return int(result.rowcount or 0)

    @translate_store_errors
    def delete(self, notification_id: int) -> bool:
        result = self.session.execute(
            delete(NotificationModel).where(NotificationModel.id == notification_id)
        )
        self.session.commit()
        return bool(result.rowcount)

    @translate_store_errors
    def delete_all(self) -> int:
        result = self.session.execute(delete(NotificationModel))
        self.session.commit()
        return int(result.rowcount or 0)

    @staticmethod
    def _apply_filters(statement, filters: NotificationFilters):
        if filters.category is not None:
            statement = statement.where(NotificationModel.category == filters.category)
        if filters.kind is not None:
            statement = statement.where(NotificationModel.kind == filters.kind)
        if filters.read is not None:
            statement = statement.where(NotificationModel.read == filters.read)
        if filters.importance is not None:
            statement = statement.where(NotificationModel.importance == filters.importance)
        return statement

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            message=model.message,
            category=model.category,
            kind=model.kind,
            read=bool(model.read),
            link=model.link,
            importance=model.importance,
            metadata=dict(model.meta or {}),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["NotificationRepository"]
