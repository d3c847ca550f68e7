"""Persistence layer for activity log records."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from portfolio_api.domain.entities import Activity
from portfolio_api.domain.filters import ActivityFilters
from portfolio_api.infrastructure.database import translate_store_errors
from portfolio_api.infrastructure.models import ActivityModel
from portfolio_api.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class ActivityRepository:
    """Provide create, query and bulk-delete helpers for :class:`Activity`."""

    def __init__(self, session: Session) -> None:
        self.session = session

    @translate_store_errors
    def create(self, activity: Activity) -> Activity:
        model = ActivityModel()
        self._apply_entity_to_model(model, activity)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @translate_store_errors
    def list(
        self,
        filters: ActivityFilters,
        *,
        skip: int = 0,
        limit: int | None = None,
    ) -> Sequence[Activity]:
        statement = self._apply_filters(select(ActivityModel), filters)
        statement = statement.order_by(
            ActivityModel.created_at.desc(), ActivityModel.id.desc()
        ).offset(skip)
        if limit is not None:
            statement = statement.limit(limit)
        return [self._to_entity(model) for model in self.session.scalars(statement)]

    @translate_store_errors
    def count(self, filters: ActivityFilters) -> int:
        statement = self._apply_filters(
            select(func.count()).select_from(ActivityModel), filters
        )
        return int(self.session.scalar(statement) or 0)

    @translate_store_errors
    def delete_matching(self, filters: ActivityFilters) -> int:
        """Delete every record matching ``filters`` and return how many went."""

        statement = self._apply_filters(delete(ActivityModel), filters)
        result = self.session.execute(statement)
        self.session.commit()
        return int(result.rowcount or 0)

    def delete_created_before(self, cutoff: datetime) -> int:
        return self.delete_matching(ActivityFilters(older_than=cutoff))

    @staticmethod
    def _apply_filters(statement, filters: ActivityFilters):
        if filters.type is not None:
            statement = statement.where(ActivityModel.type == filters.type)
        if filters.action is not None:
            statement = statement.where(ActivityModel.action == filters.action)
        if filters.status is not None:
            statement = statement.where(ActivityModel.status == filters.status)
        if filters.importance is not None:
            statement = statement.where(ActivityModel.importance == filters.importance)
        if filters.start_date is not None:
            statement = statement.where(
                ActivityModel.created_at >= ensure_app_naive_datetime(filters.start_date)
            )
        if filters.end_date is not None:
            statement = statement.where(
                ActivityModel.created_at <= ensure_app_naive_datetime(filters.end_date)
            )
        if filters.older_than is not None:
            statement = statement.where(
                ActivityModel.created_at < ensure_app_naive_datetime(filters.older_than)
            )
        return statement

    @staticmethod
    def _apply_entity_to_model(model: ActivityModel, activity: Activity) -> None:
        model.type = activity.type
        model.action = activity.action
        model.title = activity.title
        model.description = activity.description
        model.meta = dict(activity.metadata or {})
        model.actor = activity.actor
        model.ip = activity.ip
        model.user_agent = activity.user_agent
        model.status = activity.status
        model.importance = activity.importance
        model.created_at = ensure_app_naive_datetime(
            activity.created_at or now_in_app_timezone()
        )

    @staticmethod
    def _to_entity(model: ActivityModel) -> Activity:
        return Activity(
            id=model.id,
            type=model.type,
            action=model.action,
            title=model.title,
            description=model.description,
            metadata=dict(model.meta or {}),
            actor=model.actor,
            ip=model.ip,
            user_agent=model.user_agent,
            status=model.status,
            importance=model.importance,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["ActivityRepository"]
