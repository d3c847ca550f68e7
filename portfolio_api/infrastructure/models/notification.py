"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, JSON, String, Text
from sqlalchemy.sql import expression

from portfolio_api.infrastructure.database import Base
from portfolio_api.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation for admin notifications."""

    __tablename__ = "notification"
    __table_args__ = (
        Index("ix_notification_read_created_at", "read", "created_at"),
        Index("ix_notification_category_created_at", "category", "created_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    message = Column(Text, nullable=False)
    kind = Column(String(20), nullable=False, default="info")
    category = Column(String(50), nullable=False)
    read = Column(Boolean, nullable=False, default=False, server_default=expression.false())
    link = Column(String(255), nullable=True)
    importance = Column(String(20), nullable=False, default="low")
    # ``metadata`` is reserved on declarative classes.
    meta = Column("metadata", JSON, nullable=False, default=dict)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["NotificationModel"]
