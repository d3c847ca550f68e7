"""SQLAlchemy model for the admin activity log."""

from sqlalchemy import Column, DateTime, Integer, JSON, String, Text

from portfolio_api.infrastructure.database import Base
from portfolio_api.utils import now_in_app_naive_datetime


class ActivityModel(Base):
    """Database representation of an audit-style activity record."""

    __tablename__ = "activity"

    id = Column(Integer, primary_key=True, index=True)
    type = Column(String(20), nullable=False, index=True)
    action = Column(String(20), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    meta = Column("metadata", JSON, nullable=False, default=dict)
    actor = Column(String(120), nullable=True)
    ip = Column(String(64), nullable=True)
    user_agent = Column(String(512), nullable=True)
    status = Column(String(20), nullable=False, default="success", index=True)
    importance = Column(String(20), nullable=False, default="low", index=True)
    created_at = Column(
        DateTime(), nullable=False, default=now_in_app_naive_datetime, index=True
    )


__all__ = ["ActivityModel"]
