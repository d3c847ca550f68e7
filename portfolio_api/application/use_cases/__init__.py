"""Aggregate application use cases."""

from .activity import RequestContext, list_activities, purge_activities, record_activity
from .analytics import AnalyticsEvent, SessionTracker
from .notifications import create_notification, list_notifications

__all__ = [
    "AnalyticsEvent",
    "RequestContext",
    "SessionTracker",
    "create_notification",
    "list_activities",
    "list_notifications",
    "purge_activities",
    "record_activity",
]
