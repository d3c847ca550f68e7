"""Notifications, activity log and live-update backend of the portfolio site."""

__version__ = "0.1.0"
