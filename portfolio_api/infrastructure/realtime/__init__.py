"""Live-update channels and the payloads they push."""

from .channel import (
    ChannelFrame,
    ChannelState,
    LiveUpdateChannel,
    SnapshotFetcher,
    database_snapshot,
    encode_sse,
    stream_sse,
)
from .serializers import normalize_datetime_values, serialize_activity, serialize_notification

__all__ = [
    "ChannelFrame",
    "ChannelState",
    "LiveUpdateChannel",
    "SnapshotFetcher",
    "database_snapshot",
    "encode_sse",
    "normalize_datetime_values",
    "serialize_activity",
    "serialize_notification",
    "stream_sse",
]
