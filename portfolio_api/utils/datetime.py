"""Timestamp helpers shared by storage, live channels and the API.

Timestamps are stored naive (SQLite has no timezone-aware column type) in the
application timezone, and exposed as aware values everywhere else.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from portfolio_api.config import get_settings

_FIXED_OFFSET = re.compile(
    r"^(?:UTC|GMT)?\s*(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


def _parse_timezone(name: str) -> tzinfo:
    offset = _FIXED_OFFSET.match(name)
    if offset is not None:
        delta = timedelta(
            hours=int(offset.group("hours")), minutes=int(offset.group("minutes") or 0)
        )
        return timezone(-delta if offset.group("sign") == "-" else delta)
    if name.upper() in {"UTC", "GMT", "Z"}:
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return timezone.utc


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Timezone named by ``APP_TIMEZONE``; unknown names resolve to UTC.

    Accepts IANA names (``Europe/Paris``) and fixed offsets (``UTC+02:00``).
    """

    return _parse_timezone((get_settings().app_timezone or "").strip() or "UTC")


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Current time in the storage representation."""

    return ensure_app_naive_datetime(now_in_app_timezone())


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Attach or convert to the app timezone; naive values are read as stored."""

    if value is None:
        return None
    app_tz = get_app_timezone()
    return value.replace(tzinfo=app_tz) if value.tzinfo is None else value.astimezone(app_tz)


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Convert ``value`` into the naive form written to the database."""

    aware = ensure_app_timezone(value)
    return None if aware is None else aware.replace(tzinfo=None)


def isoformat_or_none(value: datetime | None) -> str | None:
    aware = ensure_app_timezone(value)
    return aware.isoformat() if aware is not None else None
