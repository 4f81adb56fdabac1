"""Date providers for measurement timestamps.

Measurements are stamped with a calendar day taken from the host clock at the
moment they are recorded. The clock is a collaborator so sessions can be
replayed and tested on fixed dates.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import Any, Protocol
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DEFAULT_TIMEZONE = "UTC"


def normalize_timezone_name(value: Any) -> str | None:
    """Normalize a timezone setting and verify it's a valid IANA name."""
    if not isinstance(value, str):
        return None
    raw = value.strip()
    if not raw:
        return None
    if raw.upper() == "UTC":
        return "UTC"
    try:
        ZoneInfo(raw)
    except (ZoneInfoNotFoundError, ValueError):
        return None
    return raw


def local_date_for_timezone(ts: datetime, timezone_name: str) -> date:
    """Project a timestamp into the local calendar day of ``timezone_name``."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts.astimezone(ZoneInfo(timezone_name)).date()


class Clock(Protocol):
    def today(self) -> date: ...


class SystemClock:
    """Host clock projected into a configured timezone (UTC by default)."""

    def __init__(self, timezone_name: str = DEFAULT_TIMEZONE):
        self.timezone_name = normalize_timezone_name(timezone_name) or DEFAULT_TIMEZONE

    def today(self) -> date:
        return local_date_for_timezone(datetime.now(UTC), self.timezone_name)


class ManualClock:
    """Clock pinned to an explicit day until moved with ``set``."""

    def __init__(self, day: date):
        self.day = day

    def set(self, day: date) -> None:
        self.day = day

    def today(self) -> date:
        return self.day
