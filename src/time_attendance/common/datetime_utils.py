from __future__ import annotations

import time as _time
from datetime import date, datetime, time, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo


def now_ms() -> int:
    """Current epoch time in milliseconds.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return int(_time.time() * 1000)


def to_local(ms: int, tz: Optional[tzinfo] = None) -> datetime:
    """Epoch milliseconds -> datetime in ``tz`` (server local time when None)."""
    return datetime.fromtimestamp(ms / 1000, tz)


def to_ms(value: datetime) -> int:
    return int(round(value.timestamp() * 1000))


def at_time_of_day(day: date, t: time, tz: Optional[tzinfo] = None) -> datetime:
    return datetime.combine(day, t, tzinfo=tz)


def load_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """Resolve an IANA timezone name; empty means server local time."""
    if not name:
        return None
    return ZoneInfo(name)


def format_hhmm(t: time) -> str:
    return t.strftime("%H:%M")
