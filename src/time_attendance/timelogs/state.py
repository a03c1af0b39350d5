from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from ..core.constants import MIN_WORK_MS
from ..core.enums import LogType
from .model import TimeLog

_HOUR_MS = 60 * 60 * 1000
_MINUTE_MS = 60 * 1000


@dataclass(frozen=True)
class AttendanceState:
    """Current clock status of one user, derived from their log history.

    Never stored: build it again from the logs on every read.
    """

    latest: Optional[TimeLog]
    now: int
    min_work_ms: int = MIN_WORK_MS

    @classmethod
    def from_logs(cls, logs: Iterable[TimeLog], *, now: int, min_work_ms: int = MIN_WORK_MS) -> "AttendanceState":
        latest: Optional[TimeLog] = None
        for log in logs:
            if latest is None or log.timestamp > latest.timestamp:
                latest = log
        return cls(latest=latest, now=now, min_work_ms=min_work_ms)

    @property
    def is_clocked_in(self) -> bool:
        return self.latest is not None and self.latest.type == LogType.IN

    @property
    def elapsed_ms(self) -> Optional[int]:
        if not self.is_clocked_in:
            return None
        return self.now - self.latest.timestamp

    @property
    def can_clock_out(self) -> bool:
        return self.is_clocked_in and self.elapsed_ms >= self.min_work_ms

    @property
    def remaining_ms(self) -> int:
        """Time left before clock-out is allowed; 0 when eligible or not clocked in."""
        if not self.is_clocked_in or self.can_clock_out:
            return 0
        return self.min_work_ms - self.elapsed_ms

    def remaining_wait(self) -> tuple[int, int]:
        """``(hours, minutes)`` left, minutes rounded up."""
        remaining = self.remaining_ms
        hours = remaining // _HOUR_MS
        minutes = -(-(remaining % _HOUR_MS) // _MINUTE_MS)
        if minutes == 60:
            hours, minutes = hours + 1, 0
        return hours, minutes

    def to_json(self) -> dict:
        hours, minutes = self.remaining_wait()
        return {
            "isClockedIn": self.is_clocked_in,
            "canClockOut": self.can_clock_out,
            "lastLog": self.latest.to_json() if self.latest else None,
            "remainingMs": self.remaining_ms,
            "remainingHours": hours,
            "remainingMinutes": minutes,
        }
