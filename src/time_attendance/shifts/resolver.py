"""Shift classification and lateness for clock-in events.

A clock-in is assigned to a shift by the local hour-of-day it falls in, using
fixed windows anchored around each shift's nominal start. This is an
approximation of which shift the employee meant to work, not an exact match
against shift start times: a night-shift employee clocking in at 23:50 lands in
the night window and is compared against 00:30 of the *same* calendar date.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import at_time_of_day, to_local, to_ms
from .model import Shift


@dataclass(frozen=True)
class ShiftWindow:
    """Hours ``[start_hour, end_hour)`` map to ``shift_id``; start > end wraps midnight."""

    start_hour: int
    end_hour: int
    shift_id: str

    def contains(self, hour: int) -> bool:
        if self.start_hour <= self.end_hour:
            return self.start_hour <= hour < self.end_hour
        return hour >= self.start_hour or hour < self.end_hour


DEFAULT_SHIFT_WINDOWS: tuple[ShiftWindow, ...] = (
    ShiftWindow(6, 14, "shift1"),
    ShiftWindow(14, 22, "shift2"),
    ShiftWindow(22, 6, "shift3"),
)


def windows_from_config(raw: Optional[Iterable[Sequence]]) -> tuple[ShiftWindow, ...]:
    """``[(start_hour, end_hour, shift_id), ...]`` from settings; empty/None -> defaults."""
    if not raw:
        return DEFAULT_SHIFT_WINDOWS
    return tuple(ShiftWindow(int(start), int(end), str(shift_id)) for start, end, shift_id in raw)


@dataclass(frozen=True)
class ShiftMatch:
    shift: Shift
    start: datetime
    end: datetime
    late_threshold_ms: int
    is_late: bool

    @property
    def end_ms(self) -> int:
        return to_ms(self.end)


class ShiftResolver:
    def __init__(self, windows: Sequence[ShiftWindow] = DEFAULT_SHIFT_WINDOWS, *, tz: Optional[tzinfo] = None):
        self._windows = tuple(windows)
        self._tz = tz

    @property
    def tz(self) -> Optional[tzinfo]:
        return self._tz

    def shift_for(self, clock_in_ms: int, shifts: Sequence[Shift]) -> Optional[Shift]:
        hour = to_local(clock_in_ms, self._tz).hour
        by_id = {s.shift_id: s for s in shifts}
        for window in self._windows:
            if window.contains(hour):
                return by_id.get(window.shift_id)
        return None

    def resolve(self, clock_in_ms: int, shifts: Sequence[Shift]) -> Optional[ShiftMatch]:
        """Shift, nominal start/end instants and lateness for a clock-in; None if no shift matches."""
        shift = self.shift_for(clock_in_ms, shifts)
        if shift is None:
            return None

        day = to_local(clock_in_ms, self._tz).date()
        start = at_time_of_day(day, shift.start_time, self._tz)
        end = at_time_of_day(day, shift.end_time, self._tz)
        if shift.crosses_midnight:
            end += timedelta(days=1)

        threshold = to_ms(start) + int(shift.late_grace_period) * 60 * 1000
        return ShiftMatch(
            shift=shift,
            start=start,
            end=end,
            late_threshold_ms=threshold,
            is_late=clock_in_ms > threshold,
        )
