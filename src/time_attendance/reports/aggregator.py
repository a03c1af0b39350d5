from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import to_local
from ..core.enums import LogType, ReportStatus
from ..geo.model import GeoSettings
from ..shifts.model import Shift
from ..shifts.resolver import ShiftResolver
from ..timelogs.model import TimeLog
from ..users.model import User
from .model import ReportRow


@dataclass
class _DayLogs:
    first_in: Optional[TimeLog] = None
    last_out: Optional[TimeLog] = None

    def add(self, log: TimeLog) -> None:
        # Strict comparisons: on equal timestamps the log already held wins.
        if log.type == LogType.IN:
            if self.first_in is None or log.timestamp < self.first_in.timestamp:
                self.first_in = log
        elif log.type == LogType.OUT:
            if self.last_out is None or log.timestamp > self.last_out.timestamp:
                self.last_out = log


@dataclass
class ReportAggregator:
    """Fold raw clock events into one row per (user, local date) for a month.

    Auto checkout is evaluated here, lazily: a day without a clock-out whose
    shift has already ended (relative to ``now``) is reported as NO_CLOCK_OUT.
    Nothing is written back to the logs.
    """

    resolver: ShiftResolver = field(default_factory=ShiftResolver)

    def build(
        self,
        *,
        logs: Iterable[TimeLog],
        users: Sequence[User],
        shifts: Sequence[Shift],
        year: int,
        month: int,
        now: int,
        geo: Optional[GeoSettings] = None,
    ) -> list[ReportRow]:
        tz = self.resolver.tz
        users_by_id = {u.user_id: u for u in users}

        days: dict[tuple[int, date], _DayLogs] = {}
        for log in logs:
            local = to_local(log.timestamp, tz)
            if local.year != year or local.month != month:
                continue
            days.setdefault((log.user_id, local.date()), _DayLogs()).add(log)

        rows: list[ReportRow] = []
        for (user_id, work_date), day in days.items():
            if day.first_in is None:
                # A clock-out with no clock-in that day is dropped.
                continue
            user = users_by_id.get(user_id)
            if user is None:
                continue
            row = self._to_row(user, work_date, day, shifts, now=now, geo=geo)
            if row is not None:
                rows.append(row)

        rows.sort(key=lambda r: r.timestamp, reverse=True)
        return rows

    def _to_row(
        self,
        user: User,
        work_date: date,
        day: _DayLogs,
        shifts: Sequence[Shift],
        *,
        now: int,
        geo: Optional[GeoSettings],
    ) -> Optional[ReportRow]:
        clock_in = day.first_in
        match = self.resolver.resolve(clock_in.timestamp, shifts)
        if match is None:
            return None

        tz = self.resolver.tz
        status = ReportStatus.LATE if match.is_late else ReportStatus.ON_TIME
        clock_out = day.last_out
        if clock_out is None and now > match.end_ms:
            status = ReportStatus.NO_CLOCK_OUT

        return ReportRow(
            timestamp=clock_in.timestamp,
            user_id=user.user_id,
            work_date=work_date,
            full_name=user.full_name,
            position=user.position,
            shift_id=match.shift.shift_id,
            shift_name=match.shift.name,
            clock_in=to_local(clock_in.timestamp, tz),
            ip_address_in=clock_in.ip_address,
            clock_out=to_local(clock_out.timestamp, tz) if clock_out else None,
            ip_address_out=clock_out.ip_address if clock_out else None,
            status=status,
            distance_in=geo.distance_to(clock_in.location) if geo else None,
            distance_out=geo.distance_to(clock_out.location) if geo and clock_out else None,
        )
