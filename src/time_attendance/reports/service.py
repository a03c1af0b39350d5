from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import now_ms, to_ms
from ..common.validators import require_int
from ..core.exceptions import ValidationError
from ..geo.repository import GeoSettingsRepository
from ..shifts.repository import ShiftRepository
from ..timelogs.repository import TimeLogRepository
from ..users.repository import UserRepository
from .aggregator import ReportAggregator
from .model import ReportRow


@dataclass(frozen=True)
class MonthlyReport:
    year: int
    month: int
    rows: list[ReportRow]

    def to_json(self) -> dict:
        return {"year": self.year, "month": self.month, "rows": [r.to_json() for r in self.rows]}


class MonthlyReportService:
    def __init__(
        self,
        logs: TimeLogRepository,
        users: UserRepository,
        shifts: ShiftRepository,
        geo: GeoSettingsRepository,
        *,
        aggregator: Optional[ReportAggregator] = None,
    ):
        self._logs = logs
        self._users = users
        self._shifts = shifts
        self._geo = geo
        self._aggregator = aggregator or ReportAggregator()

    @property
    def tz(self):
        return self._aggregator.resolver.tz

    def build(self, *, year: Any, month: Any, now: Optional[int] = None) -> MonthlyReport:
        year = require_int(year, "year")
        month = require_int(month, "month")
        if not 1 <= month <= 12:
            raise ValidationError("month must be between 1 and 12")
        if not 1970 <= year < 9999:
            raise ValidationError("year is out of range")

        tz = self.tz
        start = datetime(year, month, 1, tzinfo=tz)
        end = datetime(year + 1, 1, 1, tzinfo=tz) if month == 12 else datetime(year, month + 1, 1, tzinfo=tz)

        rows = self._aggregator.build(
            logs=self._logs.list_between(to_ms(start), to_ms(end)),
            users=self._users.list_all(),
            shifts=self._shifts.list_all(),
            year=year,
            month=month,
            now=now if now is not None else now_ms(),
            geo=self._geo.get(),
        )
        return MonthlyReport(year=year, month=month, rows=rows)
