from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from ..common.datetime_utils import format_hhmm


@dataclass(frozen=True)
class Shift:
    """Domain entity: a named work period.

    ``end_time`` earlier than ``start_time`` means the shift ends on the next day.
    """

    shift_id: str
    name: str
    start_time: time
    end_time: time
    late_grace_period: int = 15

    @property
    def crosses_midnight(self) -> bool:
        return self.end_time < self.start_time

    def to_json(self) -> dict:
        return {
            "id": self.shift_id,
            "name": self.name,
            "startTime": format_hhmm(self.start_time),
            "endTime": format_hhmm(self.end_time),
            "lateGracePeriod": self.late_grace_period,
        }
