from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import ReportStatus


@dataclass(frozen=True)
class ReportRow:
    """Read-model: one employee on one calendar day (first clock-in, last clock-out)."""

    timestamp: int
    user_id: int
    work_date: date
    full_name: str
    position: str
    shift_id: str
    shift_name: str
    clock_in: datetime
    ip_address_in: Optional[str]
    clock_out: Optional[datetime]
    ip_address_out: Optional[str]
    status: ReportStatus
    distance_in: Optional[float] = None
    distance_out: Optional[float] = None

    def to_json(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "userId": self.user_id,
            "date": self.work_date.isoformat(),
            "user": self.full_name,
            "position": self.position,
            "shiftId": self.shift_id,
            "shift": self.shift_name,
            "clockIn": self.clock_in.strftime("%H:%M:%S"),
            "ipAddressIn": self.ip_address_in,
            "clockOut": self.clock_out.strftime("%H:%M:%S") if self.clock_out else None,
            "ipAddressOut": self.ip_address_out,
            "status": self.status.value,
            "distanceIn": round(self.distance_in) if self.distance_in is not None else None,
            "distanceOut": round(self.distance_out) if self.distance_out is not None else None,
        }
