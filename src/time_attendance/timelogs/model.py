from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import LogType
from ..geo.model import Coordinate


@dataclass(frozen=True)
class TimeLog:
    """Domain entity: one clock event. Append-only, never updated."""

    log_id: int
    user_id: int
    timestamp: int
    type: LogType
    location: Coordinate
    ip_address: Optional[str] = None

    def to_json(self) -> dict:
        return {
            "id": self.log_id,
            "userId": self.user_id,
            "timestamp": self.timestamp,
            "type": self.type.value,
            "location": self.location.to_json(),
            "ipAddress": self.ip_address,
        }
