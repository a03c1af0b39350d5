from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import LogType
from ..geo.model import Coordinate
from .model import TimeLog


class TimeLogRepository(Protocol):
    """Append-only store of clock events (no update/delete on purpose)."""

    def list_all(self) -> Sequence[TimeLog]:
        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[TimeLog]:
        raise NotImplementedError

    def list_between(self, start_ms: int, end_ms: int) -> Sequence[TimeLog]:
        """Logs with ``start_ms <= timestamp < end_ms``."""
        raise NotImplementedError

    def create(
        self,
        *,
        user_id: int,
        timestamp: int,
        type: LogType,
        location: Coordinate,
        ip_address: Optional[str] = None,
    ) -> int:
        raise NotImplementedError
