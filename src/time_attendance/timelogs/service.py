from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from ..common.datetime_utils import now_ms
from ..common.validators import require_int
from ..core.constants import MAX_CLOCK_SKEW_MS
from ..core.enums import LogType
from ..core.exceptions import NotFoundError, ValidationError
from ..geo.model import Coordinate
from ..geo.repository import GeoSettingsRepository
from ..geo.service import parse_coordinate
from ..users.repository import UserRepository
from .ip_lookup import PublicIpLookup
from .model import TimeLog
from .repository import TimeLogRepository
from .state import AttendanceState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClockConfirmation:
    """What the employee sees after a successful clock event."""

    log: TimeLog
    name: str
    position: str
    work_group: str
    distance: Optional[int]

    def to_json(self) -> dict:
        data = self.log.to_json()
        data["confirmation"] = {
            "name": self.name,
            "position": self.position,
            "workGroup": self.work_group,
            "distance": self.distance,
        }
        return data


def parse_log_type(value: Any) -> LogType:
    try:
        return LogType(str(value))
    except ValueError:
        raise ValidationError("type must be 'in' or 'out'")


class ClockService:
    def __init__(
        self,
        logs: TimeLogRepository,
        users: UserRepository,
        geo: GeoSettingsRepository,
        *,
        ip_lookup: Optional[PublicIpLookup] = None,
    ):
        self._logs = logs
        self._users = users
        self._geo = geo
        self._ip_lookup = ip_lookup

    def list_for_user(self, user_id: int) -> Sequence[TimeLog]:
        return self._logs.list_for_user(int(user_id))

    def list_all(self) -> Sequence[TimeLog]:
        return self._logs.list_all()

    def state_for(self, user_id: int, *, now: Optional[int] = None) -> AttendanceState:
        now = now if now is not None else now_ms()
        return AttendanceState.from_logs(self._logs.list_for_user(int(user_id)), now=now)

    def status(self, user_id: int, *, location: Optional[Coordinate] = None, now: Optional[int] = None) -> dict:
        """Employee view: clock state plus where they stand relative to the geofence."""
        state = self.state_for(user_id, now=now)
        settings = self._geo.get()
        distance = settings.distance_to(location)

        data = state.to_json()
        data["distance"] = distance
        data["isInArea"] = distance is not None and distance <= settings.radius
        data["geofenceConfigured"] = settings.center is not None
        return data

    def clock(
        self,
        user_id: Any,
        type: Any,
        location: Any,
        *,
        timestamp: Any = None,
        ip_address: Optional[str] = None,
        fallback_ip: Optional[str] = None,
        now: Optional[int] = None,
    ) -> ClockConfirmation:
        user_id = require_int(user_id, "userId")
        log_type = parse_log_type(type)
        point = parse_coordinate(location)
        if point is None:
            raise ValidationError("A location fix is required to clock in or out")

        now = now if now is not None else now_ms()
        when = require_int(timestamp, "timestamp") if timestamp is not None else now
        if abs(when - now) > MAX_CLOCK_SKEW_MS:
            raise ValidationError("timestamp is too far from the server clock")

        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")

        settings = self._geo.get()
        distance = settings.distance_to(point)
        if settings.center is not None and not settings.contains(point):
            raise ValidationError(f"You are outside the permitted area ({round(distance)} m from the center)")

        # Eligibility runs on the server clock; the client timestamp is only recorded.
        state = AttendanceState.from_logs(self._logs.list_for_user(user_id), now=now)
        if state.latest is not None and when < state.latest.timestamp:
            raise ValidationError("timestamp is earlier than the last clock event")

        if log_type == LogType.OUT:
            if state.is_clocked_in and not state.can_clock_out:
                hours, minutes = state.remaining_wait()
                raise ValidationError(
                    f"You must work at least {state.min_work_ms // 3_600_000} hours before clocking out "
                    f"(about {hours} hours {minutes} minutes remaining)"
                )

        ip = (ip_address or "").strip() or self._lookup_ip() or fallback_ip

        log_id = self._logs.create(
            user_id=user_id,
            timestamp=when,
            type=log_type,
            location=point,
            ip_address=ip,
        )
        logger.info("Clock %s recorded for user id=%s (log id=%s)", log_type.value, user_id, log_id)

        log = TimeLog(log_id=log_id, user_id=user_id, timestamp=when, type=log_type, location=point, ip_address=ip)
        return ClockConfirmation(
            log=log,
            name=user.full_name,
            position=user.position,
            work_group=user.work_group,
            distance=round(distance) if distance is not None else None,
        )

    def _lookup_ip(self) -> Optional[str]:
        if self._ip_lookup is None:
            return None
        return self._ip_lookup.fetch()
