"""In-memory repositories and builders shared by the tests."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Mapping, Optional

from werkzeug.security import generate_password_hash

from time_attendance.core.enums import LogType, Role
from time_attendance.core.exceptions import NotFoundError
from time_attendance.geo.model import Coordinate, GeoSettings
from time_attendance.shifts.model import Shift
from time_attendance.timelogs.model import TimeLog
from time_attendance.users.model import User

ROOT_PASSWORD = "admin1234"
EMPLOYEE_PASSWORD = "secret1"


def ms(*args) -> int:
    """``ms(2025, 3, 10, 8, 20)`` -> epoch milliseconds (UTC)."""
    return int(datetime(*args, tzinfo=timezone.utc).timestamp() * 1000)


class InMemoryUsers:
    def __init__(self, users=()):
        self._by_id: dict[int, User] = {u.user_id: u for u in users}
        self._next_id = max(self._by_id, default=0) + 1

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(int(user_id))

    def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.username == username), None)

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda u: u.user_id)

    def create_user(self, *, username, password_hash, first_name, last_name, position, staff_type, work_group, role) -> int:
        user_id = self._next_id
        self._next_id += 1
        self._by_id[user_id] = User(
            user_id=user_id,
            username=username,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            position=position,
            staff_type=staff_type,
            work_group=work_group,
            role=role,
        )
        return user_id

    def update_profile(self, user_id, *, first_name, last_name, position, staff_type, work_group) -> bool:
        user = self._by_id.get(int(user_id))
        if not user:
            return False
        self._by_id[user.user_id] = replace(
            user,
            first_name=first_name,
            last_name=last_name,
            position=position,
            staff_type=staff_type,
            work_group=work_group,
        )
        return True

    def update_password(self, user_id, password_hash) -> bool:
        user = self._by_id.get(int(user_id))
        if not user:
            return False
        self._by_id[user.user_id] = replace(user, password_hash=password_hash)
        return True

    def delete_by_id(self, user_id) -> bool:
        return self._by_id.pop(int(user_id), None) is not None


@dataclass
class InMemoryRepairAudit:
    users: InMemoryUsers
    used_at: Optional[int] = None

    def get_used_at(self) -> Optional[int]:
        return self.used_at

    def apply_repair(self, user_id: int, password_hash: str, at_ms: int) -> bool:
        if self.used_at is not None:
            return False
        # Password first: a failed write leaves the repair unused.
        if not self.users.update_password(user_id, password_hash):
            raise NotFoundError("User not found")
        self.used_at = at_ms
        return True


class InMemoryShifts:
    def __init__(self, shifts=()):
        self._by_id: dict[str, Shift] = {s.shift_id: s for s in shifts}

    def list_all(self):
        return [self._by_id[k] for k in sorted(self._by_id)]

    def update_grace_periods(self, grace_by_id: Mapping[str, int]) -> None:
        missing = [k for k in grace_by_id if k not in self._by_id]
        if missing:
            raise NotFoundError(f"Shift {missing[0]} does not exist")
        for shift_id, minutes in grace_by_id.items():
            self._by_id[shift_id] = replace(self._by_id[shift_id], late_grace_period=int(minutes))


@dataclass
class InMemoryGeo:
    settings: GeoSettings = field(default_factory=GeoSettings)

    def get(self) -> GeoSettings:
        return self.settings

    def save(self, settings: GeoSettings) -> None:
        self.settings = settings


class InMemoryLogs:
    def __init__(self, logs=()):
        self._logs: list[TimeLog] = list(logs)

    def list_all(self):
        return list(self._logs)

    def list_for_user(self, user_id: int):
        return [log for log in self._logs if log.user_id == int(user_id)]

    def list_between(self, start_ms: int, end_ms: int):
        return [log for log in self._logs if start_ms <= log.timestamp < end_ms]

    def create(self, *, user_id, timestamp, type, location, ip_address=None) -> int:
        log_id = len(self._logs) + 1
        self._logs.append(
            TimeLog(log_id=log_id, user_id=user_id, timestamp=timestamp, type=type, location=location, ip_address=ip_address)
        )
        return log_id


OFFICE = Coordinate(latitude=13.7563, longitude=100.5018)


def make_log(log_id: int, user_id: int, type: LogType, timestamp: int, *, ip: Optional[str] = None, location=OFFICE) -> TimeLog:
    return TimeLog(log_id=log_id, user_id=user_id, timestamp=timestamp, type=type, location=location, ip_address=ip)


def make_user(user_id: int, username: str, password: str, *, role: Role = Role.EMPLOYEE, **kw) -> User:
    return User(
        user_id=user_id,
        username=username,
        password_hash=generate_password_hash(password),
        first_name=kw.get("first_name", username.title()),
        last_name=kw.get("last_name", "Tester"),
        position=kw.get("position", "Nurse"),
        staff_type=kw.get("staff_type", "Permanent"),
        work_group=kw.get("work_group", "Ward A"),
        role=role,
    )


