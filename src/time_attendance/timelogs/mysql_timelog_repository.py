from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import LogType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from ..geo.model import Coordinate
from .model import TimeLog
from .repository import TimeLogRepository

_LOG_COLUMNS = "log_id, user_id, timestamp, type, latitude, longitude, ip_address"


def _to_log(r: dict) -> TimeLog:
    return TimeLog(
        log_id=int(r["log_id"]),
        user_id=int(r["user_id"]),
        timestamp=int(r["timestamp"]),
        type=LogType(r["type"]),
        location=Coordinate(latitude=float(r["latitude"]), longitude=float(r["longitude"])),
        ip_address=r.get("ip_address"),
    )


class MySQLTimeLogRepository(TimeLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[TimeLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_LOG_COLUMNS} FROM time_logs ORDER BY timestamp")
            return [_to_log(r) for r in fetchall(cur)]

    def list_for_user(self, user_id: int) -> Sequence[TimeLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_LOG_COLUMNS} FROM time_logs WHERE user_id=%s ORDER BY timestamp",
                (user_id,),
            )
            return [_to_log(r) for r in fetchall(cur)]

    def list_between(self, start_ms: int, end_ms: int) -> Sequence[TimeLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_LOG_COLUMNS} FROM time_logs WHERE timestamp >= %s AND timestamp < %s ORDER BY timestamp",
                (int(start_ms), int(end_ms)),
            )
            return [_to_log(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        user_id: int,
        timestamp: int,
        type: LogType,
        location: Coordinate,
        ip_address: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_logs(user_id, timestamp, type, latitude, longitude, ip_address)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (user_id, int(timestamp), type.value, location.latitude, location.longitude, ip_address),
            )
            return int(cur.lastrowid)
