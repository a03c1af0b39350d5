from __future__ import annotations

from typing import Mapping, Sequence

from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import Shift
from .repository import ShiftRepository


def _to_shift(r: dict) -> Shift:
    return Shift(
        shift_id=str(r["shift_id"]),
        name=r["name"],
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        late_grace_period=int(r.get("late_grace_period") or 0),
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT shift_id, name, start_time, end_time, late_grace_period
                FROM shifts
                ORDER BY shift_id
                """
            )
            return [_to_shift(r) for r in fetchall(cur)]

    def update_grace_periods(self, grace_by_id: Mapping[str, int]) -> None:
        # One db_cursor block == one transaction: a missing shift rolls back earlier updates.
        with db_cursor(self._conn_factory) as (_, cur):
            for shift_id, minutes in grace_by_id.items():
                cur.execute("SELECT shift_id FROM shifts WHERE shift_id=%s", (shift_id,))
                if not fetchone(cur):
                    raise NotFoundError(f"Shift {shift_id} does not exist")
                cur.execute(
                    "UPDATE shifts SET late_grace_period=%s WHERE shift_id=%s",
                    (int(minutes), shift_id),
                )
