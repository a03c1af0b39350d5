from __future__ import annotations

from typing import Optional, Sequence

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..core.enums import Role
from ..core.exceptions import ConflictError, NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import CredentialRepairRepository, UserRepository

_USER_COLUMNS = "user_id, username, password_hash, first_name, last_name, position, staff_type, work_group, role"


def _to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        username=row["username"],
        password_hash=row["password_hash"],
        first_name=row.get("first_name") or "",
        last_name=row.get("last_name") or "",
        position=row.get("position") or "",
        staff_type=row.get("staff_type") or "",
        work_group=row.get("work_group") or "",
        role=Role(row["role"]),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        # users.username uses a binary collation, so '=' is case-sensitive.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE username=%s", (username,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users ORDER BY user_id")
            return [_to_user(r) for r in fetchall(cur)]

    def create_user(
        self,
        *,
        username: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        position: str,
        staff_type: str,
        work_group: str,
        role: Role,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO users(username, password_hash, first_name, last_name, position, staff_type, work_group, role)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (username, password_hash, first_name, last_name, position, staff_type, work_group, role.value),
                )
                return int(cur.lastrowid)
        except IntegrityError as e:
            if e.errno == errorcode.ER_DUP_ENTRY:
                raise ConflictError("Username already exists") from e
            raise

    def update_profile(
        self,
        user_id: int,
        *,
        first_name: str,
        last_name: str,
        position: str,
        staff_type: str,
        work_group: str,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET first_name=%s, last_name=%s, position=%s, staff_type=%s, work_group=%s
                WHERE user_id=%s
                """,
                (first_name, last_name, position, staff_type, work_group, user_id),
            )
            return cur.rowcount > 0

    def update_password(self, user_id: int, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET password_hash=%s WHERE user_id=%s", (password_hash, user_id))
            return cur.rowcount > 0

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE user_id=%s", (user_id,))
            return cur.rowcount > 0


class MySQLCredentialRepairRepository(CredentialRepairRepository):
    """Stores the repair timestamp on the settings singleton row."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_used_at(self) -> Optional[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT root_repair_used_at FROM settings WHERE id=1")
            row = fetchone(cur)
            if not row or row.get("root_repair_used_at") is None:
                return None
            return int(row["root_repair_used_at"])

    def apply_repair(self, user_id: int, password_hash: str, at_ms: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE settings SET root_repair_used_at=%s WHERE id=1 AND root_repair_used_at IS NULL",
                (int(at_ms),),
            )
            if cur.rowcount == 0:
                return False
            cur.execute("UPDATE users SET password_hash=%s WHERE user_id=%s", (password_hash, user_id))
            if cur.rowcount == 0:
                raise NotFoundError("User not found")
            return True
