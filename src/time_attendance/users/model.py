from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: Plain data object (no DB access). ``password_hash`` never leaves the server,
    see ``to_json``.
    """

    user_id: int
    username: str
    password_hash: str
    first_name: str
    last_name: str
    position: str
    staff_type: str
    work_group: str
    role: Role

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def to_json(self) -> dict:
        return {
            "id": self.user_id,
            "username": self.username,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "position": self.position,
            "staffType": self.staff_type,
            "workGroup": self.work_group,
            "role": self.role.value,
        }
