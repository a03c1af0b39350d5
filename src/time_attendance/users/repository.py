from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        """Exact, case-sensitive lookup."""
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

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
        raise NotImplementedError

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
        raise NotImplementedError

    def update_password(self, user_id: int, password_hash: str) -> bool:
        raise NotImplementedError

    def delete_by_id(self, user_id: int) -> bool:
        raise NotImplementedError


class CredentialRepairRepository(Protocol):
    """Audit trail of the one-time root credential repair."""

    def get_used_at(self) -> Optional[int]:
        raise NotImplementedError

    def apply_repair(self, user_id: int, password_hash: str, at_ms: int) -> bool:
        """Store the new hash and the repair time together; False if already used.

        Either both writes happen or neither does.
        """
        raise NotImplementedError
