from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH, ROOT_ADMIN_ID
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ConflictError, NotFoundError
from .model import User
from .recovery import RootCredentialRepair
from .repository import UserRepository

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    return str(value).strip() if value is not None else ""


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository, repair: Optional[RootCredentialRepair] = None):
        self._users = users
        self._repair = repair

    def authenticate(self, username: str, password: str) -> User:
        user = self._users.get_by_username(username or "")
        if not user:
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except Exception:
            # e.g. plain-text or corrupted values imported into the table
            ok = False

        if not ok and self._repair is not None:
            ok = self._repair.try_repair(user, password or "")

        if not ok:
            raise AuthenticationError("Invalid username or password")

        # Re-read so role and profile come from the store, not from the first lookup.
        fresh = self._users.get_by_id(user.user_id)
        if not fresh:
            raise AuthenticationError("Invalid username or password")
        return fresh

    def current_user(self, user_id: Optional[int]) -> User:
        if user_id is None:
            raise AuthenticationError("Login required")
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise AuthenticationError("Login required")
        return user

    def require_admin(self, user_id: Optional[int]) -> User:
        user = self.current_user(user_id)
        if not user.is_admin:
            raise AuthorizationError("Admin access required")
        return user

    def require_self_or_admin(self, user_id: Optional[int], target_user_id: int) -> User:
        user = self.current_user(user_id)
        if user.user_id != int(target_user_id) and not user.is_admin:
            raise AuthorizationError("You can only access your own records")
        return user


class UserService:
    """Use case: register and manage users."""

    def __init__(self, users: UserRepository, *, root_user_id: int = ROOT_ADMIN_ID):
        self._users = users
        self._root_user_id = int(root_user_id)

    def register(
        self,
        *,
        username: str,
        password: str,
        first_name: str = "",
        last_name: str = "",
        position: str = "",
        staff_type: str = "",
        work_group: str = "",
    ) -> User:
        username = require_non_empty(username, "Username")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        # Exact match only: "Alice" and "alice" are different accounts.
        if self._users.get_by_username(username):
            raise ConflictError("Username already exists")

        user_id = self._users.create_user(
            username=username,
            password_hash=generate_password_hash(password),
            first_name=_text(first_name),
            last_name=_text(last_name),
            position=_text(position),
            staff_type=_text(staff_type),
            work_group=_text(work_group),
            role=Role.EMPLOYEE,
        )
        logger.info("Registered user %s (id=%s)", username, user_id)
        return self.get(user_id)

    def get(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        return user

    def list_all(self) -> Sequence[User]:
        return self._users.list_all()

    def update_user(
        self,
        user_id: int,
        *,
        first_name: Any = None,
        last_name: Any = None,
        position: Any = None,
        staff_type: Any = None,
        work_group: Any = None,
        password: Any = None,
    ) -> User:
        """Admin edit. Missing fields keep their value; password changes only when non-empty."""
        user = self.get(user_id)

        self._users.update_profile(
            user.user_id,
            first_name=_text(first_name) if first_name is not None else user.first_name,
            last_name=_text(last_name) if last_name is not None else user.last_name,
            position=_text(position) if position is not None else user.position,
            staff_type=_text(staff_type) if staff_type is not None else user.staff_type,
            work_group=_text(work_group) if work_group is not None else user.work_group,
        )

        new_password = _text(password)
        if new_password:
            require_min_length(new_password, "Password", MIN_PASSWORD_LENGTH)
            self._users.update_password(user.user_id, generate_password_hash(new_password))

        return self.get(user.user_id)

    def delete_user(self, user_id: int) -> None:
        if int(user_id) == self._root_user_id:
            raise AuthorizationError("The root administrator account cannot be deleted")

        self.get(user_id)
        if not self._users.delete_by_id(int(user_id)):
            raise NotFoundError("User not found")
        logger.info("Deleted user id=%s", user_id)

    def change_password(self, user_id: int, new_password: str) -> None:
        require_min_length(new_password, "New password", MIN_PASSWORD_LENGTH)
        user = self.get(user_id)
        self._users.update_password(user.user_id, generate_password_hash(new_password))
        logger.info("Password changed for user id=%s", user.user_id)
