from __future__ import annotations

import logging
from typing import Optional

from werkzeug.security import generate_password_hash

from ..common.datetime_utils import now_ms
from .model import User
from .repository import CredentialRepairRepository

logger = logging.getLogger(__name__)


class RootCredentialRepair:
    """One-time repair of a corrupted root admin password.

    Applies only to the reserved root account logging in with the default
    password, only while enabled, and only once: the first use is recorded in
    the store and every later attempt is refused.
    """

    def __init__(
        self,
        audit: CredentialRepairRepository,
        *,
        root_user_id: int,
        root_username: str,
        default_password: str,
        enabled: bool = True,
    ):
        self._audit = audit
        self._root_user_id = int(root_user_id)
        self._root_username = root_username
        self._default_password = default_password
        self._enabled = bool(enabled)

    def applies_to(self, user: User, password: str) -> bool:
        return (
            self._enabled
            and bool(self._default_password)
            and user.user_id == self._root_user_id
            and user.username == self._root_username
            and password == self._default_password
        )

    def try_repair(self, user: User, password: str, *, now: Optional[int] = None) -> bool:
        if not self.applies_to(user, password):
            return False
        if self._audit.get_used_at() is not None:
            logger.warning("Root credential repair refused for user_id=%s: already used", user.user_id)
            return False

        now = now if now is not None else now_ms()
        if not self._audit.apply_repair(user.user_id, generate_password_hash(self._default_password), now):
            return False

        logger.warning(
            "Root credential repair applied: password of user_id=%s reset to the default at %s",
            user.user_id,
            now,
        )
        return True
