from __future__ import annotations

from dataclasses import replace

import pytest
from werkzeug.security import check_password_hash

from helpers import EMPLOYEE_PASSWORD, ROOT_PASSWORD, InMemoryRepairAudit, InMemoryUsers, make_user
from time_attendance.core.enums import Role
from time_attendance.core.exceptions import AuthenticationError, AuthorizationError
from time_attendance.users.recovery import RootCredentialRepair
from time_attendance.users.service import AuthService


def _repair(repair_audit, **kw):
    options = dict(root_user_id=1, root_username="admin", default_password=ROOT_PASSWORD, enabled=True)
    options.update(kw)
    return RootCredentialRepair(repair_audit, **options)


def _corrupt(users_repo, user_id, value="plain-text-password"):
    user = users_repo.get_by_id(user_id)
    users_repo._by_id[user_id] = replace(user, password_hash=value)


def test_login_with_correct_password(users_repo):
    user = AuthService(users_repo).authenticate("alice", EMPLOYEE_PASSWORD)

    assert user.user_id == 2
    assert user.role == Role.EMPLOYEE


@pytest.mark.parametrize("username, password", [("alice", "wrong-pass"), ("nobody", "whatever"), ("", "")])
def test_login_failures_share_one_message(users_repo, username, password):
    with pytest.raises(AuthenticationError, match="Invalid username or password"):
        AuthService(users_repo).authenticate(username, password)


def test_username_match_is_case_sensitive(users_repo):
    with pytest.raises(AuthenticationError):
        AuthService(users_repo).authenticate("Alice", EMPLOYEE_PASSWORD)


def test_corrupted_hash_is_a_failed_login_not_a_crash(users_repo):
    _corrupt(users_repo, 2)

    with pytest.raises(AuthenticationError):
        AuthService(users_repo).authenticate("alice", EMPLOYEE_PASSWORD)


def test_root_repair_rehashes_default_password_once(users_repo, repair_audit):
    auth = AuthService(users_repo, _repair(repair_audit))
    _corrupt(users_repo, 1)

    user = auth.authenticate("admin", ROOT_PASSWORD)

    assert user.is_admin
    assert repair_audit.used_at is not None
    assert check_password_hash(users_repo.get_by_id(1).password_hash, ROOT_PASSWORD)

    # Repaired hash keeps working through the normal path.
    assert auth.authenticate("admin", ROOT_PASSWORD).user_id == 1

    _corrupt(users_repo, 1)
    with pytest.raises(AuthenticationError):
        auth.authenticate("admin", ROOT_PASSWORD)


def test_root_repair_requires_default_password(users_repo, repair_audit):
    auth = AuthService(users_repo, _repair(repair_audit))
    _corrupt(users_repo, 1)

    with pytest.raises(AuthenticationError):
        auth.authenticate("admin", "not-the-default")

    assert repair_audit.used_at is None


def test_root_repair_can_be_disabled(users_repo, repair_audit):
    auth = AuthService(users_repo, _repair(repair_audit, enabled=False))
    _corrupt(users_repo, 1)

    with pytest.raises(AuthenticationError):
        auth.authenticate("admin", ROOT_PASSWORD)

    assert repair_audit.used_at is None


def test_root_repair_ignores_other_accounts(users_repo, repair_audit):
    auth = AuthService(users_repo, _repair(repair_audit))
    users_repo._by_id[3] = make_user(3, "admin2", "irrelevant", role=Role.ADMIN)
    _corrupt(users_repo, 3)

    with pytest.raises(AuthenticationError):
        auth.authenticate("admin2", ROOT_PASSWORD)

    assert repair_audit.used_at is None


def test_root_repair_requires_both_id_and_username(users_repo, repair_audit):
    repair = _repair(repair_audit)
    impostor = make_user(7, "admin", "x", role=Role.ADMIN)

    assert not repair.applies_to(impostor, ROOT_PASSWORD)
    assert repair.applies_to(users_repo.get_by_id(1), ROOT_PASSWORD)


def test_role_comes_from_the_store(users_repo):
    auth = AuthService(users_repo)
    promoted = replace(users_repo.get_by_id(2), role=Role.ADMIN)
    users_repo._by_id[2] = promoted

    assert auth.authenticate("alice", EMPLOYEE_PASSWORD).is_admin


def test_require_admin_and_self_checks(users_repo):
    auth = AuthService(users_repo)

    with pytest.raises(AuthenticationError):
        auth.current_user(None)
    with pytest.raises(AuthenticationError):
        auth.current_user(99)
    with pytest.raises(AuthorizationError):
        auth.require_admin(2)
    with pytest.raises(AuthorizationError):
        auth.require_self_or_admin(2, 1)

    assert auth.require_admin(1).user_id == 1
    assert auth.require_self_or_admin(2, 2).user_id == 2
    assert auth.require_self_or_admin(1, 2).user_id == 1


class _BrokenPasswordWrites(InMemoryUsers):
    def update_password(self, user_id, password_hash):
        raise RuntimeError("write failed")


def test_failed_repair_write_leaves_repair_unused(root_admin, employee):
    users = _BrokenPasswordWrites([root_admin, employee])
    audit = InMemoryRepairAudit(users)
    _corrupt(users, 1)
    auth = AuthService(users, _repair(audit))

    with pytest.raises(RuntimeError):
        auth.authenticate("admin", ROOT_PASSWORD)

    assert audit.get_used_at() is None
