from __future__ import annotations

from datetime import time, timezone

import pytest

from helpers import (
    EMPLOYEE_PASSWORD,
    ROOT_PASSWORD,
    InMemoryGeo,
    InMemoryLogs,
    InMemoryRepairAudit,
    InMemoryShifts,
    InMemoryUsers,
    make_user,
)
from time_attendance.container import AppOptions, wire_container
from time_attendance.core.enums import Role
from time_attendance.shifts.model import Shift
from time_attendance.users.model import User


@pytest.fixture
def default_shifts() -> list[Shift]:
    return [
        Shift(shift_id="shift1", name="Morning", start_time=time(8, 30), end_time=time(16, 30), late_grace_period=15),
        Shift(shift_id="shift2", name="Afternoon", start_time=time(16, 30), end_time=time(0, 30), late_grace_period=15),
        Shift(shift_id="shift3", name="Night", start_time=time(0, 30), end_time=time(8, 30), late_grace_period=15),
    ]


@pytest.fixture
def root_admin() -> User:
    return make_user(1, "admin", ROOT_PASSWORD, role=Role.ADMIN, first_name="Admin", last_name="User")


@pytest.fixture
def employee() -> User:
    return make_user(2, "alice", EMPLOYEE_PASSWORD, first_name="Alice", last_name="Smith")


@pytest.fixture
def users_repo(root_admin, employee) -> InMemoryUsers:
    return InMemoryUsers([root_admin, employee])


@pytest.fixture
def repair_audit(users_repo) -> InMemoryRepairAudit:
    return InMemoryRepairAudit(users_repo)


@pytest.fixture
def shifts_repo(default_shifts) -> InMemoryShifts:
    return InMemoryShifts(default_shifts)


@pytest.fixture
def geo_repo() -> InMemoryGeo:
    return InMemoryGeo()


@pytest.fixture
def logs_repo() -> InMemoryLogs:
    return InMemoryLogs()


@pytest.fixture
def container(users_repo, repair_audit, shifts_repo, geo_repo, logs_repo):
    return wire_container(
        users_repo=users_repo,
        repair_repo=repair_audit,
        shifts_repo=shifts_repo,
        geo_repo=geo_repo,
        logs_repo=logs_repo,
        options=AppOptions(
            root_default_password=ROOT_PASSWORD,
            root_repair_enabled=True,
            timezone=timezone.utc,
        ),
    )


@pytest.fixture
def app(container):
    from time_attendance.main import create_app

    return create_app(container, settings_module="config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(username: str, password: str):
        return client.post("/api/auth/login", json={"username": username, "password": password})

    return _login
