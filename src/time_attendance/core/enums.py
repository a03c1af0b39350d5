from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class LogType(str, Enum):
    """Direction of a clock event."""

    IN = "in"
    OUT = "out"


class ReportStatus(str, Enum):
    """Daily status shown in the monthly report."""

    ON_TIME = "on_time"
    LATE = "late"
    NO_CLOCK_OUT = "no_clock_out"
