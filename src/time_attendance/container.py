from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from typing import Optional, Sequence

from .core.constants import ROOT_ADMIN_ID, ROOT_ADMIN_USERNAME
from .database.connection import DBConfig, DatabaseConnection
from .geo.mysql_geo_repository import MySQLGeoSettingsRepository
from .geo.repository import GeoSettingsRepository
from .geo.service import GeoSettingsService
from .reports.aggregator import ReportAggregator
from .reports.service import MonthlyReportService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository
from .shifts.resolver import ShiftResolver, ShiftWindow
from .shifts.service import ShiftService
from .timelogs.ip_lookup import PublicIpLookup
from .timelogs.mysql_timelog_repository import MySQLTimeLogRepository
from .timelogs.repository import TimeLogRepository
from .timelogs.service import ClockService
from .users.mysql_user_repository import MySQLCredentialRepairRepository, MySQLUserRepository
from .users.recovery import RootCredentialRepair
from .users.repository import CredentialRepairRepository, UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    repair_repo: CredentialRepairRepository
    shifts_repo: ShiftRepository
    geo_repo: GeoSettingsRepository
    logs_repo: TimeLogRepository

    auth_service: AuthService
    user_service: UserService
    shift_service: ShiftService
    geo_service: GeoSettingsService
    clock_service: ClockService
    report_service: MonthlyReportService


@dataclass(frozen=True)
class AppOptions:
    """Non-DB settings that shape the services."""

    root_user_id: int = ROOT_ADMIN_ID
    root_username: str = ROOT_ADMIN_USERNAME
    root_default_password: str = ""
    root_repair_enabled: bool = False
    ip_lookup_url: str = ""
    ip_lookup_timeout: float = 3.0
    timezone: Optional[tzinfo] = None
    shift_windows: Optional[Sequence[ShiftWindow]] = None


def wire_container(
    *,
    users_repo: UserRepository,
    repair_repo: CredentialRepairRepository,
    shifts_repo: ShiftRepository,
    geo_repo: GeoSettingsRepository,
    logs_repo: TimeLogRepository,
    options: AppOptions = AppOptions(),
) -> Container:
    repair = RootCredentialRepair(
        repair_repo,
        root_user_id=options.root_user_id,
        root_username=options.root_username,
        default_password=options.root_default_password,
        enabled=options.root_repair_enabled,
    )
    ip_lookup = (
        PublicIpLookup(options.ip_lookup_url, timeout=options.ip_lookup_timeout) if options.ip_lookup_url else None
    )
    if options.shift_windows:
        resolver = ShiftResolver(options.shift_windows, tz=options.timezone)
    else:
        resolver = ShiftResolver(tz=options.timezone)

    return Container(
        users_repo=users_repo,
        repair_repo=repair_repo,
        shifts_repo=shifts_repo,
        geo_repo=geo_repo,
        logs_repo=logs_repo,
        auth_service=AuthService(users_repo, repair),
        user_service=UserService(users_repo, root_user_id=options.root_user_id),
        shift_service=ShiftService(shifts_repo),
        geo_service=GeoSettingsService(geo_repo),
        clock_service=ClockService(logs_repo, users_repo, geo_repo, ip_lookup=ip_lookup),
        report_service=MonthlyReportService(
            logs_repo,
            users_repo,
            shifts_repo,
            geo_repo,
            aggregator=ReportAggregator(resolver=resolver),
        ),
    )


def build_container(*, db_config: dict, options: AppOptions = AppOptions()) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        pool_size=int(db_config.get("pool_size", 10)),
    )
    conn = DatabaseConnection.get_instance(config)

    return wire_container(
        users_repo=MySQLUserRepository(conn),
        repair_repo=MySQLCredentialRepairRepository(conn),
        shifts_repo=MySQLShiftRepository(conn),
        geo_repo=MySQLGeoSettingsRepository(conn),
        logs_repo=MySQLTimeLogRepository(conn),
        options=options,
    )
