from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .common.datetime_utils import load_timezone
from .container import AppOptions, Container, build_container
from .core.constants import ROOT_ADMIN_ID, ROOT_ADMIN_USERNAME
from .data.controller import register as register_data
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_root_admin, list_tables
from .geo.controller import register as register_geo
from .reports.controller import register as register_reports
from .shifts.controller import register as register_shifts
from .shifts.resolver import windows_from_config
from .timelogs.controller import register as register_timelogs
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[2] / "database"


def _options_from(settings) -> AppOptions:
    return AppOptions(
        root_user_id=int(getattr(settings, "ROOT_ADMIN_ID", ROOT_ADMIN_ID)),
        root_username=str(getattr(settings, "ROOT_ADMIN_USERNAME", ROOT_ADMIN_USERNAME)),
        root_default_password=str(getattr(settings, "ROOT_DEFAULT_PASSWORD", "")),
        root_repair_enabled=bool(getattr(settings, "ROOT_REPAIR_ENABLED", False)),
        ip_lookup_url=str(getattr(settings, "IP_LOOKUP_URL", "") or ""),
        ip_lookup_timeout=float(getattr(settings, "IP_LOOKUP_TIMEOUT", 3.0)),
        timezone=load_timezone(getattr(settings, "TIMEZONE", None)),
        shift_windows=windows_from_config(getattr(settings, "SHIFT_WINDOWS", None)),
    )


def _bootstrap_database(settings, db_config: dict) -> None:
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
        options = _options_from(settings)
        ensure_root_admin(
            db_config,
            default_password=options.root_default_password,
            root_user_id=options.root_user_id,
            root_username=options.root_username,
        )
        logger.info("Reference data seeded")


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    """Application factory.

    ``container`` replaces the MySQL-backed wiring (tests pass in-memory repositories).
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.sort_keys = False

    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        db_config = dict(getattr(settings, "DB_CONFIG"))
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        _bootstrap_database(settings, db_config)
        container = build_container(db_config=db_config, options=_options_from(settings))

    app.extensions["time_attendance"] = container

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"ok": True}), 200

    register_users(app, container)
    register_data(app, container)
    register_timelogs(app, container)
    register_geo(app, container)
    register_shifts(app, container)
    register_reports(app, container)

    return app
