from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from time_attendance.database.bootstrap import apply_seed_sql, ensure_root_admin


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    created = ensure_root_admin(
        db_config,
        default_password=settings.ROOT_DEFAULT_PASSWORD,
        root_user_id=settings.ROOT_ADMIN_ID,
        root_username=settings.ROOT_ADMIN_USERNAME,
    )

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(root admin {'created' if created else 'already present'})"
    )


if __name__ == "__main__":
    main()
