"""Settings shared by every environment; environment modules import from here."""
import os


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.getenv(name, default)))


def db_config_from_env(default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "time_attendance_db"),
        "pool_size": int(os.getenv("DB_POOL_SIZE", "10")),
    }


# IANA zone used for shift windows and report days; empty = server local time.
TIMEZONE = os.getenv("TIMEZONE", "")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

ROOT_ADMIN_ID = 1
ROOT_ADMIN_USERNAME = os.getenv("ROOT_ADMIN_USERNAME", "admin")
# Seed password of the root admin, also the password accepted by the one-time repair.
ROOT_DEFAULT_PASSWORD = os.getenv("ROOT_DEFAULT_PASSWORD", "admin1234")
ROOT_REPAIR_ENABLED = env_flag("ROOT_REPAIR_ENABLED", "0")

# Best-effort public IP lookup for clock events; empty disables it.
IP_LOOKUP_URL = os.getenv("IP_LOOKUP_URL", "")
IP_LOOKUP_TIMEOUT = float(os.getenv("IP_LOOKUP_TIMEOUT", "3"))

# (start_hour, end_hour, shift_id); None -> built-in windows.
SHIFT_WINDOWS = None
