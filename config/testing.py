from .config import *  # noqa: F401,F403
from .config import db_config_from_env

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env()

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False

TIMEZONE = "UTC"
ROOT_DEFAULT_PASSWORD = "admin1234"
ROOT_REPAIR_ENABLED = True
IP_LOOKUP_URL = ""
