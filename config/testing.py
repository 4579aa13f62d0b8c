from .config import Config

SECRET_KEY = "test-secret"
STORE_BACKEND = "memory"
DB_CONFIG = Config.db_config()
TIMEZONE = "Europe/Rome"
ADMIN_PASSWORD = "test-admin"

DEFAULT_AUTO_CLOSE_TIME = "18:00"
DEFAULT_AUTO_CLOSE_ENABLED = True
# Tests drive sweeps explicitly.
AUTO_CLOSE_SCHEDULER = False
AUTO_CLOSE_INTERVAL_SECONDS = 300
AUTO_CLOSE_RUN_ON_START = False

LOG_LEVEL = "WARNING"
DEBUG = False
TESTING = True

AUTO_INIT_DB = False
