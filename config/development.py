from .config import Config, _flag

SECRET_KEY = Config.SECRET_KEY
STORE_BACKEND = Config.STORE_BACKEND
DB_CONFIG = Config.db_config()
TIMEZONE = Config.TIMEZONE
ADMIN_PASSWORD = Config.ADMIN_PASSWORD or "admin"

DEFAULT_AUTO_CLOSE_TIME = Config.DEFAULT_AUTO_CLOSE_TIME
DEFAULT_AUTO_CLOSE_ENABLED = Config.DEFAULT_AUTO_CLOSE_ENABLED
AUTO_CLOSE_SCHEDULER = Config.AUTO_CLOSE_SCHEDULER
AUTO_CLOSE_INTERVAL_SECONDS = Config.AUTO_CLOSE_INTERVAL_SECONDS
AUTO_CLOSE_RUN_ON_START = Config.AUTO_CLOSE_RUN_ON_START

LOG_LEVEL = Config.LOG_LEVEL or "DEBUG"
DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = _flag("AUTO_INIT_DB", "1")
