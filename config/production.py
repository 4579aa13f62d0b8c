import os

from .config import Config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
STORE_BACKEND = Config.STORE_BACKEND
DB_CONFIG = Config.db_config()
TIMEZONE = Config.TIMEZONE
ADMIN_PASSWORD = Config.ADMIN_PASSWORD

DEFAULT_AUTO_CLOSE_TIME = Config.DEFAULT_AUTO_CLOSE_TIME
DEFAULT_AUTO_CLOSE_ENABLED = Config.DEFAULT_AUTO_CLOSE_ENABLED
AUTO_CLOSE_SCHEDULER = Config.AUTO_CLOSE_SCHEDULER
AUTO_CLOSE_INTERVAL_SECONDS = Config.AUTO_CLOSE_INTERVAL_SECONDS
AUTO_CLOSE_RUN_ON_START = Config.AUTO_CLOSE_RUN_ON_START

LOG_LEVEL = Config.LOG_LEVEL or "INFO"
DEBUG = False

AUTO_INIT_DB = Config.AUTO_INIT_DB
