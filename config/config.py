import os


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Config:
    """Defaults shared by every environment; each value can come from the environment (.env)."""

    SECRET_KEY = os.getenv("SECRET_KEY", "timeclock-dev-secret")

    # Store: "mysql" or "memory"
    STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql").lower()

    DB_USER = os.getenv("DB_USER", "root")
    DB_PASSWORD = os.getenv("DB_PASSWORD", "")
    DB_HOST = os.getenv("DB_HOST", "localhost")
    DB_PORT = int(os.getenv("DB_PORT", "3306"))
    DB_NAME = os.getenv("DB_NAME", "timeclock")

    # Every "now"/"today" is computed in this zone, never the host's.
    TIMEZONE = os.getenv("TIMEZONE", "Europe/Rome")

    ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "")

    # Used until an admin saves auto-close settings.
    DEFAULT_AUTO_CLOSE_TIME = os.getenv("AUTO_CLOSE_TIME", "18:00")
    DEFAULT_AUTO_CLOSE_ENABLED = _flag("AUTO_CLOSE_ENABLED", "1")

    AUTO_CLOSE_SCHEDULER = _flag("AUTO_CLOSE_SCHEDULER", "1")
    AUTO_CLOSE_INTERVAL_SECONDS = float(os.getenv("AUTO_CLOSE_INTERVAL_SECONDS", "300"))
    AUTO_CLOSE_RUN_ON_START = _flag("AUTO_CLOSE_RUN_ON_START", "1")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "")

    AUTO_INIT_DB = _flag("AUTO_INIT_DB", "0")

    @classmethod
    def db_config(cls) -> dict:
        return {
            "host": cls.DB_HOST,
            "port": cls.DB_PORT,
            "user": cls.DB_USER,
            "password": cls.DB_PASSWORD,
            "database": cls.DB_NAME,
        }
