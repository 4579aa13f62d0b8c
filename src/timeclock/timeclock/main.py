from __future__ import annotations

import atexit
import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .common.web import error_response
from .container import Container, build_container
from .core.enums import StoreBackend
from .core.exceptions import StoreUnavailableError
from .database.bootstrap import apply_schema, list_tables
from .reports.controller import register as register_reports
from .scheduling.scheduler import SchedulerConfig
from .workers.controller import register as register_workers

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def configure_logging(settings) -> None:
    level_name = str(getattr(settings, "LOG_LEVEL", "") or ("DEBUG" if getattr(settings, "DEBUG", False) else "INFO"))
    logging.basicConfig(
        level=getattr(logging, level_name.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _container_from_settings(settings) -> Container:
    backend = str(getattr(settings, "STORE_BACKEND", StoreBackend.MYSQL.value))
    db_config = getattr(settings, "DB_CONFIG", None)

    if backend == StoreBackend.MYSQL.value and bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=SCHEMA_PATH)
        logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))

    return build_container(
        db_config=db_config,
        store_backend=backend,
        timezone=getattr(settings, "TIMEZONE"),
        admin_password=getattr(settings, "ADMIN_PASSWORD", ""),
        auto_close_time=getattr(settings, "DEFAULT_AUTO_CLOSE_TIME"),
        auto_close_enabled=bool(getattr(settings, "DEFAULT_AUTO_CLOSE_ENABLED", True)),
        scheduler_config=SchedulerConfig(
            interval_seconds=float(getattr(settings, "AUTO_CLOSE_INTERVAL_SECONDS")),
            run_on_start=bool(getattr(settings, "AUTO_CLOSE_RUN_ON_START", True)),
        ),
    )


def create_app(settings_module: Optional[str] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(settings)

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    logger.info("Settings=%s store=%s tz=%s", settings_module, getattr(settings, "STORE_BACKEND", "?"), getattr(settings, "TIMEZONE", "?"))

    container = container or _container_from_settings(settings)
    app.extensions["timeclock"] = container

    register_auth(app, container)
    register_workers(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    @app.errorhandler(StoreUnavailableError)
    def store_unavailable(e):
        logger.error("Store unavailable: %s", e)
        return error_response("Archivio non disponibile, riprova più tardi", 503)

    if bool(getattr(settings, "AUTO_CLOSE_SCHEDULER", False)):
        scheduler = container.build_scheduler()
        scheduler.start()
        atexit.register(scheduler.shutdown, wait=False)
        app.extensions["timeclock_scheduler"] = scheduler

    return app
