"""Run the auto-close sweep (or a force close) once, outside the web app.

Usable from cron or by an operator recovering stuck sessions:

    python scripts/close_sessions.py
    python scripts/close_sessions.py --close-time 18:00
    python scripts/close_sessions.py --force [--close-time 19:30]
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.timeclock.timeclock.container import build_container


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Close open attendance sessions")
    parser.add_argument("--close-time", help="HH:MM cutoff overriding the saved settings")
    parser.add_argument("--force", action="store_true", help="close every open session regardless of settings")
    args = parser.parse_args(argv)

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    container = build_container(
        db_config=settings.DB_CONFIG,
        store_backend=settings.STORE_BACKEND,
        timezone=settings.TIMEZONE,
        auto_close_time=settings.DEFAULT_AUTO_CLOSE_TIME,
        auto_close_enabled=settings.DEFAULT_AUTO_CLOSE_ENABLED,
    )
    service = container.attendance_service

    if args.force:
        result = service.force_close_all_sessions(args.close_time)
    else:
        result = service.auto_close_sessions(args.close_time)

    print(result.message)
    return 1 if result.failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
