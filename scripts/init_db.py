"""Create the timeclock tables in the configured MySQL database.

    python scripts/init_db.py
    python scripts/init_db.py --dry-run
    python scripts/init_db.py --seed-worker "Mario Rossi:12.50" --seed-worker "Giulia Bianchi"
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
from src.timeclock.timeclock.database.bootstrap import apply_schema, list_tables, schema_statements
from src.timeclock.timeclock.main import SCHEMA_PATH


def _parse_worker(value: str) -> tuple[str, str]:
    name, _, rate = value.partition(":")
    return name.strip(), rate.strip() or "0"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Apply database/schema.sql")
    parser.add_argument("--schema", type=Path, default=SCHEMA_PATH)
    parser.add_argument("--dry-run", action="store_true", help="print the statements without connecting")
    parser.add_argument("--seed-worker", action="append", default=[], metavar="NAME[:RATE]")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if args.dry_run:
        for statement in schema_statements(args.schema.read_text(encoding="utf-8")):
            print(statement + ";\n")
        return 0

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=args.schema)
    print(f"Schema ready on {db_config.get('host')}/{db_config.get('database')}: {', '.join(list_tables(db_config))}")

    if args.seed_worker:
        workers = build_container(db_config=db_config, store_backend="mysql").worker_service
        for name, rate in map(_parse_worker, args.seed_worker):
            print(f"Worker {name}: id {workers.create_worker(name=name, hourly_rate=rate)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
