from __future__ import annotations

import logging
import re
from contextlib import closing
from pathlib import Path
from typing import Iterator, Mapping

import mysql.connector

from .connection import DBConfig

logger = logging.getLogger(__name__)

# Quoted literals first so ';' and '--' inside them are kept verbatim.
_SQL_TOKEN = re.compile(
    r"""
      '(?:[^'\\]|\\.|'')*'
    | "(?:[^"\\]|\\.)*"
    | --[^\n]*
    | ;
    | [^'";-]+
    | .
    """,
    re.VERBOSE | re.DOTALL,
)

_DATABASE_DIRECTIVE = re.compile(r"^\s*(?:CREATE\s+DATABASE|USE)\b", re.IGNORECASE)


def split_sql(sql: str) -> Iterator[str]:
    """Yield the statements of a schema file, without comments or trailing ';'."""
    buf: list[str] = []
    for match in _SQL_TOKEN.finditer(sql):
        token = match.group(0)
        if token.startswith("--"):
            continue
        if token == ";":
            statement = "".join(buf).strip()
            buf.clear()
            if statement:
                yield statement
            continue
        buf.append(token)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def schema_statements(sql: str) -> list[str]:
    """Statements to run against the configured database.

    schema.sql names its own database for manual use; CREATE DATABASE and
    USE are dropped so the target comes from settings.
    """
    return [s for s in split_sql(sql) if not _DATABASE_DIRECTIVE.match(s)]


def ensure_database_exists(config: DBConfig) -> None:
    with closing(mysql.connector.connect(**config.connect_kwargs(with_database=False))) as conn:
        with closing(conn.cursor()) as cur:
            cur.execute(
                f"CREATE DATABASE IF NOT EXISTS `{config.database}` "
                "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
            )
        conn.commit()


def apply_schema(db_config: Mapping, *, schema_path: str | Path) -> None:
    """Create the database if needed and run schema.sql (CREATE TABLE IF NOT EXISTS only)."""
    config = DBConfig.from_mapping(db_config)
    ensure_database_exists(config)

    statements = schema_statements(Path(schema_path).read_text(encoding="utf-8"))
    with closing(mysql.connector.connect(**config.connect_kwargs())) as conn:
        with closing(conn.cursor()) as cur:
            for statement in statements:
                cur.execute(statement)
        conn.commit()
    logger.info("Schema applied to %s@%s/%s (%s statements)", config.user, config.host, config.database, len(statements))


def list_tables(db_config: Mapping) -> list[str]:
    config = DBConfig.from_mapping(db_config)
    with closing(mysql.connector.connect(**config.connect_kwargs())) as conn:
        with closing(conn.cursor()) as cur:
            cur.execute("SHOW TABLES")
            return [row[0] for row in cur.fetchall()]
