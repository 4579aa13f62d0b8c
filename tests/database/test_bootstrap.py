from datetime import date, time, timedelta

from src.timeclock.timeclock.database.bootstrap import schema_statements, split_sql
from src.timeclock.timeclock.database.connection import DBConfig
from src.timeclock.timeclock.database.mysql_base import normalize_mysql_date, normalize_mysql_time
from src.timeclock.timeclock.main import SCHEMA_PATH


def test_split_sql_skips_comments_and_keeps_quoted_semicolons():
    sql = """
    -- workers; not a statement
    CREATE TABLE a (x VARCHAR(5) DEFAULT ';', y INT DEFAULT -1);
    INSERT INTO a VALUES ('it''s -- fine');
    SELECT 1
    """

    statements = list(split_sql(sql))

    assert len(statements) == 3
    assert statements[0].startswith("CREATE TABLE a")
    assert "';'" in statements[0]
    assert "DEFAULT -1" in statements[0]
    assert statements[1] == "INSERT INTO a VALUES ('it''s -- fine')"
    assert statements[2] == "SELECT 1"


def test_schema_statements_drop_database_directives():
    sql = "CREATE DATABASE IF NOT EXISTS x;\nUSE x;\nCREATE TABLE t (a INT);\n"

    assert schema_statements(sql) == ["CREATE TABLE t (a INT)"]


def test_shipped_schema_creates_every_table():
    statements = schema_statements(SCHEMA_PATH.read_text(encoding="utf-8"))

    created = [s.split()[5] for s in statements if s.upper().startswith("CREATE TABLE IF NOT EXISTS")]
    assert created == ["workers", "active_sessions", "time_entries", "settings"]


def test_db_config_from_mapping_keeps_defaults():
    config = DBConfig.from_mapping({"host": "db", "port": "3307"})

    assert config.host == "db"
    assert config.port == 3307
    assert config.database == "timeclock"
    assert "database" not in config.connect_kwargs(with_database=False)


def test_normalize_mysql_time_variants():
    assert normalize_mysql_time(None) is None
    assert normalize_mysql_time(time(8, 5)) == "08:05:00"
    assert normalize_mysql_time(timedelta(hours=18, minutes=30)) == "18:30:00"
    assert normalize_mysql_time("9:05") == "09:05:00"


def test_normalize_mysql_date():
    assert normalize_mysql_date(date(2024, 3, 1)) == "2024-03-01"
    assert normalize_mysql_date("2024-03-01") == "2024-03-01"
