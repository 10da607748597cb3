from datetime import time, timedelta

import pytest

from worktime.database.bootstrap import DEFAULT_SCHEMA_PATH, _strip_create_db_and_use, iter_sql_statements
from worktime.database.mysql_base import normalize_mysql_time


def test_statements_split_outside_quotes_and_comments():
    sql = """
    -- leading comment; with a semicolon
    CREATE TABLE a (id INT); -- trailing
    INSERT INTO a VALUES ('x;y');
    INSERT INTO b VALUES ("it's");
    SELECT 1
    """
    statements = list(iter_sql_statements(sql))
    assert statements == [
        "CREATE TABLE a (id INT)",
        "INSERT INTO a VALUES ('x;y')",
        "INSERT INTO b VALUES (\"it's\")",
        "SELECT 1",
    ]


def test_database_selection_is_stripped():
    sql = "CREATE DATABASE IF NOT EXISTS other;\nUSE other;\nCREATE TABLE t (id INT);"
    assert list(iter_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE t (id INT)"]


def test_shipped_schema_defines_all_tables():
    sql = DEFAULT_SCHEMA_PATH.read_text(encoding="utf-8")
    creates = [s for s in iter_sql_statements(sql) if s.upper().startswith("CREATE TABLE")]
    names = {s.split()[5] if "IF NOT EXISTS" in s.upper() else s.split()[2] for s in creates}
    assert {"punch_events", "holidays", "leave_grants", "work_policies", "daily_work_summary"} <= names


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, None),
        (time(8, 30), time(8, 30)),
        (timedelta(hours=22, minutes=15), time(22, 15)),
        ("06:05:09", time(6, 5, 9)),
        ("06:05", time(6, 5)),
    ],
)
def test_normalize_mysql_time(raw, expected):
    assert normalize_mysql_time(raw) == expected


def test_normalize_rejects_garbage():
    with pytest.raises(ValueError):
        normalize_mysql_time("0630")
    with pytest.raises(TypeError):
        normalize_mysql_time(630)
