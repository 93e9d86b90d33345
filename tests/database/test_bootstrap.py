from __future__ import annotations

from src.station_attendance.station_attendance.database.bootstrap import iter_sql_statements


def test_statements_split_outside_quotes():
    script = """
    -- employees first
    CREATE TABLE a (x INT);
    INSERT INTO a VALUES (1); INSERT INTO b VALUES ('semi;colon', "it\\'s");
    SELECT 1
    """

    assert list(iter_sql_statements(script)) == [
        "CREATE TABLE a (x INT)",
        "INSERT INTO a VALUES (1)",
        "INSERT INTO b VALUES ('semi;colon', \"it\\'s\")",
        "SELECT 1",
    ]


def test_blank_script_yields_nothing():
    assert list(iter_sql_statements("-- only a comment\n;\n")) == []
