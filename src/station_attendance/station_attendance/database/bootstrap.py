from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DBTarget:
    host: str
    port: int
    user: str
    password: str
    database: str


@dataclass(frozen=True)
class DemoEmployee:
    first_name: str
    last_name: str
    email: str
    password: str
    role: str


DEMO_EMPLOYEES = (
    DemoEmployee("Amine", "Ben Salah", "amine@station.test", "pompiste123", "pompiste"),
    DemoEmployee("Sarra", "Trabelsi", "sarra@station.test", "caissier123", "caissier"),
    DemoEmployee("Karim", "Jaziri", "karim@station.test", "gerant123", "gerant"),
)


def _as_target(db_config: dict) -> DBTarget:
    return DBTarget(
        host=str(db_config.get("host", "localhost")),
        port=int(db_config.get("port", 3306)),
        user=str(db_config.get("user", "root")),
        password=str(db_config.get("password", "")),
        database=str(db_config.get("database", "station_attendance")),
    )


def _connect(target: DBTarget, *, with_database: bool = True):
    kwargs = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ';' outside quotes. Full-line '--' comments are dropped."""
    sql = "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))

    buf: list[str] = []
    quote = None
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\" and quote:
            buf.append(ch)
            escape = True
            continue

        if ch in ("'", '"'):
            if quote is None:
                quote = ch
            elif quote == ch:
                quote = None
            buf.append(ch)
            continue

        if ch == ";" and quote is None:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _exec_script(db_config: dict, path: str | Path) -> None:
    target = _as_target(db_config)
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    target = _as_target(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _exec_script(db_config, schema_path)
    logger.info("Applied schema %s", schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _exec_script(db_config, seed_path)
    logger.info("Applied seed %s", seed_path)


def ensure_demo_employees(db_config: dict) -> None:
    """Upsert demo employees with real password hashes (seed.sql cannot hash)."""
    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor(dictionary=True)
        for demo in DEMO_EMPLOYEES:
            password_hash = generate_password_hash(demo.password)
            cur.execute("SELECT employee_id FROM employees WHERE email=%s", (demo.email,))
            if cur.fetchone():
                cur.execute(
                    """
                    UPDATE employees
                    SET first_name=%s, last_name=%s, role=%s, password_hash=%s, status='active'
                    WHERE email=%s
                    """,
                    (demo.first_name, demo.last_name, demo.role, password_hash, demo.email),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO employees (first_name, last_name, email, role, status, password_hash)
                    VALUES (%s, %s, %s, %s, 'active', %s)
                    """,
                    (demo.first_name, demo.last_name, demo.email, demo.role, password_hash),
                )
        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
