"""Schema bootstrap for a fresh MySQL database.

``schema.sql`` may carry its own ``CREATE DATABASE`` / ``USE`` lines for
manual runs; they are dropped here so the configured database name wins.
"""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import mysql.connector

logger = logging.getLogger(__name__)

_CREATE_DB_OR_USE = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b[^;]*;\s*$")
_LINE_COMMENT = re.compile(r"(?m)^\s*--.*$")


@contextmanager
def _server(db_config: dict, *, with_database: bool = True):
    kwargs = {
        "host": str(db_config.get("host", "localhost")),
        "port": int(db_config.get("port", 3306)),
        "user": str(db_config.get("user", "root")),
        "password": str(db_config.get("password", "")),
        "use_pure": True,
    }
    if with_database:
        kwargs["database"] = str(db_config["database"])
    conn = mysql.connector.connect(**kwargs)
    try:
        yield conn
    finally:
        conn.close()


def iter_sql_statements(sql: str) -> Iterator[str]:
    """Split a script on ``;`` outside quoted literals, skipping ``--`` lines."""
    sql = _LINE_COMMENT.sub("", sql)
    start = 0
    quote = None
    i = 0
    while i < len(sql):
        ch = sql[i]
        if quote:
            if ch == "\\":
                i += 1
            elif ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = sql[start:i].strip()
            if stmt:
                yield stmt
            start = i + 1
        i += 1

    tail = sql[start:].strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    name = str(db_config["database"])
    with _server(db_config, with_database=False) as conn:
        cur = conn.cursor()
        cur.execute(f"CREATE DATABASE IF NOT EXISTS `{name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci")
        conn.commit()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> int:
    """Create the database if needed and run every statement of ``schema_path``."""
    ensure_database_exists(db_config)
    path = Path(schema_path)
    sql = _CREATE_DB_OR_USE.sub("", path.read_text(encoding="utf-8"))

    count = 0
    with _server(db_config) as conn:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
    logger.info("Applied %s (%d statements) to %s", path.name, count, db_config["database"])
    return count


def list_tables(db_config: dict) -> list[str]:
    with _server(db_config) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return sorted(row[0] for row in cur.fetchall())
