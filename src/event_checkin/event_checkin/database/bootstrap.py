from __future__ import annotations

import logging
import re
from pathlib import Path

from .connection import DatabaseConnection
from .mysql_base import db_cursor

logger = logging.getLogger(__name__)

_COMMENT_LINE = re.compile(r"^\s*--.*$", re.MULTILINE)
_DATABASE_SCOPED = re.compile(r"^(CREATE\s+DATABASE|USE)\b", re.IGNORECASE)


def schema_statements(sql: str) -> list[str]:
    """Split schema.sql into executable statements.

    Comment lines are dropped, as are CREATE DATABASE / USE statements: the target
    database comes from DB_CONFIG, not from the file. The schema holds DDL only, so a
    plain split on ';' is enough.
    """

    body = _COMMENT_LINE.sub("", sql)
    statements = [s.strip() for s in body.split(";")]
    return [s for s in statements if s and not _DATABASE_SCOPED.match(s)]


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    name = conn_factory.config.database.replace("`", "")
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(f"CREATE DATABASE IF NOT EXISTS `{name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci")
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path) -> None:
    ensure_database_exists(conn_factory)
    statements = schema_statements(Path(schema_path).read_text(encoding="utf-8"))
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        for stmt in statements:
            cur.execute(stmt)
    logger.info("Applied %d schema statements to %s", len(statements), conn_factory.config.database)


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
