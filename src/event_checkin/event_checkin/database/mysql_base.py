from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True) -> Iterator[tuple[Any, Any]]:
    """One short-lived connection and cursor per unit of work.

    Commits when the block exits cleanly, rolls back otherwise.
    """

    conn = conn_factory.connect()
    cur = None
    try:
        cur = conn.cursor(dictionary=dictionary)
        yield conn, cur
    except BaseException:
        conn.rollback()
        raise
    else:
        conn.commit()
    finally:
        if cur is not None:
            cur.close()
        conn.close()


def fetchall(cur) -> list[dict[str, Any]]:
    return [dict(r) for r in (cur.fetchall() or [])]
