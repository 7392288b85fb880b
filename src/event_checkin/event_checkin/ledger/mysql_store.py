from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import StorageError, TransientStorageError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall

_TRANSIENT_ERRNOS = {
    errorcode.ER_LOCK_DEADLOCK,
    errorcode.ER_LOCK_WAIT_TIMEOUT,
    errorcode.CR_SERVER_GONE_ERROR,
    errorcode.CR_SERVER_LOST,
    errorcode.CR_CONN_HOST_ERROR,
    errorcode.CR_CONNECTION_ERROR,
}


def classify_mysql_error(e: mysql.connector.Error) -> StorageError:
    """Map a driver error to a transient (retry) or permanent storage error."""

    if isinstance(e, (mysql.connector.errors.InterfaceError, mysql.connector.errors.OperationalError)):
        return TransientStorageError(str(e))
    if getattr(e, "errno", None) in _TRANSIENT_ERRNOS:
        return TransientStorageError(str(e))
    return StorageError(str(e))


class MySQLAttendanceStore:
    """Shared ledger for several scanner stations.

    The unique key on (event_id, member_id) is the insert-if-absent primitive:
    the insert that creates the row sees rowcount == 1, every racing insert sees 0.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, event_id: int) -> list[str]:
        with self._cursor() as cur:
            cur.execute(
                "SELECT member_id FROM attendance_records WHERE event_id=%s ORDER BY seq",
                (int(event_id),),
            )
            return [str(r["member_id"]) for r in fetchall(cur)]

    def record_if_absent(self, event_id: int, member_id: str) -> bool:
        with self._cursor() as cur:
            cur.execute(
                """
                INSERT INTO attendance_records (event_id, member_id)
                VALUES (%s, %s)
                ON DUPLICATE KEY UPDATE event_id = event_id
                """,
                (int(event_id), member_id),
            )
            return cur.rowcount == 1

    def snapshot(self) -> dict[int, list[str]]:
        with self._cursor() as cur:
            cur.execute("SELECT event_id, member_id FROM attendance_records ORDER BY event_id, seq")
            out: dict[int, list[str]] = {}
            for r in fetchall(cur):
                out.setdefault(int(r["event_id"]), []).append(str(r["member_id"]))
            return out

    @contextmanager
    def _cursor(self) -> Iterator[Any]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                yield cur
        except mysql.connector.Error as e:
            raise classify_mysql_error(e) from e
