from __future__ import annotations

import mysql.connector
import pytest

from event_checkin.core.exceptions import StorageError, TransientStorageError
from event_checkin.ledger.mysql_store import MySQLAttendanceStore, classify_mysql_error
from event_checkin.ledger.retry import RetryPolicy, call_with_retry


class FakeCursor:
    """Emulates the attendance_records table with its unique (event_id, member_id) key."""

    def __init__(self, db):
        self._db = db
        self._rows = []
        self.rowcount = 0

    def execute(self, sql, params=()):
        if self._db.fail_with is not None:
            raise self._db.fail_with
        stmt = " ".join(sql.split())
        if stmt.startswith("INSERT INTO attendance_records"):
            key = (int(params[0]), params[1])
            if key in self._db.rows:
                self.rowcount = 0
            else:
                self._db.rows.append(key)
                self.rowcount = 1
        elif "WHERE event_id=%s" in stmt:
            self._rows = [{"member_id": m} for (e, m) in self._db.rows if e == params[0]]
        else:
            self._rows = [{"event_id": e, "member_id": m} for (e, m) in sorted(self._db.rows, key=lambda r: r[0])]

    def fetchall(self):
        return self._rows

    def close(self):
        pass


class FakeConnection:
    def __init__(self, db):
        self._db = db

    def cursor(self, dictionary=False):
        return FakeCursor(self._db)

    def commit(self):
        self._db.commits += 1

    def rollback(self):
        self._db.rollbacks += 1

    def close(self):
        pass


class FakeDatabase:
    def __init__(self):
        self.rows = []
        self.commits = 0
        self.rollbacks = 0
        self.fail_with = None

    def connect(self):
        return FakeConnection(self)


def test_insert_reports_grant_only_for_new_row():
    db = FakeDatabase()
    store = MySQLAttendanceStore(db)

    assert store.record_if_absent(1, "A") is True
    assert store.record_if_absent(1, "A") is False
    assert store.record_if_absent(2, "A") is True


def test_get_and_snapshot_preserve_insert_order():
    db = FakeDatabase()
    store = MySQLAttendanceStore(db)
    for e, m in [(2, "B"), (1, "C"), (2, "A")]:
        store.record_if_absent(e, m)

    assert store.get(2) == ["B", "A"]
    assert store.snapshot() == {1: ["C"], 2: ["B", "A"]}


def test_lost_connection_is_transient_and_rolled_back():
    db = FakeDatabase()
    db.fail_with = mysql.connector.errors.OperationalError("Lost connection to MySQL server")
    store = MySQLAttendanceStore(db)

    with pytest.raises(TransientStorageError):
        store.record_if_absent(1, "A")
    assert db.rollbacks == 1


def test_programming_error_is_permanent():
    err = classify_mysql_error(mysql.connector.errors.ProgrammingError("Table doesn't exist"))

    assert isinstance(err, StorageError)
    assert not isinstance(err, TransientStorageError)


def test_retry_gives_up_with_storage_error():
    calls = []

    def always_down():
        calls.append(1)
        raise TransientStorageError("down")

    with pytest.raises(StorageError) as info:
        call_with_retry(always_down, RetryPolicy(attempts=3, initial_delay=0.5, max_delay=0.6), sleep=lambda _: None)

    assert len(calls) == 3
    assert not isinstance(info.value, TransientStorageError)


def test_retry_does_not_repeat_permanent_errors():
    calls = []

    def broken():
        calls.append(1)
        raise StorageError("bad schema")

    with pytest.raises(StorageError):
        call_with_retry(broken, RetryPolicy(attempts=5), sleep=lambda _: None)

    assert len(calls) == 1
