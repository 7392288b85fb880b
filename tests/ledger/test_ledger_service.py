from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from event_checkin.core.enums import CheckInStatus, RejectReason
from event_checkin.core.exceptions import StorageError, TransientStorageError
from event_checkin.ledger.memory_store import InMemoryAttendanceStore
from event_checkin.ledger.retry import RetryPolicy
from event_checkin.ledger.service import AttendanceLedger


def test_second_check_in_is_duplicate(ledger):
    first = ledger.record_attendance(1, "M1")
    second = ledger.record_attendance(1, "M1")

    assert first.status == CheckInStatus.GRANTED
    assert second.status == CheckInStatus.DUPLICATE
    assert ledger.get_attendees_for_event(1) == ["M1"]


def test_same_member_counts_once_per_event(ledger):
    assert ledger.record_attendance(1, "M1").is_granted
    assert ledger.record_attendance(2, "M1").is_granted

    assert ledger.attendee_count(1) == 1
    assert ledger.attendee_count(2) == 1


def test_unknown_event_is_rejected_without_side_effect(ledger, store):
    ledger.record_attendance(1, "A")
    before = store.snapshot()

    outcome = ledger.record_attendance(999, "M1")

    assert outcome.status == CheckInStatus.REJECTED
    assert outcome.reason == RejectReason.UNKNOWN_EVENT
    assert store.snapshot() == before


@pytest.mark.parametrize("member_id", ["", "   ", None])
def test_empty_member_is_rejected(ledger, store, member_id):
    outcome = ledger.record_attendance(1, member_id)

    assert outcome.status == CheckInStatus.REJECTED
    assert outcome.reason == RejectReason.INVALID_MEMBER
    assert store.snapshot() == {}


def test_attendees_are_in_arrival_order(ledger):
    for m in ["B", "A", "M1", "A"]:
        ledger.record_attendance(3, m)

    assert ledger.get_attendees_for_event(3) == ["B", "A", "M1"]
    assert ledger.is_member_present(3, "A")
    assert not ledger.is_member_present(1, "A")


def test_member_id_whitespace_does_not_create_second_record(ledger):
    assert ledger.record_attendance(1, "M1").is_granted
    assert ledger.record_attendance(1, "  M1 ").status == CheckInStatus.DUPLICATE


def test_parallel_check_ins_grant_exactly_once(events):
    store = InMemoryAttendanceStore()
    ledger = AttendanceLedger(store, events)
    n = 32
    barrier = threading.Barrier(n)

    def scan(_):
        barrier.wait()
        return ledger.record_attendance(2, "M1").status

    with ThreadPoolExecutor(max_workers=n) as pool:
        statuses = list(pool.map(scan, range(n)))

    assert statuses.count(CheckInStatus.GRANTED) == 1
    assert statuses.count(CheckInStatus.DUPLICATE) == n - 1
    assert ledger.attendee_count(2) == 1


class FlakyStore(InMemoryAttendanceStore):
    def __init__(self, failures: int):
        super().__init__()
        self.failures = failures
        self.calls = 0

    def record_if_absent(self, event_id, member_id):
        self.calls += 1
        if self.failures > 0:
            self.failures -= 1
            raise TransientStorageError("connection reset")
        return super().record_if_absent(event_id, member_id)


def test_transient_store_errors_are_retried(events):
    store = FlakyStore(failures=2)
    delays = []
    ledger = AttendanceLedger(store, events, retry=RetryPolicy(attempts=3, initial_delay=0.1), sleep=delays.append)

    assert ledger.record_attendance(1, "A").is_granted
    assert store.calls == 3
    assert delays == [0.1, 0.2]


def test_storage_failure_propagates_and_keeps_granted_records(events):
    store = FlakyStore(failures=0)
    ledger = AttendanceLedger(store, events, retry=RetryPolicy(attempts=2, initial_delay=0), sleep=lambda _: None)
    assert ledger.record_attendance(1, "A").is_granted

    store.failures = 5
    with pytest.raises(StorageError):
        ledger.record_attendance(1, "B")

    assert ledger.get_attendees_for_event(1) == ["A"]
