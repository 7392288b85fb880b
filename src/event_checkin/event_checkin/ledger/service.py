from __future__ import annotations

import logging
import time
from typing import Callable, Optional, TypeVar

from ..common.validators import clean_member_id
from ..core.enums import RejectReason
from ..directory.repository import EventDirectory
from .model import CheckInOutcome
from .retry import RetryPolicy, call_with_retry
from .store import AttendanceStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AttendanceLedger:
    """Single source of truth for who attended what.

    Only a Granted outcome changes state. Duplicates and rejections leave the store
    untouched. StorageError is the only exception this service lets through.
    """

    def __init__(
        self,
        store: AttendanceStore,
        events: EventDirectory,
        *,
        retry: Optional[RetryPolicy] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        self._store = store
        self._events = events
        self._retry = retry or RetryPolicy()
        self._sleep = sleep or time.sleep

    def record_attendance(self, event_id: int, member_id: str) -> CheckInOutcome:
        if not self._events.exists(event_id):
            logger.warning("Rejected check-in: unknown event %s (member=%r)", event_id, member_id)
            return CheckInOutcome.rejected(RejectReason.UNKNOWN_EVENT)

        member_id = clean_member_id(member_id)
        if not member_id:
            logger.warning("Rejected check-in: empty member id for event %s", event_id)
            return CheckInOutcome.rejected(RejectReason.INVALID_MEMBER)

        inserted = self._call(lambda: self._store.record_if_absent(event_id, member_id))
        if not inserted:
            logger.info("Duplicate check-in event=%s member=%s", event_id, member_id)
            return CheckInOutcome.duplicate()

        logger.info("Granted check-in event=%s member=%s", event_id, member_id)
        return CheckInOutcome.granted()

    def get_attendees_for_event(self, event_id: int) -> list[str]:
        return list(self._call(lambda: self._store.get(event_id)))

    def is_member_present(self, event_id: int, member_id: str) -> bool:
        return clean_member_id(member_id) in self.get_attendees_for_event(event_id)

    def attendee_count(self, event_id: int) -> int:
        return len(self.get_attendees_for_event(event_id))

    def snapshot(self) -> dict[int, list[str]]:
        return self._call(self._store.snapshot)

    def _call(self, fn: Callable[[], T]) -> T:
        return call_with_retry(fn, self._retry, sleep=self._sleep)
