from __future__ import annotations

from datetime import datetime

import pytest

from event_checkin.directory.memory import InMemoryEventDirectory, InMemoryMemberDirectory
from event_checkin.directory.model import Event, Member
from event_checkin.ledger.memory_store import InMemoryAttendanceStore
from event_checkin.ledger.retry import RetryPolicy
from event_checkin.ledger.service import AttendanceLedger


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 10, 11, 9, 30, 0)


@pytest.fixture
def events() -> InMemoryEventDirectory:
    return InMemoryEventDirectory(
        [
            Event(id=1, title="General Assembly", date="2025-08-23", location="Auditorium", badge_icon="🎤", badge_details="GA"),
            Event(id=2, title="Webinar", date="2025-09-06", location="Online"),
            Event(id=3, title="Hackathon", date="2025-10-11", location="Room 301", badge_icon="🏆"),
        ]
    )


@pytest.fixture
def members() -> InMemoryMemberDirectory:
    return InMemoryMemberDirectory(
        [
            Member(id="A", display_name="Andrea", chapter="North"),
            Member(id="B", display_name="Benjie", chapter="South"),
            Member(id="M1", display_name="Marco", chapter="North"),
        ]
    )


@pytest.fixture
def store() -> InMemoryAttendanceStore:
    return InMemoryAttendanceStore()


@pytest.fixture
def ledger(store, events) -> AttendanceLedger:
    return AttendanceLedger(store, events, retry=RetryPolicy(attempts=3, initial_delay=0), sleep=lambda _: None)
