from __future__ import annotations

from dataclasses import dataclass

from ..directory.model import Event, Member


@dataclass(frozen=True)
class EngagementEntry:
    member_id: str
    event_count: int


@dataclass(frozen=True)
class EventSummary:
    event: Event
    attendee_count: int
    attendees: list[Member]


@dataclass(frozen=True)
class Census:
    total_members: int
    total_events: int
    total_attendance: int
