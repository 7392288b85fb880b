from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, Optional, Sequence

from .model import Event, Member


class InMemoryEventDirectory:
    """Event directory backed by a list kept in insertion order."""

    def __init__(self, events: Iterable[Event] = ()):
        self._events: dict[int, Event] = {}
        for e in events:
            self._events[int(e.id)] = e

    def exists(self, event_id: int) -> bool:
        return event_id in self._events

    def get(self, event_id: int) -> Optional[Event]:
        return self._events.get(event_id)

    def list_all(self) -> Sequence[Event]:
        return list(self._events.values())


class InMemoryMemberDirectory:
    def __init__(self, members: Iterable[Member] = ()):
        self._members: dict[str, Member] = {m.id: m for m in members}

    def resolve(self, member_id: str) -> Optional[Member]:
        return self._members.get(member_id)

    def list_all(self) -> Sequence[Member]:
        return list(self._members.values())


def load_event_directory(path: str | Path) -> InMemoryEventDirectory:
    """Load events from a JSON array (seed file exported by the admin app)."""

    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    events = [
        Event(
            id=int(item["id"]),
            title=str(item["title"]),
            date=str(item.get("date", "")),
            location=str(item.get("location", "")),
            badge_icon=item.get("badgeIcon") or None,
            badge_details=item.get("badgeDetails") or None,
        )
        for item in raw
    ]
    return InMemoryEventDirectory(events)


def load_member_directory(path: str | Path) -> InMemoryMemberDirectory:
    """Load members from `{"members": [...]}` or a bare JSON array."""

    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    items = raw.get("members", []) if isinstance(raw, dict) else raw
    members = [
        Member(
            id=str(item["id"]),
            display_name=str(item.get("name") or item["id"]),
            chapter=str(item.get("chapter") or ""),
        )
        for item in items
    ]
    return InMemoryMemberDirectory(members)
