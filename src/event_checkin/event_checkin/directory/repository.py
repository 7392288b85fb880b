from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Event, Member


class EventDirectory(Protocol):
    """Read-only view of events owned by the surrounding application."""

    def exists(self, event_id: int) -> bool:
        raise NotImplementedError

    def get(self, event_id: int) -> Optional[Event]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Event]:
        raise NotImplementedError


class MemberDirectory(Protocol):
    def resolve(self, member_id: str) -> Optional[Member]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Member]:
        raise NotImplementedError
