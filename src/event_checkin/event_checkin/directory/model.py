from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import UNKNOWN_CHAPTER


@dataclass(frozen=True)
class Member:
    """Member as seen by the check-in core (read only)."""

    id: str
    display_name: str
    chapter: str

    @classmethod
    def unresolved(cls, member_id: str) -> "Member":
        return cls(id=member_id, display_name=member_id, chapter=UNKNOWN_CHAPTER)


@dataclass(frozen=True)
class Event:
    """Event metadata. Attendee counts are derived from the ledger, never stored here."""

    id: int
    title: str
    date: str
    location: str
    badge_icon: Optional[str] = None
    badge_details: Optional[str] = None
