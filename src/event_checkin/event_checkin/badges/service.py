from __future__ import annotations

import logging
from typing import Iterable

from ..common.validators import clean_member_id
from ..core.constants import DEFAULT_BADGE_ICON
from ..directory.repository import EventDirectory
from ..ledger.service import AttendanceLedger
from .model import Badge

logger = logging.getLogger(__name__)


def event_badge_id(event_id: int) -> str:
    return f"event-{event_id}"


class BadgeService:
    def __init__(self, ledger: AttendanceLedger, events: EventDirectory, catalog: Iterable[Badge] = ()):
        self._ledger = ledger
        self._events = events
        self._catalog = list(catalog)

    def derive_badges_for_member(self, member_id: str) -> list[Badge]:
        """Earned badges (one per attended event) followed by catalog badges.

        Merge is two passes: earned entries go in first, then catalog entries only for
        ids not already present, so an earned badge always wins over a catalog one.
        """

        member_id = clean_member_id(member_id)
        merged: dict[str, Badge] = {}

        snapshot = self._ledger.snapshot()
        for event_id in sorted(snapshot):
            if member_id not in snapshot[event_id]:
                continue
            event = self._events.get(event_id)
            if event is None:
                logger.warning("Ledger references event %s which is not in the directory; skipping badge", event_id)
                continue
            badge = Badge(
                id=event_badge_id(event.id),
                title=event.title,
                date=event.date,
                icon=event.badge_icon or DEFAULT_BADGE_ICON,
                details=event.badge_details or "",
            )
            merged[badge.id] = badge

        for badge in self._catalog:
            if badge.id not in merged:
                merged[badge.id] = badge

        return list(merged.values())
