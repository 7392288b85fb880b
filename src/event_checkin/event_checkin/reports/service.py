from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import ALL_CHAPTERS
from ..directory.model import Member
from ..directory.repository import EventDirectory, MemberDirectory
from ..ledger.service import AttendanceLedger
from .model import Census, EngagementEntry, EventSummary


class ReportService:
    """Aggregations over the ledger: totals, engagement ranking, per-event summaries.

    Everything is recomputed from the ledger on each call; nothing here is cached.
    Ledger entries for events missing from the directory are left out of every view.
    """

    def __init__(self, ledger: AttendanceLedger, events: EventDirectory, members: MemberDirectory):
        self._ledger = ledger
        self._events = events
        self._members = members

    def resolve_member(self, member_id: str) -> Member:
        return self._members.resolve(member_id) or Member.unresolved(member_id)

    def total_attendance(self) -> int:
        snapshot = self._ledger.snapshot()
        return sum(len(snapshot.get(e.id, ())) for e in self._events.list_all())

    def engagement_ranking(self) -> list[EngagementEntry]:
        counts: dict[str, int] = {}
        for member_ids in self._known_snapshot().values():
            for member_id in set(member_ids):
                counts[member_id] = counts.get(member_id, 0) + 1

        ranking = [EngagementEntry(member_id=m, event_count=c) for m, c in counts.items()]
        ranking.sort(key=lambda x: (-x.event_count, x.member_id))
        return ranking

    def per_event_summary(self) -> list[EventSummary]:
        snapshot = self._ledger.snapshot()
        out: list[EventSummary] = []
        for event in self._events.list_all():
            member_ids = snapshot.get(event.id, [])
            out.append(
                EventSummary(
                    event=event,
                    attendee_count=len(member_ids),
                    attendees=[self.resolve_member(m) for m in member_ids],
                )
            )
        return out

    def filter_by_chapter(self, ranking: Sequence[EngagementEntry], chapter: Optional[str]) -> list[EngagementEntry]:
        if not chapter or chapter.strip().lower() == ALL_CHAPTERS:
            return list(ranking)
        return [e for e in ranking if self.resolve_member(e.member_id).chapter == chapter]

    def census(self) -> Census:
        return Census(
            total_members=len(self._members.list_all()),
            total_events=len(self._events.list_all()),
            total_attendance=self.total_attendance(),
        )

    def chapters(self) -> list[str]:
        found = {m.chapter for m in self._members.list_all() if m.chapter}
        return [ALL_CHAPTERS, *sorted(found)]

    def attendance_rows(self, event_id: int) -> list[dict]:
        """Rows for the per-event attendance export."""

        event = self._events.get(event_id)
        if event is None:
            return []
        rows = []
        for member_id in self._ledger.get_attendees_for_event(event_id):
            m = self.resolve_member(member_id)
            rows.append(
                {
                    "event": event.title,
                    "date": event.date,
                    "memberId": m.id,
                    "name": m.display_name,
                    "chapter": m.chapter,
                }
            )
        return rows

    def engagement_rows(self, chapter: Optional[str] = ALL_CHAPTERS) -> list[dict]:
        """Rows for the member engagement export, in ranking order."""

        rows = []
        for entry in self.filter_by_chapter(self.engagement_ranking(), chapter):
            m = self.resolve_member(entry.member_id)
            rows.append({"id": m.id, "name": m.display_name, "chapter": m.chapter, "events": entry.event_count})
        return rows

    def _known_snapshot(self) -> dict[int, list[str]]:
        snapshot = self._ledger.snapshot()
        return {e.id: snapshot[e.id] for e in self._events.list_all() if e.id in snapshot}
