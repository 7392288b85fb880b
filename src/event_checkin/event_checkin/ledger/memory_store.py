from __future__ import annotations

import threading
from typing import Mapping, Sequence


class InMemoryAttendanceStore:
    """Process-local store; inserts are serialized under a lock."""

    def __init__(self, initial: Mapping[int, Sequence[str]] | None = None):
        self._lock = threading.Lock()
        self._order: dict[int, list[str]] = {}
        self._members: dict[int, set[str]] = {}
        if initial:
            self.merge(initial)

    def get(self, event_id: int) -> list[str]:
        with self._lock:
            return list(self._order.get(event_id, ()))

    def record_if_absent(self, event_id: int, member_id: str) -> bool:
        with self._lock:
            return self._insert(event_id, member_id)

    def snapshot(self) -> dict[int, list[str]]:
        with self._lock:
            return {e: list(ids) for e, ids in self._order.items()}

    def merge(self, snapshot: Mapping[int, Sequence[str]]) -> None:
        """Union another snapshot into this store (existing entries are kept)."""
        with self._lock:
            for event_id, member_ids in snapshot.items():
                for member_id in member_ids:
                    self._insert(int(event_id), member_id)

    def discard(self, event_id: int, member_id: str) -> None:
        """Drop a pair; only used to undo an insert whose persistence failed."""
        with self._lock:
            members = self._members.get(event_id)
            if members and member_id in members:
                members.remove(member_id)
                self._order[event_id].remove(member_id)

    def _insert(self, event_id: int, member_id: str) -> bool:
        members = self._members.setdefault(event_id, set())
        if member_id in members:
            return False
        members.add(member_id)
        self._order.setdefault(event_id, []).append(member_id)
        return True
