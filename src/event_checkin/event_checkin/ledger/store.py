from __future__ import annotations

from typing import Protocol, Sequence


class AttendanceStore(Protocol):
    """Storage seam for the attendance ledger.

    Note (DIP): the ledger service depends on this interface, not on a concrete backend.
    `record_if_absent` must be atomic: for one (event_id, member_id) pair exactly one
    call ever returns True, no matter how calls interleave.
    """

    def get(self, event_id: int) -> Sequence[str]:
        """Member ids checked into the event, in arrival order."""
        raise NotImplementedError

    def record_if_absent(self, event_id: int, member_id: str) -> bool:
        raise NotImplementedError

    def snapshot(self) -> dict[int, list[str]]:
        raise NotImplementedError
