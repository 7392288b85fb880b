from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import CheckInStatus, RejectReason


@dataclass(frozen=True)
class CheckInOutcome:
    """Result of record_attendance: Granted, Duplicate or Rejected(reason)."""

    status: CheckInStatus
    reason: Optional[RejectReason] = None

    @classmethod
    def granted(cls) -> "CheckInOutcome":
        return cls(CheckInStatus.GRANTED)

    @classmethod
    def duplicate(cls) -> "CheckInOutcome":
        return cls(CheckInStatus.DUPLICATE)

    @classmethod
    def rejected(cls, reason: RejectReason) -> "CheckInOutcome":
        return cls(CheckInStatus.REJECTED, reason)

    @property
    def is_granted(self) -> bool:
        return self.status == CheckInStatus.GRANTED
