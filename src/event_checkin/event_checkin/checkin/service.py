from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

from ..common.result import Err
from ..core.enums import CheckInStatus, DecodeErrorCode, RejectReason
from ..ledger.model import CheckInOutcome
from ..ledger.service import AttendanceLedger
from .payload import DecodeError, ScanPayload, decode_payload

logger = logging.getLogger(__name__)

DECODE_MESSAGES = {
    DecodeErrorCode.MALFORMED_PAYLOAD: "Unrecognized QR content",
    DecodeErrorCode.MISSING_MEMBER_ID: "QR missing memberId",
    DecodeErrorCode.INVALID_EVENT_REFERENCE: "QR has no valid event reference",
}

REJECT_MESSAGES = {
    RejectReason.UNKNOWN_EVENT: "Unknown event, check-in refused",
    RejectReason.INVALID_MEMBER: "Invalid member id, check-in refused",
}


@dataclass(frozen=True)
class ScanResult:
    """What the operator sees after one scan."""

    raw: str
    message: str
    payload: Optional[ScanPayload] = None
    outcome: Optional[CheckInOutcome] = None
    error: Optional[DecodeError] = None
    scanned_at: datetime = field(default_factory=datetime.now)

    @property
    def ok(self) -> bool:
        return self.outcome is not None and self.outcome.status != CheckInStatus.REJECTED

    @property
    def is_duplicate(self) -> bool:
        return self.outcome is not None and self.outcome.status == CheckInStatus.DUPLICATE

    def to_dict(self) -> dict:
        return {
            "success": self.ok,
            "status": self.outcome.status.value if self.outcome else "ERROR",
            "reason": self._reason_code(),
            "duplicate": self.is_duplicate,
            "memberId": self.payload.member_id if self.payload else None,
            "eventId": self.payload.event_id if self.payload else None,
            "message": self.message,
            "scannedAt": self.scanned_at.strftime("%Y-%m-%d %H:%M:%S"),
        }

    def _reason_code(self) -> Optional[str]:
        if self.error is not None:
            return self.error.code.value
        if self.outcome is not None and self.outcome.reason is not None:
            return self.outcome.reason.value
        return None


class CheckInService:
    """Decode a raw scan and record it in the ledger.

    Decode errors and rejections come back as a ScanResult with operator text.
    StorageError from the ledger is not caught here.
    """

    def __init__(
        self,
        ledger: AttendanceLedger,
        *,
        default_event_id: Optional[int] = None,
        now: Callable[[], datetime] = datetime.now,
    ):
        self._ledger = ledger
        self._default_event_id = default_event_id
        self._now = now

    def process(self, raw: str) -> ScanResult:
        decoded = decode_payload(raw)
        if isinstance(decoded, Err):
            logger.info("Scan not decoded (%s): %s", decoded.error.code.value, decoded.error.detail)
            return self._result(raw, DECODE_MESSAGES[decoded.error.code], error=decoded.error)

        payload = decoded.value
        if payload.event_id is None:
            if self._default_event_id is None:
                error = DecodeError(DecodeErrorCode.INVALID_EVENT_REFERENCE, "payload has no event id")
                return self._result(raw, DECODE_MESSAGES[error.code], payload=payload, error=error)
            payload = ScanPayload(member_id=payload.member_id, event_id=self._default_event_id)

        outcome = self._ledger.record_attendance(payload.event_id, payload.member_id)
        if outcome.status == CheckInStatus.GRANTED:
            message = "Scan successful, badge granted."
        elif outcome.status == CheckInStatus.DUPLICATE:
            message = "Duplicate scan, already granted for this event."
        else:
            message = REJECT_MESSAGES[outcome.reason]
        return self._result(raw, message, payload=payload, outcome=outcome)

    def _result(self, raw: str, message: str, **kwargs) -> ScanResult:
        return ScanResult(raw=raw, message=message, scanned_at=self._now(), **kwargs)
