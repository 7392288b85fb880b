from __future__ import annotations

from enum import Enum


class CheckInStatus(str, Enum):
    """Outcome of a single record-attendance call."""

    GRANTED = "GRANTED"
    DUPLICATE = "DUPLICATE"
    REJECTED = "REJECTED"


class RejectReason(str, Enum):
    UNKNOWN_EVENT = "UNKNOWN_EVENT"
    INVALID_MEMBER = "INVALID_MEMBER"


class DecodeErrorCode(str, Enum):
    """Why a scanned text could not be turned into a payload."""

    MALFORMED_PAYLOAD = "MALFORMED_PAYLOAD"
    MISSING_MEMBER_ID = "MISSING_MEMBER_ID"
    INVALID_EVENT_REFERENCE = "INVALID_EVENT_REFERENCE"


class ScannerState(str, Enum):
    IDLE = "IDLE"
    ACTIVE = "ACTIVE"


class StoreBackend(str, Enum):
    MEMORY = "memory"
    JSON = "json"
    MYSQL = "mysql"
