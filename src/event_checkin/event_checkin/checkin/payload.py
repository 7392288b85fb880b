"""Scan payload decoding.

A member pass carries compact JSON such as ``{"memberId": "M-0001", "activityId": 3}``.
Decoding never raises: it returns ``Ok(ScanPayload)`` or ``Err(DecodeError)``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional

from ..common.result import Err, Ok, Result
from ..common.validators import clean_member_id, coerce_event_id
from ..core.enums import DecodeErrorCode

MEMBER_KEY = "memberId"
EVENT_KEYS = ("activityId", "eventId")


@dataclass(frozen=True)
class ScanPayload:
    member_id: str
    event_id: Optional[int] = None


@dataclass(frozen=True)
class DecodeError:
    code: DecodeErrorCode
    detail: str = ""


def _event_value(data: dict) -> tuple[bool, Any]:
    for key in EVENT_KEYS:
        if key in data and data[key] is not None:
            return True, data[key]
    return False, None


def decode_payload(raw: Any) -> Result[ScanPayload, DecodeError]:
    if not isinstance(raw, str):
        return Err(DecodeError(DecodeErrorCode.MALFORMED_PAYLOAD, "payload is not text"))
    try:
        data = json.loads(raw)
    except ValueError as e:
        return Err(DecodeError(DecodeErrorCode.MALFORMED_PAYLOAD, str(e)))
    if not isinstance(data, dict):
        return Err(DecodeError(DecodeErrorCode.MALFORMED_PAYLOAD, "payload is not a JSON object"))

    member_id = clean_member_id(data.get(MEMBER_KEY))
    if not member_id:
        return Err(DecodeError(DecodeErrorCode.MISSING_MEMBER_ID, f"'{MEMBER_KEY}' is missing or empty"))

    present, value = _event_value(data)
    if not present:
        return Ok(ScanPayload(member_id=member_id))

    event_id = coerce_event_id(value)
    if event_id is None:
        return Err(DecodeError(DecodeErrorCode.INVALID_EVENT_REFERENCE, f"event reference {value!r} is not an integer"))
    return Ok(ScanPayload(member_id=member_id, event_id=event_id))


def encode_payload(member_id: str, event_id: Optional[int] = None) -> str:
    data: dict[str, Any] = {MEMBER_KEY: member_id}
    if event_id is not None:
        data[EVENT_KEYS[0]] = int(event_id)
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))
