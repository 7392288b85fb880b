from __future__ import annotations

from typing import Any, Optional


def clean_member_id(value: Any) -> str:
    """Normalize a member id to a stripped string.

    Only strings and integers are ids; anything else (missing, bool, object, array)
    gives ''.
    """
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        return ""
    return str(value).strip()


def coerce_event_id(value: Any) -> Optional[int]:
    """Return value as an int event id, or None if it is not integer-coercible.

    Accepts ints, integral floats and strings holding an optionally signed integer.
    """

    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        digits = text[1:] if text[:1] in {"+", "-"} else text
        if digits.isdigit() and digits.isascii():
            return int(text)
    return None
