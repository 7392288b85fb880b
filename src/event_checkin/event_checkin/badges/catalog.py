from __future__ import annotations

import json
from pathlib import Path

from ..core.constants import DEFAULT_BADGE_ICON
from .model import Badge


def load_badge_catalog(path: str | Path) -> list[Badge]:
    """Load the static badge catalog: `{"badges": [...]}` or a bare JSON array."""

    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    items = raw.get("badges", []) if isinstance(raw, dict) else raw
    return [
        Badge(
            id=str(item["id"]),
            title=str(item.get("title", "")),
            date=str(item.get("date", "")),
            icon=str(item.get("icon") or DEFAULT_BADGE_ICON),
            details=str(item.get("details", "")),
        )
        for item in items
    ]
