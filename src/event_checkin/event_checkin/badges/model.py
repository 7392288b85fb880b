from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class Badge:
    """Display-only proof that a member attended an event."""

    id: str
    title: str
    date: str
    icon: str
    details: str

    def to_dict(self) -> dict:
        return asdict(self)
