from __future__ import annotations

from collections import deque
from typing import Iterable, Optional, Protocol


class CaptureSource(Protocol):
    """Anything that yields the text of the code currently in view (or None)."""

    def read(self) -> Optional[str]:
        raise NotImplementedError


class ManualCaptureSource:
    """Queue of typed or pasted payloads, used for manual test input."""

    def __init__(self, items: Iterable[Optional[str]] = ()):
        self._items: deque[Optional[str]] = deque(items)

    def read(self) -> Optional[str]:
        if not self._items:
            return None
        return self._items.popleft()

    def __len__(self) -> int:
        return len(self._items)
