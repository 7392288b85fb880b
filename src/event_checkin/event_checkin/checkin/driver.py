from __future__ import annotations

import logging
import threading
import time
from collections import deque
from typing import Callable, Optional

from ..core.constants import DEFAULT_SCAN_INTERVAL_SECONDS, RECENT_ACTIVITY_LIMIT
from ..core.enums import ScannerState
from ..core.exceptions import CaptureError, StorageError
from .service import CheckInService, ScanResult
from .source import CaptureSource

logger = logging.getLogger(__name__)


class ScanLoopDriver:
    """Single-threaded scan loop for one scanner station.

    IDLE -> ACTIVE on enable(), ACTIVE -> IDLE on disable() or a capture failure.
    Each new payload is decoded and written to the ledger before the next sample is
    taken, so at most one check-in is in flight per station. A payload equal to the
    previous one (the same code still in front of the camera) is skipped.
    """

    def __init__(
        self,
        source: CaptureSource,
        checkin: CheckInService,
        *,
        interval_seconds: float = DEFAULT_SCAN_INTERVAL_SECONDS,
        history: int = RECENT_ACTIVITY_LIMIT,
        on_result: Optional[Callable[[ScanResult], None]] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._source = source
        self._checkin = checkin
        self._interval = max(float(interval_seconds), 0.0)
        self._on_result = on_result
        self._sleep = sleep
        self._clock = clock
        self._lock = threading.Lock()
        self._state = ScannerState.IDLE
        self._status = "Scanner idle"
        self._last_raw: Optional[str] = None
        self._recent: deque[ScanResult] = deque(maxlen=history)

    @property
    def state(self) -> ScannerState:
        return self._state

    @property
    def status(self) -> str:
        return self._status

    @property
    def recent(self) -> list[ScanResult]:
        """Latest results, newest first."""
        return list(self._recent)

    def enable(self) -> None:
        with self._lock:
            if self._state == ScannerState.ACTIVE:
                return
            self._state = ScannerState.ACTIVE
            self._last_raw = None
            self._status = "Scanner active"
        logger.info("Scanner enabled")

    def disable(self) -> None:
        self._stop("Scanner idle")

    def step(self) -> Optional[ScanResult]:
        """Take one sample; return the scan result if a new payload was processed."""

        if self._state != ScannerState.ACTIVE:
            return None

        try:
            raw = self._source.read()
        except CaptureError as e:
            logger.error("Capture source failed, stopping scanner: %s", e)
            self._stop(f"Capture failed: {e}")
            return None

        if not raw or raw == self._last_raw:
            return None
        self._last_raw = raw

        try:
            result = self._checkin.process(raw)
        except StorageError:
            logger.exception("Ledger storage failed, stopping scanner")
            self._stop("Storage error, attendance not recorded")
            raise

        self._recent.appendleft(result)
        self._status = result.message
        if self._on_result is not None:
            self._on_result(result)
        return result

    def run(self, *, max_samples: Optional[int] = None) -> None:
        """Sample at most once per interval until disabled (or max_samples is reached)."""

        samples = 0
        while self._state == ScannerState.ACTIVE:
            started = self._clock()
            self.step()
            samples += 1
            if max_samples is not None and samples >= max_samples:
                break
            remaining = self._interval - (self._clock() - started)
            if remaining > 0 and self._state == ScannerState.ACTIVE:
                self._sleep(remaining)

    def _stop(self, status: str) -> None:
        with self._lock:
            was_active = self._state == ScannerState.ACTIVE
            self._state = ScannerState.IDLE
            self._status = status
        if was_active:
            logger.info("Scanner disabled: %s", status)
