"""Run a scanner station from the terminal.

Each line typed (or piped) on stdin is treated as the decoded text of one QR code.
Example:

    echo '{"memberId": "M-0004", "activityId": 3}' | python scripts/scan_station.py
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

REPO_ROOT = Path(__file__).resolve().parents[1]
for p in (REPO_ROOT, REPO_ROOT / "src" / "event_checkin"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from event_checkin.checkin.driver import ScanLoopDriver
from event_checkin.checkin.service import ScanResult
from event_checkin.container import build_container
from event_checkin.core.exceptions import CaptureError
from event_checkin.main import configure_logging, load_settings


class StdinCaptureSource:
    def read(self) -> Optional[str]:
        line = sys.stdin.readline()
        if line == "":
            raise CaptureError("stdin closed")
        return line.strip() or None


def print_result(result: ScanResult) -> None:
    print(f"[{result.scanned_at:%H:%M:%S}] {result.message}")


def main() -> None:
    settings = load_settings()
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    container = build_container(settings=settings)

    driver = ScanLoopDriver(
        StdinCaptureSource(),
        container.checkin_service,
        interval_seconds=float(getattr(settings, "SCAN_INTERVAL_SECONDS", 0.2)),
        on_result=print_result,
    )
    driver.enable()
    try:
        driver.run()
    except KeyboardInterrupt:
        driver.disable()
    print(f"Scanner stopped: {driver.status}")


if __name__ == "__main__":
    main()
