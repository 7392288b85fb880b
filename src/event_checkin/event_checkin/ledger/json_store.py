from __future__ import annotations

import json
import logging
import os
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Mapping, Sequence

from filelock import FileLock, Timeout

from ..core.constants import DEFAULT_FILE_LOCK_TIMEOUT
from ..core.exceptions import StorageError, TransientStorageError
from .memory_store import InMemoryAttendanceStore

logger = logging.getLogger(__name__)


def parse_ledger_json(text: str) -> dict[int, list[str]]:
    """Parse the persisted layout: {"<event_id>": ["<member_id>", ...], ...}."""

    try:
        raw = json.loads(text) if text.strip() else {}
    except json.JSONDecodeError as e:
        raise StorageError(f"Ledger snapshot is not valid JSON: {e}") from e
    if not isinstance(raw, dict):
        raise StorageError("Ledger snapshot must be a JSON object")

    out: dict[int, list[str]] = {}
    for key, member_ids in raw.items():
        try:
            event_id = int(key)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Invalid event id in ledger snapshot: {key!r}") from e
        if not isinstance(member_ids, list):
            raise StorageError(f"Attendees for event {key} must be a JSON array")
        out[event_id] = [str(m) for m in member_ids]
    return out


def dump_ledger_json(snapshot: Mapping[int, Sequence[str]]) -> str:
    ordered = {str(e): list(snapshot[e]) for e in sorted(snapshot)}
    return json.dumps(ordered, ensure_ascii=False, indent=2)


class JsonFileAttendanceStore:
    """Ledger persisted as a JSON file.

    Several stations may share the file. Inserts hold `<path>.lock` (a file lock, so
    it excludes other processes too) across read, insert and write. Every load is a
    union with what is already in memory, never an overwrite, and reads load first so
    other stations' check-ins are visible. A failed write undoes only the pair that
    was being inserted; previously granted records stay in memory.
    """

    def __init__(
        self,
        path: str | Path,
        *,
        initial: Mapping[int, Sequence[str]] | None = None,
        lock_timeout: float = DEFAULT_FILE_LOCK_TIMEOUT,
    ):
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._file_lock = FileLock(str(self._path) + ".lock", timeout=lock_timeout)
        self._memory = InMemoryAttendanceStore(initial)
        self.reload()

    def get(self, event_id: int) -> list[str]:
        self.reload()
        return self._memory.get(event_id)

    def snapshot(self) -> dict[int, list[str]]:
        self.reload()
        return self._memory.snapshot()

    def reload(self) -> None:
        with self._lock:
            self._load_unlocked()

    def record_if_absent(self, event_id: int, member_id: str) -> bool:
        with self._lock, self._locked_file():
            self._load_unlocked()
            if not self._memory.record_if_absent(event_id, member_id):
                return False
            try:
                self._write_unlocked()
            except OSError as e:
                self._memory.discard(event_id, member_id)
                logger.error("Failed to persist check-in event=%s member=%s: %s", event_id, member_id, e)
                raise StorageError(f"Could not write ledger file {self._path}: {e}") from e
            return True

    @contextmanager
    def _locked_file(self) -> Iterator[None]:
        try:
            self._file_lock.acquire()
        except Timeout as e:
            raise TransientStorageError(f"Ledger file {self._path} is locked by another station") from e
        try:
            yield
        finally:
            self._file_lock.release()

    def _load_unlocked(self) -> None:
        if not self._path.exists():
            return
        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Could not read ledger file {self._path}: {e}") from e
        self._memory.merge(parse_ledger_json(text))

    def _write_unlocked(self) -> None:
        tmp = self._path.with_name(self._path.name + ".tmp")
        tmp.write_text(dump_ledger_json(self._memory.snapshot()), encoding="utf-8")
        os.replace(tmp, self._path)
