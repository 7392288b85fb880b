from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from .badges.catalog import load_badge_catalog
from .badges.model import Badge
from .badges.service import BadgeService
from .checkin.service import CheckInService
from .core.constants import DEFAULT_RETRY_ATTEMPTS
from .core.enums import StoreBackend
from .database.connection import DatabaseConnection, DBConfig
from .directory.memory import InMemoryEventDirectory, InMemoryMemberDirectory, load_event_directory, load_member_directory
from .directory.repository import EventDirectory, MemberDirectory
from .ledger.json_store import JsonFileAttendanceStore
from .ledger.memory_store import InMemoryAttendanceStore
from .ledger.mysql_store import MySQLAttendanceStore
from .ledger.retry import RetryPolicy
from .ledger.service import AttendanceLedger
from .ledger.store import AttendanceStore
from .reports.service import ReportService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    store: AttendanceStore
    events: EventDirectory
    members: MemberDirectory

    ledger: AttendanceLedger
    checkin_service: CheckInService
    report_service: ReportService
    badge_service: BadgeService


def assemble_container(
    *,
    store: AttendanceStore,
    events: EventDirectory,
    members: MemberDirectory,
    catalog: Iterable[Badge] = (),
    default_event_id: Optional[int] = None,
    retry: Optional[RetryPolicy] = None,
) -> Container:
    ledger = AttendanceLedger(store, events, retry=retry)
    return Container(
        store=store,
        events=events,
        members=members,
        ledger=ledger,
        checkin_service=CheckInService(ledger, default_event_id=default_event_id),
        report_service=ReportService(ledger, events, members),
        badge_service=BadgeService(ledger, events, catalog),
    )


def build_store(settings: Any) -> AttendanceStore:
    backend = StoreBackend(str(getattr(settings, "STORE_BACKEND", StoreBackend.MEMORY.value)).lower())

    if backend == StoreBackend.JSON:
        return JsonFileAttendanceStore(getattr(settings, "LEDGER_PATH"))

    if backend == StoreBackend.MYSQL:
        conn = DatabaseConnection.get_instance(DBConfig.from_mapping(getattr(settings, "DB_CONFIG")))
        return MySQLAttendanceStore(conn)

    return InMemoryAttendanceStore()


def build_container(*, settings: Any) -> Container:
    """Wire stores, directories and services from a settings module."""

    events_path = getattr(settings, "EVENTS_PATH", None)
    members_path = getattr(settings, "MEMBERS_PATH", None)
    catalog_path = getattr(settings, "BADGE_CATALOG_PATH", None)

    events = load_event_directory(events_path) if events_path else InMemoryEventDirectory()
    members = load_member_directory(members_path) if members_path else InMemoryMemberDirectory()
    catalog = load_badge_catalog(catalog_path) if catalog_path else []

    default_event_id = getattr(settings, "DEFAULT_EVENT_ID", None)
    retry = RetryPolicy(attempts=int(getattr(settings, "STORAGE_RETRY_ATTEMPTS", DEFAULT_RETRY_ATTEMPTS)))

    store = build_store(settings)
    logger.info(
        "Container ready: store=%s events=%d members=%d catalog=%d",
        type(store).__name__,
        len(events.list_all()),
        len(members.list_all()),
        len(catalog),
    )
    return assemble_container(
        store=store,
        events=events,
        members=members,
        catalog=catalog,
        default_event_id=int(default_event_id) if default_event_id is not None else None,
        retry=retry,
    )
