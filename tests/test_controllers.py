from __future__ import annotations

import importlib

import pytest

from event_checkin.badges.model import Badge
from event_checkin.checkin.payload import encode_payload
from event_checkin.container import assemble_container
from event_checkin.core.exceptions import StorageError
from event_checkin.ledger.memory_store import InMemoryAttendanceStore
from event_checkin.ledger.retry import RetryPolicy
from event_checkin.main import create_app


@pytest.fixture
def settings():
    return importlib.import_module("config.testing")


@pytest.fixture
def container(events, members):
    return assemble_container(
        store=InMemoryAttendanceStore(),
        events=events,
        members=members,
        catalog=[Badge(id="welcome", title="Welcome", date="", icon="👋", details="joined")],
    )


@pytest.fixture
def client(settings, container):
    app = create_app(settings=settings, container=container)
    return app.test_client()


def test_scan_grants_then_flags_duplicate(client):
    first = client.post("/api/scan", json={"code": encode_payload("A", 1)})
    second = client.post("/api/scan", json={"code": encode_payload("A", 1)})

    assert first.status_code == 200
    assert first.get_json()["status"] == "GRANTED"
    assert second.status_code == 200
    assert second.get_json()["duplicate"] is True


def test_scan_reports_decode_and_rejection_errors(client):
    empty = client.post("/api/scan", json={})
    garbage = client.post("/api/scan", json={"code": "xyz"})
    unknown = client.post("/api/scan", json={"code": encode_payload("A", 999)})

    assert empty.status_code == 400
    assert garbage.get_json()["reason"] == "MALFORMED_PAYLOAD"
    assert unknown.status_code == 400
    assert unknown.get_json()["reason"] == "UNKNOWN_EVENT"


def test_attendees_and_presence(client):
    client.post("/api/scan", json={"code": encode_payload("B", 2)})

    body = client.get("/api/events/2/attendees").get_json()
    assert body == {"eventId": 2, "count": 1, "attendees": ["B"]}
    assert client.get("/api/events/2/attendees/B").get_json()["present"] is True
    assert client.get("/api/events/404/attendees").status_code == 404


def test_census_and_engagement(client):
    for m, e in [("A", 1), ("B", 1), ("A", 2)]:
        client.post("/api/scan", json={"code": encode_payload(m, e)})

    assert client.get("/api/census").get_json() == {"total_members": 3, "total_events": 3, "total_attendance": 3}
    engagement = client.get("/api/engagement?chapter=North").get_json()
    assert engagement["rows"] == [{"id": "A", "name": "Andrea", "chapter": "North", "events": 2}]


def test_attendance_csv_download(client):
    client.post("/api/scan", json={"code": encode_payload("A", 1)})

    resp = client.get("/reports/attendance/1.csv")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert resp.data.decode("utf-8-sig") == "event,date,memberId,name,chapter\nGeneral Assembly,2025-08-23,A,Andrea,North\n"


def test_empty_export_is_not_offered(client):
    assert client.get("/reports/attendance/2.csv").status_code == 404
    assert client.get("/reports/engagement.csv").status_code == 404


def test_member_badges(client):
    client.post("/api/scan", json={"code": encode_payload("A", 3)})

    badges = client.get("/api/members/A/badges").get_json()["badges"]

    assert [b["id"] for b in badges] == ["event-3", "welcome"]


def test_storage_failure_returns_503(settings, events, members):
    class DownStore(InMemoryAttendanceStore):
        def record_if_absent(self, event_id, member_id):
            raise StorageError("disk full")

    container = assemble_container(store=DownStore(), events=events, members=members, retry=RetryPolicy(attempts=1))
    client = create_app(settings=settings, container=container).test_client()

    resp = client.post("/api/scan", json={"code": encode_payload("A", 1)})

    assert resp.status_code == 503
    assert resp.get_json()["success"] is False
