from __future__ import annotations

import json

from event_checkin.directory.memory import load_event_directory, load_member_directory
from event_checkin.directory.model import Event, Member


def test_load_event_directory_keeps_file_order(tmp_path):
    path = tmp_path / "events.json"
    path.write_text(
        json.dumps(
            [
                {"id": 7, "title": "Seminar", "date": "2025-09-01", "location": "Hall", "badgeIcon": "📚"},
                {"id": "2", "title": "Kickoff"},
            ]
        ),
        encoding="utf-8",
    )

    directory = load_event_directory(path)

    assert [e.id for e in directory.list_all()] == [7, 2]
    assert directory.exists(2) and not directory.exists(3)
    assert directory.get(7) == Event(id=7, title="Seminar", date="2025-09-01", location="Hall", badge_icon="📚")
    assert directory.get(2).badge_icon is None


def test_load_member_directory_accepts_wrapped_or_bare_list(tmp_path):
    wrapped = tmp_path / "members.json"
    wrapped.write_text(json.dumps({"totalMembers": 1, "members": [{"id": "M-1", "name": "Ana", "chapter": "North"}]}), encoding="utf-8")
    bare = tmp_path / "bare.json"
    bare.write_text(json.dumps([{"id": "M-2"}]), encoding="utf-8")

    assert load_member_directory(wrapped).resolve("M-1") == Member(id="M-1", display_name="Ana", chapter="North")
    assert load_member_directory(bare).resolve("M-2") == Member(id="M-2", display_name="M-2", chapter="")
    assert load_member_directory(bare).resolve("missing") is None
