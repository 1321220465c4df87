from __future__ import annotations

import sqlite3

from janus_orchestrator.storage.events import EventLog


def test_record_persists_json_payload(tmp_path) -> None:
    db_path = tmp_path / "nested" / "janus.db"
    with EventLog(db_path) as events:
        events.record("janus", "merged", {"task": "Add logging", "steps": [1, 2]})

    connection = sqlite3.connect(db_path)
    row = connection.execute("SELECT id, created_at, source, type, data FROM events").fetchone()
    connection.close()

    assert row[0] == 1
    assert row[1]
    assert row[2:4] == ("janus", "merged")
    assert row[4] == '{"task": "Add logging", "steps": [1, 2]}'


def test_reopening_keeps_existing_rows(tmp_path) -> None:
    db_path = tmp_path / "janus.db"
    with EventLog(db_path) as events:
        events.record("codex-flow", "reply", {"reply": "first"})
    with EventLog(db_path) as events:
        events.record("codex-flow", "reply", {"reply": "second"})
        recent = events.recent()

    assert [event.data["reply"] for event in recent] == ["second", "first"]
    assert recent[0].id > recent[1].id


def test_recent_respects_limit(tmp_path) -> None:
    with EventLog(tmp_path / "janus.db") as events:
        for index in range(5):
            events.record("janus", "tick", index)
        recent = events.recent(2)

    assert [event.data for event in recent] == [4, 3]
