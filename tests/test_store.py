import sqlite3

import pytest

from replicator.store import Store, open_memory


def _table_names(store):
    rows = store.db.execute("SELECT name FROM sqlite_master WHERE type = 'table'").fetchall()
    return {row["name"] for row in rows}


def test_open_memory_creates_tables():
    with open_memory() as store:
        names = _table_names(store)
    assert {"beads", "sessions", "events"} <= names


def test_events_agent_name_comes_from_payload():
    with open_memory() as store:
        store.db.execute(
            "INSERT INTO events (type, payload, project_key) VALUES (?, ?, ?)",
            ("forge_init", '{"agent_name": "worker-1"}', "test"),
        )
        row = store.db.execute("SELECT agent_name, created_at FROM events").fetchone()
    assert row["agent_name"] == "worker-1"
    assert row["created_at"]


def test_events_without_agent_name_is_null():
    with open_memory() as store:
        store.db.execute("INSERT INTO events (type, payload, project_key) VALUES ('x', '{}', 'p')")
        row = store.db.execute("SELECT agent_name FROM events").fetchone()
    assert row["agent_name"] is None


def test_beads_minimal_insert_gets_timestamps():
    with open_memory() as store:
        store.db.execute("INSERT INTO beads (id, title, status) VALUES ('c1', 'Task 1', 'open')")
        row = store.db.execute("SELECT id, title, created_at, updated_at FROM beads").fetchone()
    assert row["id"] == "c1"
    assert row["title"] == "Task 1"
    assert row["created_at"] == row["updated_at"]


def test_close_makes_connection_unusable():
    store = open_memory()
    store.close()
    with pytest.raises(sqlite3.ProgrammingError):
        store.db.execute("SELECT 1")


def test_context_manager_closes():
    with open_memory() as store:
        pass
    with pytest.raises(sqlite3.ProgrammingError):
        store.db.execute("SELECT 1")


def test_file_store_persists_and_reopens(tmp_path):
    path = tmp_path / "nested" / "replicator.db"
    with Store(path) as store:
        store.db.execute("INSERT INTO beads (id, title) VALUES ('c1', 'Keep me')")
    assert path.exists()
    with Store(path) as store:
        titles = [row["title"] for row in store.db.execute("SELECT title FROM beads")]
    assert titles == ["Keep me"]


def test_memory_stores_are_independent():
    with open_memory() as first, open_memory() as second:
        first.db.execute("INSERT INTO beads (id, title) VALUES ('c1', 'one')")
        count = second.db.execute("SELECT COUNT(*) FROM beads").fetchone()[0]
    assert count == 0