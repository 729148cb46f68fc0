"""SQLite-backed storage for cells, sessions and events."""

from __future__ import annotations

import sqlite3
from pathlib import Path

MEMORY = ":memory:"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS beads (
    id           TEXT PRIMARY KEY,
    title        TEXT NOT NULL,
    description  TEXT,
    type         TEXT NOT NULL DEFAULT 'task',
    status       TEXT NOT NULL DEFAULT 'open',
    priority     INTEGER NOT NULL DEFAULT 1,
    parent_id    TEXT,
    project_key  TEXT,
    assigned_to  TEXT,
    labels       TEXT NOT NULL DEFAULT '[]',
    metadata     TEXT NOT NULL DEFAULT '{}',
    created_at   TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now')),
    updated_at   TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now')),
    closed_at    TEXT,
    close_reason TEXT
);
CREATE INDEX IF NOT EXISTS idx_beads_status ON beads(status);
CREATE INDEX IF NOT EXISTS idx_beads_parent ON beads(parent_id);

CREATE TABLE IF NOT EXISTS sessions (
    session_id     TEXT PRIMARY KEY,
    started_at     TEXT NOT NULL,
    ended_at       TEXT,
    active_cell_id TEXT,
    handoff_notes  TEXT
);

CREATE TABLE IF NOT EXISTS events (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    type        TEXT NOT NULL,
    payload     TEXT NOT NULL DEFAULT '{}',
    project_key TEXT NOT NULL DEFAULT '',
    agent_name  TEXT GENERATED ALWAYS AS (json_extract(payload, '$.agent_name')) VIRTUAL,
    created_at  TEXT NOT NULL DEFAULT (datetime('now'))
);
CREATE INDEX IF NOT EXISTS idx_events_type ON events(type);
CREATE INDEX IF NOT EXISTS idx_events_created ON events(created_at);
"""


class Store:
    """An open database holding the beads, sessions and events tables.

    The connection runs in autocommit mode; callers that need a
    transaction issue BEGIN and COMMIT themselves.
    """

    def __init__(self, path=MEMORY):
        self.path = str(path)
        if self.path != MEMORY:
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        self.db = sqlite3.connect(self.path, isolation_level=None)
        self.db.row_factory = sqlite3.Row
        try:
            self.db.executescript(_SCHEMA)
        except sqlite3.Error:
            self.db.close()
            raise

    def close(self):
        """Close the underlying connection."""
        self.db.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


def open_memory():
    """Open a fresh in-memory store with the schema applied."""
    return Store(MEMORY)