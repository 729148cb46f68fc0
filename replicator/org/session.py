"""Work sessions with handoff notes carried from one session to the next."""

from __future__ import annotations

import secrets

from replicator.org.cells import _now


class NoActiveSessionError(LookupError):
    """There is no un-ended session to end."""

    def __init__(self):
        super().__init__("no active session to end")


def _generate_session_id():
    return "sess-" + secrets.token_hex(8)


def session_start(store, active_cell_id=""):
    """Open a new session and return the last ended session's handoff notes."""
    row = store.db.execute(
        "SELECT handoff_notes FROM sessions WHERE ended_at IS NOT NULL "
        "ORDER BY rowid DESC LIMIT 1"
    ).fetchone()
    previous = (row["handoff_notes"] or "") if row is not None else ""

    store.db.execute(
        "INSERT INTO sessions (session_id, started_at, active_cell_id) VALUES (?, ?, ?)",
        (_generate_session_id(), _now(), active_cell_id or None),
    )
    return previous


def session_end(store, handoff_notes=""):
    """End the most recent un-ended session, saving handoff notes for the next one."""
    cursor = store.db.execute(
        """
        UPDATE sessions SET ended_at = ?, handoff_notes = ?
        WHERE session_id = (
            SELECT session_id FROM sessions WHERE ended_at IS NULL
            ORDER BY started_at DESC, rowid DESC LIMIT 1
        )""",
        (_now(), handoff_notes),
    )
    if cursor.rowcount == 0:
        raise NoActiveSessionError()