"""Named observability queries rendered as tables."""

from __future__ import annotations

from replicator.ui.styles import new_styles
from replicator.ui.table import new_table

AGENT_ACTIVITY_24H = "agent_activity_24h"
CELLS_BY_STATUS = "cells_by_status"
FORGE_COMPLETION_RATE = "forge_completion_rate"
RECENT_EVENTS = "recent_events"


class UnknownPresetError(ValueError):
    """No preset has the given name."""

    def __init__(self, name):
        self.name = name
        super().__init__(
            f'unknown preset: "{name}" (use --list to see available presets)'
        )


def list_presets():
    """Names of all available presets."""
    return [AGENT_ACTIVITY_24H, CELLS_BY_STATUS, FORGE_COMPLETION_RATE, RECENT_EVENTS]


def _print_table(stream, styles, headers, rows, empty_message):
    if not rows:
        print(styles.dim.render(empty_message), file=stream)
        return
    print(new_table(styles, headers, rows).render(), file=stream)


def _agent_activity(store, stream):
    styles = new_styles(stream)
    rows = [
        [row["agent"], str(row["events"])]
        for row in store.db.execute(
            """
            SELECT COALESCE(agent_name, '(unknown)') AS agent, COUNT(*) AS events
            FROM events
            WHERE created_at >= datetime('now', '-24 hours')
            GROUP BY agent_name
            ORDER BY events DESC
            LIMIT 20"""
        )
    ]
    _print_table(
        stream, styles, ["AGENT", "EVENTS (24h)"], rows, "(no activity in last 24 hours)"
    )


def _cells_by_status(store, stream):
    styles = new_styles(stream)
    rows = [
        [row["status"], row["type"], str(row["count"])]
        for row in store.db.execute(
            """
            SELECT status, type, COUNT(*) AS count
            FROM beads
            GROUP BY status, type
            ORDER BY status, type"""
        )
    ]
    _print_table(stream, styles, ["STATUS", "TYPE", "COUNT"], rows, "(no cells)")


def _forge_completion_rate(store, stream):
    styles = new_styles(stream)
    total = store.db.execute(
        "SELECT COUNT(*) FROM events WHERE type LIKE 'forge_%'"
    ).fetchone()[0]
    completed = store.db.execute(
        "SELECT COUNT(*) FROM events WHERE type = 'forge_complete'"
    ).fetchone()[0]

    print(styles.bold.render("Forge Completion Rate:"), file=stream)
    print(f"  Total forge events:     {total}", file=stream)
    print(f"  Completed:              {completed}", file=stream)
    if total > 0:
        rate = completed / total * 100
        print(f"  Completion rate:        {rate:.1f}%", file=stream)
    else:
        print(
            styles.dim.render("  Completion rate:        N/A (no forge events)"),
            file=stream,
        )


def _recent_events(store, stream):
    styles = new_styles(stream)
    rows = [
        [str(row["id"]), row["type"], row["project_key"], row["created_at"]]
        for row in store.db.execute(
            """
            SELECT id, type, project_key, created_at
            FROM events
            ORDER BY created_at DESC
            LIMIT 20"""
        )
    ]
    _print_table(stream, styles, ["ID", "TYPE", "PROJECT", "CREATED"], rows, "(no events)")


_PRESETS = {
    AGENT_ACTIVITY_24H: _agent_activity,
    CELLS_BY_STATUS: _cells_by_status,
    FORGE_COMPLETION_RATE: _forge_completion_rate,
    RECENT_EVENTS: _recent_events,
}


def run(store, preset_name, stream):
    """Run the named preset and write its report to stream."""
    try:
        preset = _PRESETS[preset_name]
    except KeyError:
        raise UnknownPresetError(preset_name) from None
    preset(store, stream)