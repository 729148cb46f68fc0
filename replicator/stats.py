"""A summary report of events and cells in the database."""

from __future__ import annotations

from replicator.ui.styles import new_styles


def _event_counts(store):
    return [
        (row["type"], row["count"])
        for row in store.db.execute(
            "SELECT type, COUNT(*) AS count FROM events GROUP BY type ORDER BY count DESC"
        )
    ]


def _recent_event_count(store):
    return store.db.execute(
        "SELECT COUNT(*) FROM events WHERE created_at >= datetime('now', '-24 hours')"
    ).fetchone()[0]


def _cell_counts(store):
    return [
        (row["status"], row["count"])
        for row in store.db.execute(
            "SELECT status, COUNT(*) AS count FROM beads GROUP BY status ORDER BY count DESC"
        )
    ]


def run(store, stream):
    """Write the statistics report to stream."""
    styles = new_styles(stream)
    event_counts = _event_counts(store)
    recent = _recent_event_count(store)
    cell_counts = _cell_counts(store)
    total_cells = sum(count for _, count in cell_counts)

    print(styles.title.render("📊 Replicator Stats"), file=stream)
    print(file=stream)

    print(styles.bold.render("Events by Type:"), file=stream)
    if not event_counts:
        print(styles.dim.render("  (no events)"), file=stream)
    for event_type, count in event_counts:
        print(f"  {event_type:<30} {count}", file=stream)
    print(file=stream)

    print(f"{styles.bold.render('Recent Activity (24h):')} {recent} events", file=stream)
    print(file=stream)

    print(styles.bold.render(f"Cells ({total_cells} total):"), file=stream)
    if not cell_counts:
        print(styles.dim.render("  (no cells)"), file=stream)
    for status, count in cell_counts:
        print(f"  {status:<15} {count}", file=stream)