import io

import pytest

from replicator.query.presets import (
    AGENT_ACTIVITY_24H,
    CELLS_BY_STATUS,
    FORGE_COMPLETION_RATE,
    RECENT_EVENTS,
    UnknownPresetError,
    list_presets,
    run,
)
from replicator.store import open_memory


@pytest.fixture
def store():
    with open_memory() as s:
        yield s


def output_of(store, preset):
    buf = io.StringIO()
    run(store, preset, buf)
    return buf.getvalue()


def add_event(store, event_type, payload="{}", project_key="test"):
    store.db.execute(
        "INSERT INTO events (type, payload, project_key) VALUES (?, ?, ?)",
        (event_type, payload, project_key),
    )


def test_list_presets():
    presets = list_presets()
    assert len(presets) == 4
    assert set(presets) == {
        AGENT_ACTIVITY_24H,
        CELLS_BY_STATUS,
        FORGE_COMPLETION_RATE,
        RECENT_EVENTS,
    }


def test_run_unknown_preset(store):
    with pytest.raises(UnknownPresetError, match="unknown preset"):
        run(store, "nonexistent", io.StringIO())


def test_agent_activity_empty(store):
    assert "no activity" in output_of(store, AGENT_ACTIVITY_24H)


def test_agent_activity_with_data(store):
    add_event(store, "forge_init", '{"agent_name": "worker-1"}')
    add_event(store, "forge_init", '{"agent_name": "worker-1"}')
    add_event(store, "forge_init", '{"agent_name": "worker-2"}')
    output = output_of(store, AGENT_ACTIVITY_24H)
    assert "worker-1" in output
    assert "worker-2" in output
    assert output.index("worker-1") < output.index("worker-2")


def test_cells_by_status_empty(store):
    assert "no cells" in output_of(store, CELLS_BY_STATUS)


def test_cells_by_status_with_data(store):
    for cell_id, title, status, cell_type in [
        ("c1", "Task 1", "open", "task"),
        ("c2", "Task 2", "closed", "task"),
        ("c3", "Bug 1", "open", "bug"),
    ]:
        store.db.execute(
            "INSERT INTO beads (id, title, status, type) VALUES (?, ?, ?, ?)",
            (cell_id, title, status, cell_type),
        )
    output = output_of(store, CELLS_BY_STATUS)
    assert "open" in output
    assert "closed" in output
    assert "bug" in output


def test_forge_completion_rate_empty(store):
    output = output_of(store, FORGE_COMPLETION_RATE)
    assert "Forge Completion Rate" in output
    assert "N/A" in output


def test_forge_completion_rate_with_data(store):
    add_event(store, "forge_init")
    add_event(store, "forge_progress")
    add_event(store, "forge_complete")
    output = output_of(store, FORGE_COMPLETION_RATE)
    assert "Total forge events:     3" in output
    assert "Completed:              1" in output
    assert "Completion rate:        33.3%" in output


def test_recent_events_empty(store):
    assert "no events" in output_of(store, RECENT_EVENTS)


def test_recent_events_with_data(store):
    add_event(store, "test_event", project_key="my-project")
    output = output_of(store, RECENT_EVENTS)
    assert "test_event" in output
    assert "my-project" in output


@pytest.mark.parametrize(
    "preset, expected",
    [
        (AGENT_ACTIVITY_24H, "(no activity in last 24 hours)"),
        (CELLS_BY_STATUS, "(no cells)"),
        (FORGE_COMPLETION_RATE, "N/A (no forge events)"),
        (RECENT_EVENTS, "(no events)"),
    ],
)
def test_all_presets_on_empty_database(store, preset, expected):
    assert expected in output_of(store, preset)