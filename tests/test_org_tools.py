import json
import subprocess

import pytest

from replicator.org.cells import CellNotFoundError
from replicator.org.session import NoActiveSessionError
from replicator.registry import Registry
from replicator.store import open_memory
from replicator.tools.org_tools import register


@pytest.fixture
def store():
    s = open_memory()
    yield s
    s.close()


@pytest.fixture
def registry(store):
    reg = Registry()
    register(reg, store)
    return reg


def call(registry, name, args=None):
    return registry.get(name).execute(args)


def test_registration_order(registry):
    assert [tool.name for tool in registry.list()] == [
        "org_cells",
        "org_create",
        "org_close",
        "org_update",
        "org_create_epic",
        "org_query",
        "org_start",
        "org_ready",
        "org_sync",
        "org_session_start",
        "org_session_end",
    ]


def test_empty_cells_is_empty_array(registry):
    assert json.loads(call(registry, "org_cells")) == []
    assert json.loads(call(registry, "org_query", {})) == []


def test_ready_with_no_cells(registry):
    assert json.loads(call(registry, "org_ready")) == {"message": "no ready cells"}


def test_create_defaults_and_shape(registry):
    cell = json.loads(call(registry, "org_create", {"title": "Fix the bug"}))
    assert cell["title"] == "Fix the bug"
    assert cell["type"] == "task"
    assert cell["priority"] == 1
    assert cell["status"] == "open"
    assert cell["parent_id"] is None
    assert cell["description"] == ""
    assert cell["id"].startswith("cell-")


def test_create_then_query_by_id(registry):
    created = json.loads(call(registry, "org_create", {"title": "Bug", "type": "bug"}))
    found = json.loads(call(registry, "org_cells", {"id": created["id"]}))
    assert [c["id"] for c in found] == [created["id"]]
    assert found[0]["type"] == "bug"


def test_close_then_filter_by_status(registry):
    created = json.loads(call(registry, "org_create", {"title": "Close me"}))
    result = call(registry, "org_close", {"id": created["id"], "reason": "done"})
    assert json.loads(result) == {"status": "closed"}
    closed = json.loads(call(registry, "org_query", {"status": "closed"}))
    assert closed[0]["close_reason"] == "done"


def test_close_missing_cell_raises(registry):
    with pytest.raises(CellNotFoundError):
        call(registry, "org_close", {"id": "nonexistent", "reason": "reason"})


def test_update_changes_fields(registry):
    created = json.loads(call(registry, "org_create", {"title": "Update me"}))
    result = call(
        registry,
        "org_update",
        {"id": created["id"], "status": "in_progress", "description": "Working on it"},
    )
    assert json.loads(result) == {"status": "updated"}
    cell = json.loads(call(registry, "org_cells", {"id": created["id"]}))[0]
    assert cell["status"] == "in_progress"
    assert cell["description"] == "Working on it"
    assert cell["priority"] == 1


def test_update_priority_only(registry):
    created = json.loads(call(registry, "org_create", {"title": "Prio"}))
    call(registry, "org_update", {"id": created["id"], "priority": 3})
    cell = json.loads(call(registry, "org_cells", {"id": created["id"]}))[0]
    assert cell["priority"] == 3
    assert cell["status"] == "open"


def test_start_sets_in_progress(registry):
    created = json.loads(call(registry, "org_create", {"title": "Start me"}))
    assert json.loads(call(registry, "org_start", {"id": created["id"]})) == {
        "status": "in_progress"
    }
    cell = json.loads(call(registry, "org_cells", {"id": created["id"]}))[0]
    assert cell["status"] == "in_progress"


def test_start_missing_cell_raises(registry):
    with pytest.raises(CellNotFoundError):
        call(registry, "org_start", {"id": "nonexistent"})


def test_create_epic_and_ready(registry):
    result = json.loads(
        call(
            registry,
            "org_create_epic",
            {
                "epic_title": "Build the thing",
                "subtasks": [
                    {"title": "Step 1", "priority": 2},
                    {"title": "Step 2", "files": ["foo.go", "bar.go"]},
                ],
            },
        )
    )
    epic = result["epic"]
    assert epic["type"] == "epic"
    assert [s["title"] for s in result["subtasks"]] == ["Step 1", "Step 2"]
    assert all(s["parent_id"] == epic["id"] for s in result["subtasks"])
    # Subtasks are blocked while the epic is open; the epic itself is never ready.
    assert json.loads(call(registry, "org_ready")) == {"message": "no ready cells"}
    call(registry, "org_close", {"id": epic["id"], "reason": "done"})
    ready = json.loads(call(registry, "org_ready"))
    assert ready["title"] == "Step 1"


def test_query_ready_filter(registry):
    call(registry, "org_create_epic", {"epic_title": "E", "subtasks": [{"title": "Sub"}]})
    standalone = json.loads(call(registry, "org_create", {"title": "Standalone"}))
    ready = json.loads(call(registry, "org_cells", {"ready": True}))
    assert [c["id"] for c in ready] == [standalone["id"]]


def test_session_handoff(registry):
    first = json.loads(call(registry, "org_session_start"))
    assert first == {"status": "started", "handoff_notes": ""}
    assert json.loads(
        call(registry, "org_session_end", {"handoff_notes": "Continue with task 5"})
    ) == {"status": "ended"}
    second = json.loads(call(registry, "org_session_start", {}))
    assert second["handoff_notes"] == "Continue with task 5"


def test_session_end_without_session(registry):
    with pytest.raises(NoActiveSessionError):
        call(registry, "org_session_end", {"handoff_notes": "notes"})


def test_non_mapping_arguments_rejected(registry):
    with pytest.raises(TypeError):
        call(registry, "org_create", ["not", "an", "object"])


def test_sync_writes_and_commits(registry, tmp_path):
    for args in (
        ["git", "init"],
        ["git", "config", "user.email", "test@example.com"],
        ["git", "config", "user.name", "Test"],
        ["git", "commit", "--allow-empty", "-m", "init"],
    ):
        subprocess.run(args, cwd=tmp_path, check=True, capture_output=True)
    call(registry, "org_create", {"title": "Task A"})
    result = call(registry, "org_sync", {"project_path": str(tmp_path)})
    assert json.loads(result) == {"status": "synced"}
    data = json.loads((tmp_path / ".uf" / "replicator" / "cells.json").read_text())
    assert [c["title"] for c in data] == ["Task A"]
    log = subprocess.run(
        ["git", "log", "--oneline", "-1"],
        cwd=tmp_path,
        capture_output=True,
        text=True,
        check=True,
    )
    assert "hive sync" in log.stdout