"""Agent tools for working with cells and sessions."""

from __future__ import annotations

import json
from typing import Any, Mapping

from replicator.org.cells import (
    CellQuery,
    CreateCellInput,
    close_cell,
    create_cell,
    query_cells,
    ready_cell,
    start_cell,
    update_cell,
)
from replicator.org.epic import CreateEpicInput, SubtaskInput, create_epic
from replicator.org.session import session_end, session_start
from replicator.org.sync import sync
from replicator.registry import Tool

STATUSES = ["open", "in_progress", "blocked", "closed"]
CELL_TYPES = ["task", "bug", "feature", "epic", "chore"]


def _arguments(args):
    if args is None:
        return {}
    if not isinstance(args, Mapping):
        raise TypeError("tool arguments must be a JSON object")
    return args


def _text(args, key):
    value = args.get(key)
    return "" if value is None else str(value)


def _optional_int(value):
    return None if value is None else int(value)


def _dump(value):
    return json.dumps(value, indent=2, ensure_ascii=False)


def _cell_query(args):
    return CellQuery(
        id=_text(args, "id"),
        status=_text(args, "status"),
        type=_text(args, "type"),
        ready=bool(args.get("ready", False)),
        limit=int(args.get("limit") or 0),
    )


def _query_tool(store, name, description, schema):
    def execute(args: Mapping[str, Any] | None = None) -> str:
        cells = query_cells(store, _cell_query(_arguments(args)))
        return _dump([cell.to_dict() for cell in cells])

    return Tool(name=name, description=description, input_schema=schema, execute=execute)


def _org_cells(store):
    schema = {
        "type": "object",
        "properties": {
            "id": {"type": "string", "description": "Partial cell ID to match"},
            "status": {"type": "string", "enum": STATUSES},
            "type": {"type": "string", "enum": CELL_TYPES},
            "ready": {"type": "boolean", "description": "If true, return only unblocked cells"},
            "limit": {"type": "number", "description": "Max results (default 50)"},
        },
    }
    return _query_tool(
        store,
        "org_cells",
        "Query cells from the org database with flexible filtering. Use to list "
        "work items, find by status/type, or look up a cell by partial ID.",
        schema,
    )


def _org_query(store):
    schema = {
        "type": "object",
        "properties": {
            "id": {"type": "string"},
            "status": {"type": "string", "enum": STATUSES},
            "type": {"type": "string", "enum": CELL_TYPES},
            "ready": {"type": "boolean"},
            "limit": {"type": "number"},
        },
    }
    return _query_tool(
        store, "org_query", "Query cells with filters (alias for org_cells).", schema
    )


def _org_create(store):
    def execute(args: Mapping[str, Any] | None = None) -> str:
        args = _arguments(args)
        cell = create_cell(
            store,
            CreateCellInput(
                title=_text(args, "title"),
                description=_text(args, "description"),
                type=_text(args, "type"),
                priority=int(args.get("priority") or 0),
                parent_id=args.get("parent_id") or None,
            ),
        )
        return _dump(cell.to_dict())

    return Tool(
        name="org_create",
        description="Create a new cell (work item) in the org.",
        input_schema={
            "type": "object",
            "required": ["title"],
            "properties": {
                "title": {"type": "string"},
                "description": {"type": "string"},
                "type": {"type": "string", "enum": CELL_TYPES},
                "priority": {"type": "number", "minimum": 0, "maximum": 3},
                "parent_id": {"type": "string"},
            },
        },
        execute=execute,
    )


def _org_close(store):
    def execute(args: Mapping[str, Any] | None = None) -> str:
        args = _arguments(args)
        close_cell(store, _text(args, "id"), _text(args, "reason"))
        return '{"status": "closed"}'

    return Tool(
        name="org_close",
        description="Close a cell with a reason.",
        input_schema={
            "type": "object",
            "required": ["id", "reason"],
            "properties": {"id": {"type": "string"}, "reason": {"type": "string"}},
        },
        execute=execute,
    )


def _org_update(store):
    def execute(args: Mapping[str, Any] | None = None) -> str:
        args = _arguments(args)
        update_cell(
            store,
            _text(args, "id"),
            status=args.get("status"),
            description=args.get("description"),
            priority=_optional_int(args.get("priority")),
        )
        return '{"status": "updated"}'

    return Tool(
        name="org_update",
        description="Update a cell's status, description, or priority.",
        input_schema={
            "type": "object",
            "required": ["id"],
            "properties": {
                "id": {"type": "string"},
                "status": {"type": "string", "enum": STATUSES},
                "description": {"type": "string"},
                "priority": {"type": "number", "minimum": 0, "maximum": 3},
            },
        },
        execute=execute,
    )


def _org_create_epic(store):
    def execute(args: Mapping[str, Any] | None = None) -> str:
        args = _arguments(args)
        subtasks = [
            SubtaskInput(
                title=_text(item, "title"),
                priority=int(item.get("priority") or 0),
                files=list(item.get("files") or []),
            )
            for item in args.get("subtasks") or []
        ]
        epic, created = create_epic(
            store,
            CreateEpicInput(
                epic_title=_text(args, "epic_title"),
                epic_description=_text(args, "epic_description"),
                subtasks=subtasks,
            ),
        )
        return _dump(
            {"epic": epic.to_dict(), "subtasks": [cell.to_dict() for cell in created]}
        )

    return Tool(
        name="org_create_epic",
        description="Create an epic with subtasks in one atomic operation.",
        input_schema={
            "type": "object",
            "required": ["epic_title", "subtasks"],
            "properties": {
                "epic_title": {"type": "string"},
                "epic_description": {"type": "string"},
                "subtasks": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "required": ["title"],
                        "properties": {
                            "title": {"type": "string"},
                            "priority": {"type": "number", "minimum": 0, "maximum": 3},
                            "files": {"type": "array", "items": {"type": "string"}},
                        },
                    },
                },
            },
        },
        execute=execute,
    )


def _org_start(store):
    def execute(args: Mapping[str, Any] | None = None) -> str:
        start_cell(store, _text(_arguments(args), "id"))
        return '{"status": "in_progress"}'

    return Tool(
        name="org_start",
        description="Mark a cell as in-progress.",
        input_schema={
            "type": "object",
            "required": ["id"],
            "properties": {"id": {"type": "string"}},
        },
        execute=execute,
    )


def _org_ready(store):
    def execute(args: Mapping[str, Any] | None = None) -> str:
        cell = ready_cell(store)
        if cell is None:
            return '{"message": "no ready cells"}'
        return _dump(cell.to_dict())

    return Tool(
        name="org_ready",
        description="Get the next ready cell (unblocked, highest priority).",
        input_schema={"type": "object", "properties": {}},
        execute=execute,
    )


def _org_sync(store):
    def execute(args: Mapping[str, Any] | None = None) -> str:
        project_path = _text(_arguments(args), "project_path") or "."
        sync(store, project_path)
        return '{"status": "synced"}'

    return Tool(
        name="org_sync",
        description="Sync cells to git and push.",
        input_schema={
            "type": "object",
            "properties": {
                "auto_pull": {"type": "boolean"},
                "project_path": {
                    "type": "string",
                    "description": 'Project directory to sync (default: ".")',
                },
            },
        },
        execute=execute,
    )


def _org_session_start(store):
    def execute(args: Mapping[str, Any] | None = None) -> str:
        notes = session_start(store, _text(_arguments(args), "active_cell_id"))
        return json.dumps(
            {"status": "started", "handoff_notes": notes},
            indent=2,
            sort_keys=True,
            ensure_ascii=False,
        )

    return Tool(
        name="org_session_start",
        description="Start a new work session. Returns previous session's handoff "
        "notes if available.",
        input_schema={
            "type": "object",
            "properties": {"active_cell_id": {"type": "string"}},
        },
        execute=execute,
    )


def _org_session_end(store):
    def execute(args: Mapping[str, Any] | None = None) -> str:
        session_end(store, _text(_arguments(args), "handoff_notes"))
        return '{"status": "ended"}'

    return Tool(
        name="org_session_end",
        description="End current session with handoff notes for next session.",
        input_schema={
            "type": "object",
            "properties": {"handoff_notes": {"type": "string"}},
        },
        execute=execute,
    )


def register(registry, store):
    """Add all cell and session tools to the registry."""
    for factory in (
        _org_cells,
        _org_create,
        _org_close,
        _org_update,
        _org_create_epic,
        _org_query,
        _org_start,
        _org_ready,
        _org_sync,
        _org_session_start,
        _org_session_end,
    ):
        registry.register(factory(store))