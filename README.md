# replicator

A small library for coordinating AI coding agents around a shared SQLite
database. It tracks work items ("cells"), groups them into epics, carries
hand-off notes between work sessions, prints activity reports, and exposes
cell and memory operations as named tools that an agent server can list and
dispatch.

It has no dependencies outside the standard library.

## Modules

- `replicator.store` – `Store(path)` opens (and creates the tables of) a
  SQLite database; `open_memory()` gives a throw-away in-memory one. `Store`
  is a context manager and runs in autocommit mode.
- `replicator.org.cells` – `create_cell`, `query_cells`, `start_cell`,
  `update_cell`, `close_cell` and `ready_cell`, with the `Cell`, `CellQuery`
  and `CreateCellInput` dataclasses. Changing a cell that does not exist
  raises `CellNotFoundError`.
- `replicator.org.epic` – `create_epic` writes an epic and its subtasks in
  one transaction and returns `(epic, subtasks)`.
- `replicator.org.session` – `session_start` / `session_end`; the notes given
  when a session ends are returned when the next one starts.
- `replicator.org.sync` – `sync(store, project_path)` writes every cell to
  `.uf/replicator/cells.json` under the project and runs `git add` and
  `git commit -m "hive sync" --allow-empty` there. A failing git command
  raises `SyncError`.
- `replicator.org.format` – `format_cells(cells, stream)` prints cells as a
  table with the status column coloured.
- `replicator.query.presets` – named report queries: `list_presets()` and
  `run(store, name, stream)`.
- `replicator.stats` – `run(store, stream)` prints event counts, recent
  activity and cell counts by status.
- `replicator.ui.styles` and `replicator.ui.table` – the shared styles and
  bordered tables. Colour is used only when the stream is a terminal,
  `NO_COLOR` is unset and `TERM` is not `dumb`; otherwise output is plain
  text.
- `replicator.memory.proxy` – `DeweyClient`, a JSON-RPC 2.0 client for a
  Dewey semantic memory server; `replicator.memory.deprecated` answers for
  retired memory tools.
- `replicator.registry` – `Tool` and `Registry`.
- `replicator.tools.org_tools` and `replicator.tools.memory_tools` –
  `register(registry, ...)` adds the cell/session tools and the memory tools.

## Working with cells

```python
import sys

from replicator.store import open_memory
from replicator.org.cells import CellQuery, CreateCellInput, create_cell, query_cells, ready_cell
from replicator.org.epic import CreateEpicInput, SubtaskInput, create_epic
from replicator.org.format import format_cells

with open_memory() as store:
    create_cell(store, CreateCellInput(title="Fix the bug", type="bug"))
    epic, subtasks = create_epic(
        store,
        CreateEpicInput(
            epic_title="Build the thing",
            subtasks=[SubtaskInput(title="Step 1", priority=2, files=["app.py"])],
        ),
    )

    next_cell = ready_cell(store)   # highest-priority unblocked cell, or None
    format_cells(query_cells(store, CellQuery(status="open")), sys.stdout)
```

New cells default to type `task` and priority 1. `query_cells` returns at
most 50 cells unless `CellQuery.limit` says otherwise, highest priority and
newest first. A subtask is not ready while its parent is open, in progress or
blocked, and epics are never returned as ready work.

## Sessions

```python
from replicator.org.session import session_end, session_start

notes = session_start(store, "")      # notes from the last ended session, or ""
session_end(store, "Left off at task 3")
```

`session_end` raises `NoActiveSessionError` when no session is open.

## Reports

```python
import sys

from replicator import stats
from replicator.query import presets

for name in presets.list_presets():
    presets.run(store, name, sys.stdout)

stats.run(store, sys.stdout)
```

The presets are `agent_activity_24h`, `cells_by_status`,
`forge_completion_rate` and `recent_events`. An unknown name raises
`UnknownPresetError`.

## Tools for agents

```python
from replicator.memory.proxy import DeweyClient
from replicator.registry import Registry
from replicator.tools import memory_tools, org_tools

registry = Registry()
org_tools.register(registry, store)
memory_tools.register(registry, DeweyClient("http://localhost:3333/rpc", 10.0))

for tool in registry.list():
    print(tool.to_dict())

print(registry.get("org_create").execute({"title": "Write docs"}))
```

Each tool's `execute` takes the arguments as a mapping and returns a JSON
string. The org tools are `org_cells`, `org_query`, `org_create`,
`org_close`, `org_update`, `org_create_epic`, `org_start`, `org_ready`,
`org_sync`, `org_session_start` and `org_session_end`. The memory tools are
`hivemind_store` and `hivemind_find`, which forward to Dewey, and six retired
tools (`hivemind_get`, `hivemind_remove`, `hivemind_validate`,
`hivemind_stats`, `hivemind_index`, `hivemind_sync`) that answer with a
deprecation notice naming the replacement, if any.

When Dewey cannot be reached, or answers with a non-200 status, the memory
tools return a `DEWEY_UNAVAILABLE` payload instead of failing, so agents can
carry on without semantic memory. Called directly, `DeweyClient` raises
`DeweyUnavailableError` in that case and `DeweyRPCError` when Dewey returns a
JSON-RPC error.

## What this package does not do

- It has no command-line program and no server: nothing here listens for
  agent requests or speaks a tool protocol on the wire. The registry holds
  tools for a server you provide to list and call.
- It has no forge or agent-messaging tools; only the cell/session and memory
  tool families can be registered.
- `sync` commits locally; it does not pull or push.

## Running the tests

Install the `test` extra and run `pytest` from the project root. The sync
tests need `git` on the `PATH`.