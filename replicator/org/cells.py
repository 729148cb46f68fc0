"""Work items ("cells"): creation, queries and status changes."""

from __future__ import annotations

import secrets
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

DEFAULT_QUERY_LIMIT = 50

_COLUMNS = (
    "id, title, description, type, status, priority, parent_id, "
    "created_at, updated_at, closed_at, close_reason"
)

_UNBLOCKED = """
      AND (parent_id IS NULL
           OR NOT EXISTS (
               SELECT 1 FROM beads p
               WHERE p.id = beads.parent_id
                 AND p.status IN ('open', 'in_progress', 'blocked')
           ))"""


class CellNotFoundError(LookupError):
    """No cell has the given ID."""

    def __init__(self, cell_id):
        self.cell_id = cell_id
        super().__init__(f'cell "{cell_id}" not found')


@dataclass
class Cell:
    """A single work item."""

    id: str
    title: str
    description: str = ""
    type: str = "task"
    status: str = "open"
    priority: int = 1
    parent_id: Optional[str] = None
    project_key: str = ""
    assigned_to: Optional[str] = None
    labels: list = field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""
    closed_at: Optional[str] = None
    close_reason: Optional[str] = None

    def to_dict(self):
        """The cell as a JSON-ready mapping; optional fields appear only when set."""
        out = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "type": self.type,
            "status": self.status,
            "priority": self.priority,
            "parent_id": self.parent_id,
        }
        if self.project_key:
            out["project_key"] = self.project_key
        if self.assigned_to is not None:
            out["assigned_to"] = self.assigned_to
        if self.labels:
            out["labels"] = list(self.labels)
        out["created_at"] = self.created_at
        out["updated_at"] = self.updated_at
        if self.closed_at is not None:
            out["closed_at"] = self.closed_at
        if self.close_reason is not None:
            out["close_reason"] = self.close_reason
        return out


@dataclass
class CellQuery:
    """Filters for selecting cells."""

    id: str = ""
    status: str = ""
    type: str = ""
    ready: bool = False
    limit: int = 0


@dataclass
class CreateCellInput:
    """What is needed to create a cell; type and priority have defaults."""

    title: str
    description: str = ""
    type: str = ""
    priority: int = 0
    parent_id: Optional[str] = None


def _now():
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _generate_id():
    return "cell-" + secrets.token_hex(8)


def _row_to_cell(row):
    keys = row.keys()
    return Cell(
        id=row["id"],
        title=row["title"],
        description=row["description"] or "",
        type=row["type"],
        status=row["status"],
        priority=row["priority"],
        parent_id=row["parent_id"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        closed_at=row["closed_at"] if "closed_at" in keys else None,
        close_reason=row["close_reason"] if "close_reason" in keys else None,
    )


def create_cell(store, cell_input):
    """Insert a new open cell and return it."""
    cell_id = _generate_id()
    cell_type = cell_input.type or "task"
    priority = cell_input.priority or 1
    now = _now()
    store.db.execute(
        """
        INSERT INTO beads (id, title, description, type, status, priority,
                           parent_id, labels, created_at, updated_at)
        VALUES (?, ?, ?, ?, 'open', ?, ?, '[]', ?, ?)""",
        (
            cell_id,
            cell_input.title,
            cell_input.description,
            cell_type,
            priority,
            cell_input.parent_id,
            now,
            now,
        ),
    )
    return Cell(
        id=cell_id,
        title=cell_input.title,
        description=cell_input.description,
        type=cell_type,
        status="open",
        priority=priority,
        parent_id=cell_input.parent_id,
        created_at=now,
        updated_at=now,
    )


def query_cells(store, query=None):
    """Return cells matching the filters, highest priority and newest first."""
    query = query or CellQuery()
    sql = f"SELECT {_COLUMNS} FROM beads WHERE 1=1"
    args = []
    if query.id:
        sql += " AND id LIKE ?"
        args.append(query.id + "%")
    if query.status:
        sql += " AND status = ?"
        args.append(query.status)
    if query.type:
        sql += " AND type = ?"
        args.append(query.type)
    if query.ready:
        sql += " AND status = 'open' AND type != 'epic'" + _UNBLOCKED
    sql += " ORDER BY priority DESC, created_at DESC LIMIT ?"
    args.append(query.limit if query.limit > 0 else DEFAULT_QUERY_LIMIT)
    return [_row_to_cell(row) for row in store.db.execute(sql, args)]


def _update_one(store, sql, args, cell_id):
    cursor = store.db.execute(sql, args)
    if cursor.rowcount == 0:
        raise CellNotFoundError(cell_id)


def close_cell(store, cell_id, reason):
    """Mark a cell closed, recording why."""
    now = _now()
    _update_one(
        store,
        "UPDATE beads SET status = 'closed', closed_at = ?, close_reason = ?, "
        "updated_at = ? WHERE id = ?",
        (now, reason, now, cell_id),
        cell_id,
    )


def update_cell(store, cell_id, status=None, description=None, priority=None):
    """Change whichever of status, description and priority are given."""
    sets = ["updated_at = ?"]
    args = [_now()]
    for column, value in (
        ("status", status),
        ("description", description),
        ("priority", priority),
    ):
        if value is not None:
            sets.append(f"{column} = ?")
            args.append(value)
    args.append(cell_id)
    _update_one(
        store, f"UPDATE beads SET {', '.join(sets)} WHERE id = ?", args, cell_id
    )


def start_cell(store, cell_id):
    """Set a cell's status to in_progress."""
    _update_one(
        store,
        "UPDATE beads SET status = 'in_progress', updated_at = ? WHERE id = ?",
        (_now(), cell_id),
        cell_id,
    )


def ready_cell(store):
    """The highest-priority open, non-epic cell whose parent is finished, or None."""
    row = store.db.execute(
        """
        SELECT id, title, description, type, status, priority,
               parent_id, created_at, updated_at
        FROM beads
        WHERE status = 'open'
          AND type != 'epic'"""
        + _UNBLOCKED
        + """
        ORDER BY priority DESC, created_at ASC
        LIMIT 1"""
    ).fetchone()
    return None if row is None else _row_to_cell(row)