"""Atomic creation of an epic together with its subtasks."""

from __future__ import annotations

import json
from dataclasses import dataclass, field

from replicator.org.cells import Cell, _generate_id, _now


@dataclass
class SubtaskInput:
    """A subtask to create under an epic."""

    title: str
    priority: int = 0
    files: list = field(default_factory=list)


@dataclass
class CreateEpicInput:
    """An epic's title, description and subtasks."""

    epic_title: str
    epic_description: str = ""
    subtasks: list = field(default_factory=list)


def create_epic(store, epic_input):
    """Create the epic and all subtasks in one transaction; return (epic, subtasks)."""
    now = _now()
    epic_id = _generate_id()
    db = store.db
    db.execute("BEGIN")
    try:
        db.execute(
            """
            INSERT INTO beads (id, title, description, type, status, priority,
                               labels, created_at, updated_at)
            VALUES (?, ?, ?, 'epic', 'open', 1, '[]', ?, ?)""",
            (epic_id, epic_input.epic_title, epic_input.epic_description, now, now),
        )
        subtasks = []
        for subtask in epic_input.subtasks:
            sub_id = _generate_id()
            priority = subtask.priority or 1
            metadata = "{}"
            if subtask.files:
                metadata = json.dumps(
                    {"files": list(subtask.files)},
                    separators=(",", ":"),
                    ensure_ascii=False,
                )
            db.execute(
                """
                INSERT INTO beads (id, title, type, status, priority, parent_id,
                                   labels, metadata, created_at, updated_at)
                VALUES (?, ?, 'task', 'open', ?, ?, '[]', ?, ?, ?)""",
                (sub_id, subtask.title, priority, epic_id, metadata, now, now),
            )
            subtasks.append(
                Cell(
                    id=sub_id,
                    title=subtask.title,
                    type="task",
                    status="open",
                    priority=priority,
                    parent_id=epic_id,
                    created_at=now,
                    updated_at=now,
                )
            )
        db.execute("COMMIT")
    except BaseException:
        db.execute("ROLLBACK")
        raise

    epic = Cell(
        id=epic_id,
        title=epic_input.epic_title,
        description=epic_input.epic_description,
        type="epic",
        status="open",
        priority=1,
        created_at=now,
        updated_at=now,
    )
    return epic, subtasks