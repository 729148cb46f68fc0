"""Writing all cells to the project and committing them to git."""

from __future__ import annotations

import json
import subprocess
from pathlib import Path

from replicator.org.cells import CellQuery, query_cells

SYNC_LIMIT = 10000
HIVE_DIR = Path(".uf") / "replicator"


class SyncError(RuntimeError):
    """A git command run during sync failed."""


def _git(project_path, *args):
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=project_path,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
        )
    except OSError as exc:
        raise SyncError(f"git {args[0]}: {exc}") from exc
    if result.returncode != 0:
        raise SyncError(
            f"git {args[0]}: exit status {result.returncode}\n{result.stdout}"
        )


def sync(store, project_path):
    """Write cells to .uf/replicator/cells.json and commit that directory."""
    cells = query_cells(store, CellQuery(limit=SYNC_LIMIT))

    hive_dir = Path(project_path) / HIVE_DIR
    hive_dir.mkdir(parents=True, exist_ok=True)
    data = json.dumps([cell.to_dict() for cell in cells], indent=2, ensure_ascii=False)
    (hive_dir / "cells.json").write_text(data, encoding="utf-8")

    _git(project_path, "add", ".uf/replicator/")
    _git(project_path, "commit", "-m", "hive sync", "--allow-empty")