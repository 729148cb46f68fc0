"""Terminal table output for lists of cells."""

from __future__ import annotations

from replicator.ui.styles import Style, new_styles
from replicator.ui.table import HEADER_ROW, new_table

HEADERS = ["ID", "TITLE", "STATUS", "TYPE", "PRIORITY"]
STATUS_COLUMN = 2
ID_WIDTH = 8
TITLE_WIDTH = 40


def _short_title(title):
    if len(title) > TITLE_WIDTH:
        return title[: TITLE_WIDTH - 3] + "..."
    return title


def format_cells(cells, stream):
    """Write cells as a table to stream, colouring the status column."""
    styles = new_styles(stream)
    cells = list(cells)
    if not cells:
        print(styles.dim.render("No cells found"), file=stream)
        return

    rows = [
        [cell.id[:ID_WIDTH], _short_title(cell.title), cell.status, cell.type, str(cell.priority)]
        for cell in cells
    ]
    status_styles = {
        "open": styles.pass_,
        "in_progress": styles.warn,
        "blocked": styles.fail,
        "closed": styles.dim,
    }

    def style_for(row, col):
        if row == HEADER_ROW:
            return styles.bold
        if col == STATUS_COLUMN and 0 <= row < len(cells):
            return status_styles.get(cells[row].status, Style())
        return Style()

    table = new_table(styles, HEADERS, rows, style_func=style_for)
    print(table.render(), file=stream)