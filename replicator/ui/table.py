"""Bordered text tables."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from replicator.ui.styles import Style

HEADER_ROW = -1

StyleFunc = Callable[[int, int], Optional[Style]]


def _fit(text, width):
    if len(text) <= width:
        return text
    if width <= 1:
        return text[:width]
    return text[: width - 1] + "…"


@dataclass
class Table:
    """A table with a normal box border; row -1 is the header row."""

    headers: list
    rows: list
    border_style: Style = field(default_factory=Style)
    style_func: Optional[StyleFunc] = None
    width: Optional[int] = None

    def _columns(self):
        return max([len(self.headers)] + [len(row) for row in self.rows])

    def _widths(self, ncols, grid):
        widths = [max(len(row[c]) for row in grid) + 2 for c in range(ncols)]
        if self.width is None:
            return widths
        total = sum(widths) + ncols + 1
        if total < self.width:
            extra = self.width - total
            share, rest = divmod(extra, ncols)
            widths = [w + share + (1 if i < rest else 0) for i, w in enumerate(widths)]
        while total > self.width:
            widest = max(range(ncols), key=lambda i: widths[i])
            if widths[widest] <= 3:
                break
            widths[widest] -= 1
            total -= 1
        return widths

    def _line(self, left, mid, right, widths):
        return self.border_style.render(left + mid.join("─" * w for w in widths) + right)

    def _row(self, index, cells, widths):
        bar = self.border_style.render("│")
        parts = []
        for col, (text, w) in enumerate(zip(cells, widths)):
            text = _fit(text, w - 2)
            style = self.style_func(index, col) if self.style_func else None
            shown = style.render(text) if style is not None else text
            parts.append(" " + shown + " " * (w - 2 - len(text)) + " ")
        return bar + bar.join(parts) + bar

    def render(self):
        """Render the table as text."""
        ncols = self._columns()
        if ncols == 0:
            return ""
        pad = lambda row: [str(v) for v in row] + [""] * (ncols - len(row))
        headers = pad(self.headers) if self.headers else None
        body = [pad(row) for row in self.rows]
        grid = ([headers] if headers else []) + body
        widths = self._widths(ncols, grid)

        lines = [self._line("┌", "┬", "┐", widths)]
        if headers:
            lines.append(self._row(HEADER_ROW, headers, widths))
            if body:
                lines.append(self._line("├", "┼", "┤", widths))
        lines.extend(self._row(i, row, widths) for i, row in enumerate(body))
        lines.append(self._line("└", "┴", "┘", widths))
        return "\n".join(lines)

    def __str__(self):
        return self.render()


def new_table(styles, headers, rows, style_func=None, width=None):
    """Build a table bordered in the shared border style."""
    return Table(
        headers=list(headers),
        rows=[list(row) for row in rows],
        border_style=styles.border,
        style_func=style_func,
        width=width,
    )