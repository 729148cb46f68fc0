"""Terminal styles that fall back to plain text when colour is unavailable."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional

_RESET = "\x1b[0m"

_ICONS = (("pass", "✅"), ("warn", "⚠️"), ("fail", "❌"))


def _sgr(text, codes):
    if not codes or not text:
        return text
    return f"\x1b[{';'.join(codes)}m{text}{_RESET}"


@dataclass(frozen=True)
class Style:
    """Text attributes, optionally with a rounded border and padding."""

    foreground: Optional[str] = None
    bold: bool = False
    rounded_border: bool = False
    border_foreground: Optional[str] = None
    padding: int = 0
    color: bool = False

    def _codes(self):
        if not self.color:
            return []
        codes = []
        if self.bold:
            codes.append("1")
        if self.foreground is not None:
            codes.append(f"38;5;{self.foreground}")
        return codes

    def _border(self, text):
        if self.color and self.border_foreground is not None:
            return _sgr(text, [f"38;5;{self.border_foreground}"])
        return text

    def render(self, text):
        """Return text with this style applied."""
        codes = self._codes()
        lines = str(text).split("\n")
        if not self.rounded_border and not self.padding:
            return "\n".join(_sgr(line, codes) for line in lines)

        inner = max(len(line) for line in lines)
        pad = " " * self.padding
        body = [
            pad + _sgr(line, codes) + " " * (inner - len(line)) + pad for line in lines
        ]
        if not self.rounded_border:
            return "\n".join(body)
        span = "─" * (inner + 2 * self.padding)
        side = self._border("│")
        out = [self._border(f"╭{span}╮")]
        out.extend(f"{side}{line}{side}" for line in body)
        out.append(self._border(f"╰{span}╯"))
        return "\n".join(out)


@dataclass(frozen=True)
class Styles:
    """The shared style set for command output."""

    pass_: Style
    warn: Style
    fail: Style
    dim: Style
    bold: Style
    title: Style
    box: Style
    border: Style
    has_color: bool

    def indicator(self, status):
        """A status icon: emoji in colour mode, bracketed text otherwise."""
        emoji = dict(_ICONS).get(status)
        if emoji is None:
            return status
        if not self.has_color:
            return f"[{status.upper()}]"
        style = {"warn": self.warn, "fail": self.fail}.get(status, self.pass_)
        return style.render(emoji)


def _supports_color(stream):
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        if not isatty():
            return False
    except (ValueError, OSError):
        return False
    return os.environ.get("TERM", "") != "dumb"


def new_styles(stream):
    """Build a style set whose colour follows what the stream supports."""
    has_color = _supports_color(stream)
    base = Style(color=has_color)
    return Styles(
        pass_=replace(base, foreground="10"),
        warn=replace(base, foreground="11"),
        fail=replace(base, foreground="9"),
        dim=replace(base, foreground="241"),
        bold=replace(base, bold=True),
        title=replace(base, bold=True, foreground="212"),
        box=replace(base, rounded_border=True, border_foreground="63", padding=1),
        border=replace(base, foreground="63"),
        has_color=has_color,
    )