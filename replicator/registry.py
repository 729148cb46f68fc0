"""Registration of tools callable by agents."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

ExecuteFunc = Callable[[Mapping[str, Any]], str]


@dataclass
class Tool:
    """A named tool with a JSON schema for its arguments and a handler."""

    name: str
    description: str
    input_schema: dict = field(default_factory=lambda: {"type": "object", "properties": {}})
    execute: Optional[ExecuteFunc] = field(default=None, repr=False, compare=False)

    def to_dict(self):
        """The tool as advertised in a tools listing."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


class Registry:
    """Tools keyed by name, listed in registration order."""

    def __init__(self):
        self._tools: dict[str, Tool] = {}

    def register(self, tool):
        """Add a tool, replacing any tool of the same name."""
        self._tools[tool.name] = tool

    def get(self, name):
        """Return the tool with this name, or None."""
        return self._tools.get(name)

    def list(self):
        """Return all tools in registration order."""
        return list(self._tools.values())

    def __len__(self):
        return len(self._tools)

    def __contains__(self, name):
        return name in self._tools