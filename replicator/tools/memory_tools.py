"""Agent tools for semantic memory, backed by a Dewey server."""

from __future__ import annotations

import json
from typing import Any, Mapping

from replicator.memory.deprecated import deprecated_response
from replicator.memory.proxy import DeweyUnavailableError, unavailable_response
from replicator.registry import Tool

_DEPRECATED_TOOLS = (
    ("hivemind_get", "Get specific memory by ID"),
    ("hivemind_remove", "Delete outdated/incorrect memory"),
    ("hivemind_validate", "Confirm memory is still accurate"),
    ("hivemind_stats", "Memory statistics and health check"),
    ("hivemind_index", "Index AI session directories"),
    ("hivemind_sync", "Sync learnings to git-backed team sharing"),
)


def _arguments(args):
    if args is None:
        return {}
    if not isinstance(args, Mapping):
        raise TypeError("tool arguments must be a JSON object")
    return args


def _text(args, key):
    value = args.get(key)
    return "" if value is None else str(value)


def _dump(value):
    return json.dumps(value, indent=2, sort_keys=True, ensure_ascii=False)


def _hivemind_store(client):
    def execute(args: Mapping[str, Any] | None = None) -> str:
        args = _arguments(args)
        try:
            result = client.store(_text(args, "information"), _text(args, "tags"))
        except DeweyUnavailableError as exc:
            return unavailable_response(exc)
        return _dump(result)

    return Tool(
        name="hivemind_store",
        description="Store a memory (learnings, decisions, patterns) with metadata "
        "and tags. Proxies to Dewey semantic search.",
        input_schema={
            "type": "object",
            "required": ["information"],
            "properties": {
                "information": {"type": "string"},
                "tags": {"type": "string"},
            },
        },
        execute=execute,
    )


def _hivemind_find(client):
    def execute(args: Mapping[str, Any] | None = None) -> str:
        args = _arguments(args)
        try:
            result = client.find(
                _text(args, "query"),
                _text(args, "collection"),
                int(args.get("limit") or 0),
            )
        except DeweyUnavailableError as exc:
            return unavailable_response(exc)
        return _dump(result)

    return Tool(
        name="hivemind_find",
        description="Search all memories by semantic similarity. Proxies to Dewey "
        "semantic search.",
        input_schema={
            "type": "object",
            "required": ["query"],
            "properties": {
                "query": {"type": "string"},
                "collection": {"type": "string"},
                "limit": {"type": "number"},
            },
        },
        execute=execute,
    )


def _hivemind_deprecated(name, description):
    def execute(args: Mapping[str, Any] | None = None) -> str:
        return deprecated_response(name)

    return Tool(
        name=name,
        description=description + " (DEPRECATED)",
        input_schema={"type": "object", "properties": {}},
        execute=execute,
    )


def register(registry, client):
    """Add the memory proxy tools and the deprecated memory tools to the registry."""
    registry.register(_hivemind_store(client))
    registry.register(_hivemind_find(client))
    for name, description in _DEPRECATED_TOOLS:
        registry.register(_hivemind_deprecated(name, description))