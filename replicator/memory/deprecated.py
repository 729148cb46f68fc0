"""Responses for memory tools that have been retired."""

from __future__ import annotations

import json

# Each successor tool and the retired tools it supersedes.
_SUCCESSORS = {
    "dewey_get_page": ("hivemind_get",),
    "dewey_delete_page": ("hivemind_remove",),
    "dewey_health": ("hivemind_stats",),
    "dewey_reload": ("hivemind_index", "hivemind_sync"),
}

_SUCCESSOR_OF = {old: new for new, olds in _SUCCESSORS.items() for old in olds}


def deprecated_response(tool_name):
    """A JSON document saying the tool is deprecated and what replaces it."""
    successor = _SUCCESSOR_OF.get(tool_name, "")
    advice = (
        f"Use {successor} instead."
        if successor
        else "No direct replacement is available."
    )
    return json.dumps(
        {
            "deprecated": True,
            "tool": tool_name,
            "message": f"{tool_name} is deprecated. {advice}",
            "replacement": successor,
        },
        indent=2,
        sort_keys=True,
        ensure_ascii=False,
    )