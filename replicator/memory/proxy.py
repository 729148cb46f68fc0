"""JSON-RPC client that forwards memory operations to a Dewey server."""

from __future__ import annotations

import ipaddress
import json
import urllib.error
import urllib.parse
import urllib.request

DEFAULT_TIMEOUT = 10.0

STORE_WARNING = "hivemind_store is deprecated. Use dewey_store_learning directly."
FIND_WARNING = "hivemind_find is deprecated. Use dewey_semantic_search directly."
UNAVAILABLE_MESSAGE = (
    "Dewey semantic search is not available. "
    "Memory operations require a running Dewey instance."
)


class DeweyUnavailableError(Exception):
    """Dewey could not be reached or answered with a non-200 status."""

    def __init__(self, cause):
        self.cause = cause
        super().__init__(f"dewey unavailable: {cause}")


class DeweyRPCError(Exception):
    """Dewey answered with a JSON-RPC error object."""

    def __init__(self, code, message):
        self.code = code
        self.message = message
        super().__init__(f"dewey error {code}: {message}")


def _is_loopback(host):
    if host == "localhost":
        return True
    try:
        return ipaddress.ip_address(host).is_loopback
    except ValueError:
        return False


def _as_mapping(result):
    if isinstance(result, dict):
        return dict(result)
    return {"result": "" if result is None else json.dumps(result, ensure_ascii=False)}


class DeweyClient:
    """Posts JSON-RPC 2.0 requests to a Dewey endpoint."""

    def __init__(self, url, timeout=DEFAULT_TIMEOUT):
        self.url = url
        self.timeout = timeout
        host = urllib.parse.urlsplit(url).hostname or ""
        if _is_loopback(host):
            self._opener = urllib.request.build_opener(urllib.request.ProxyHandler({}))
        else:
            self._opener = urllib.request.build_opener()

    def call(self, method, params=None):
        """Send one request and return its decoded result."""
        body = json.dumps(
            {"jsonrpc": "2.0", "method": method, "params": params, "id": 1}
        ).encode("utf-8")
        request = urllib.request.Request(
            self.url,
            data=body,
            headers={"Content-Type": "application/json"},
            method="POST",
        )
        try:
            with self._opener.open(request, timeout=self.timeout) as response:
                status = response.status
                payload = response.read()
        except urllib.error.HTTPError as exc:
            detail = exc.read().decode("utf-8", "replace")
            raise DeweyUnavailableError(f"HTTP {exc.code}: {detail}") from exc
        except OSError as exc:
            raise DeweyUnavailableError(exc) from exc

        if status != 200:
            detail = payload.decode("utf-8", "replace")
            raise DeweyUnavailableError(f"HTTP {status}: {detail}")

        try:
            envelope = json.loads(payload)
        except ValueError as exc:
            raise ValueError(f"unmarshal response: {exc}") from exc
        if not isinstance(envelope, dict):
            raise ValueError("unmarshal response: expected a JSON object")

        error = envelope.get("error")
        if error is not None:
            raise DeweyRPCError(error.get("code", 0), error.get("message", ""))
        return envelope.get("result")

    def health(self):
        """Check that Dewey answers; raises if it does not."""
        self.call("dewey_health", {})

    def store(self, information, tags=""):
        """Store a learning, returning Dewey's reply with a deprecation warning."""
        params = {"information": information}
        if tags:
            params["tags"] = tags
        parsed = _as_mapping(self.call("store_learning", params))
        parsed["_warning"] = STORE_WARNING
        return parsed

    def find(self, query, collection="", limit=0):
        """Run a semantic search, returning the reply with a deprecation warning."""
        params = {"query": query}
        if limit > 0:
            params["limit"] = limit
        if collection:
            params["source_type"] = collection
        parsed = _as_mapping(self.call("semantic_search", params))
        parsed["_warning"] = FIND_WARNING
        return parsed


def unavailable_response(error):
    """A JSON document telling agents that Dewey is unavailable."""
    response = {
        "error": str(error),
        "code": "DEWEY_UNAVAILABLE",
        "message": UNAVAILABLE_MESSAGE,
    }
    return json.dumps(response, indent=2, sort_keys=True, ensure_ascii=False)