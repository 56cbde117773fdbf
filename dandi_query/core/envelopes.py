"""Response envelopes returned to MCP clients."""

from __future__ import annotations

from typing import Any

from .exceptions import ExternalServiceError


def wrap_response(response: Any) -> dict[str, Any]:
    """Ensure archive responses are returned as dictionaries."""

    if isinstance(response, dict):
        return response
    return {"data": response}


def search_envelope(response: Any, noun: str) -> dict[str, Any]:
    """Re-wrap a paginated search response as ``{success, results, total, message}``."""

    if not isinstance(response, dict):
        raise ExternalServiceError(f"Unexpected {noun} search response from archive")

    count = response.get("count")
    return {
        "success": True,
        "results": response.get("results"),
        "total": count,
        "message": f"Found {count} {noun}",
    }


def error_envelope(message: str) -> dict[str, Any]:
    return {"success": False, "error": message}


def is_error_envelope(payload: Any) -> bool:
    """True for the ``{success: False, error}`` shape produced on failure."""

    return (
        isinstance(payload, dict)
        and payload.get("success") is False
        and set(payload) == {"success", "error"}
    )
