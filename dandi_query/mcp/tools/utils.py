"""Shared helpers for MCP tool implementations."""

from __future__ import annotations

from typing import Any


def present(**arguments: Any) -> dict[str, Any]:
    """Drop arguments the caller left unset so they are not forwarded."""

    return {key: value for key, value in arguments.items() if value is not None}
