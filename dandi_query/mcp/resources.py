"""FastMCP resource registrations for the static documentation."""

from __future__ import annotations

from collections.abc import Callable

from fastmcp import FastMCP

from ..core.content import StaticContentProvider


def _reader(content: StaticContentProvider, uri: str) -> Callable[[], str]:
    def read() -> str:
        return content.read_resource(uri).text

    return read


def register_resources(mcp: FastMCP, content: StaticContentProvider) -> None:
    for descriptor in content.list_resources():
        mcp.resource(
            descriptor.uri,
            name=descriptor.name,
            description=descriptor.description,
            mime_type=descriptor.mime_type,
        )(_reader(content, descriptor.uri))
