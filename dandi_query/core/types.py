"""Shared type definitions."""

from dataclasses import dataclass, field
from typing import Any, Literal, Mapping

HttpMethod = Literal["GET", "POST"]


@dataclass(frozen=True, slots=True)
class ToolInvocation:
    """A single tool call as received from the MCP client."""

    tool_name: str
    arguments: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class RemoteRequestSpec:
    """The HTTP request a tool invocation translates into."""

    method: HttpMethod
    path: str
    query_params: tuple[tuple[str, str], ...] = ()
    json_body: Mapping[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class ResourceDescriptor:
    uri: str
    name: str
    mime_type: str
    description: str


@dataclass(frozen=True, slots=True)
class ResourceContent:
    uri: str
    mime_type: str
    text: str
