"""FastMCP server exposing the gateway tools and static resources."""

from .server import create_server

__all__ = ["create_server"]
