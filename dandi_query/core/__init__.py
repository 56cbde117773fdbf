"""Core infrastructure: settings, logging, archive client and gateway."""

from .config import GatewaySettings, get_settings
from .content import StaticContentProvider
from .gateway import ToolGateway
from .logging_config import configure_logging, get_logger

__all__ = [
    "GatewaySettings",
    "StaticContentProvider",
    "ToolGateway",
    "configure_logging",
    "get_logger",
    "get_settings",
]
