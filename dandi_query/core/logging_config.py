"""Structlog logging configuration with plain-text output."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

import structlog
from structlog.types import Processor

from .config import GatewaySettings, get_settings, resolved_env_file

_CONFIGURED = False

# Rendered first, in this order; remaining keys follow as key=value pairs.
_HEAD_KEYS = ("timestamp", "level", "event")

_SHARED_PROCESSORS: list[Processor] = [
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
]


def _render_line(_: Any, __: str, event_dict: dict[str, Any]) -> str:
    """Render ``timestamp [LEVEL] event key=value ...``, skipping ``None`` values."""

    timestamp, level, event = (event_dict.pop(key, "") for key in _HEAD_KEYS)
    fields = [f"{key}={value}" for key, value in event_dict.items() if value is not None]
    return " ".join(filter(None, [timestamp, f"[{str(level).upper()}]", str(event), *fields]))


def _formatter() -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_SHARED_PROCESSORS,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, _render_line],
    )


def configure_logging(settings: GatewaySettings | None = None) -> None:
    """Configure application-wide logging.

    Without ``settings`` this is a no-op once logging is set up; explicit
    settings always replace the existing handlers. Console output goes to
    stderr: with the stdio transport, stdout carries the MCP protocol stream.
    """

    global _CONFIGURED
    if settings is None:
        if _CONFIGURED and logging.getLogger().handlers:
            return
        settings = get_settings()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(_formatter())
    console_handler.setLevel(settings.log_level)

    handlers: list[logging.Handler] = [console_handler]

    log_file = (settings.log_file or "").strip()
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(_formatter())
        file_handler.setLevel(settings.log_level)
        handlers.append(file_handler)

    logging.basicConfig(
        handlers=handlers,
        level=settings.log_level,
        format="%(message)s",
        force=True,
    )

    # httpx logs every request at INFO.
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    structlog.get_logger(__name__).info(
        "logging_configured",
        env=settings.app_env,
        level=settings.log_level,
        log_file=log_file or "stderr-only",
        env_file=resolved_env_file() or "not-found",
    )

    _CONFIGURED = True


def get_logger(*args: Any, **kwargs: Any) -> structlog.stdlib.BoundLogger:
    """Return a configured structlog logger."""

    configure_logging()
    return structlog.get_logger(*args, **kwargs)
