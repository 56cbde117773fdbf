"""Configuration management for the query server."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_REPO_ROOT = Path(__file__).resolve().parents[2]
# Repo root .env first, then whatever directory the server is launched from.
_ENV_FILE_CANDIDATES: tuple[str, ...] = (
    str(_REPO_ROOT / ".env"),
    ".env",
)


class GatewaySettings(BaseSettings):
    """Centralised configuration derived from environment variables."""

    app_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_file: str | None = Field(
        None,
        description="Optional log file path; unset keeps output on stderr only",
    )

    dandi_api_base: AnyHttpUrl = Field(
        "http://localhost:8000", description="DANDI archive API base URL"
    )
    request_timeout: float = Field(
        30.0,
        gt=0,
        description="Timeout in seconds applied to every archive request",
        validation_alias=AliasChoices("DANDI_API_TIMEOUT", "request_timeout"),
    )

    mcp_transport: Literal["stdio", "streamable-http"] = Field(
        "stdio", description="Transport the MCP server binds to"
    )
    mcp_host: str = Field("127.0.0.1", description="HTTP transport bind host")
    mcp_port: int = Field(8001, description="HTTP transport bind port")

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE_CANDIDATES,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def api_base_url(self) -> str:
        return str(self.dandi_api_base)


@lru_cache
def get_settings() -> GatewaySettings:
    """Return a cached GatewaySettings instance for the process entry point."""

    return GatewaySettings()


def resolved_env_file() -> str | None:
    """Return the first readable .env file from the candidate list."""

    for candidate in _ENV_FILE_CANDIDATES:
        path = Path(candidate).expanduser()
        if path.is_file():
            return str(path)
    return None
