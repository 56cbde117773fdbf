"""Async client for the DANDI archive REST API."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx

from .config import GatewaySettings
from .exceptions import ExternalServiceError
from .http_client import async_http_client
from .logging_config import get_logger
from .types import RemoteRequestSpec

logger = get_logger(__name__)


class DandiClient:
    """Minimal async client that executes RemoteRequestSpec values.

    Every transport error and non-2xx response is raised as
    ExternalServiceError; there are no retries.
    """

    def __init__(
        self,
        settings: GatewaySettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = settings.api_base_url
        self._timeout = settings.request_timeout
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base_url

    @asynccontextmanager
    async def session(self) -> AsyncIterator[httpx.AsyncClient]:
        """Open one HTTP client to share across several requests."""

        async with async_http_client(
            base_url=self._base_url, timeout=self._timeout, transport=self._transport
        ) as client:
            yield client

    async def send(
        self,
        spec: RemoteRequestSpec,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> Any:
        """Issue the request and return the decoded JSON body."""

        if client is None:
            async with self.session() as owned:
                return await self._send(owned, spec)
        return await self._send(client, spec)

    async def _send(self, client: httpx.AsyncClient, spec: RemoteRequestSpec) -> Any:
        logger.debug(
            "dandi_http_request",
            method=spec.method,
            path=spec.path,
            params=list(spec.query_params) or None,
        )
        try:
            response = await client.request(
                spec.method,
                spec.path,
                params=httpx.QueryParams(list(spec.query_params)) if spec.query_params else None,
                json=dict(spec.json_body) if spec.json_body is not None else None,
            )
        except httpx.HTTPError as exc:
            raise ExternalServiceError(str(exc) or type(exc).__name__) from exc

        if response.is_error:
            raise ExternalServiceError(
                _error_detail(response), status_code=response.status_code
            )

        try:
            return response.json()
        except ValueError as exc:
            raise ExternalServiceError(
                f"Archive returned invalid JSON for {spec.path}",
                status_code=response.status_code,
            ) from exc


def _error_detail(response: httpx.Response) -> str:
    """Pick the most useful message out of an error response."""

    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        for key in ("message", "error", "detail"):
            value = payload.get(key)
            if value:
                return str(value)

    return f"Request failed with status code {response.status_code}"
