"""Run the DANDI query MCP server.

Uses stdio by default so MCP clients can launch it as a subprocess; set
``MCP_TRANSPORT=streamable-http`` to serve over HTTP on ``MCP_HOST:MCP_PORT``.
"""

from __future__ import annotations

from dandi_query.core.config import get_settings
from dandi_query.core.logging_config import configure_logging, get_logger
from dandi_query.mcp.server import create_server


def main() -> None:
    settings = get_settings()
    configure_logging(settings)
    logger = get_logger(__name__)

    logger.info(
        "dandi_query_startup",
        env=settings.app_env,
        api_base=settings.api_base_url,
        transport=settings.mcp_transport,
    )

    server = create_server(settings)
    try:
        if settings.mcp_transport == "stdio":
            server.run(transport="stdio")
        else:
            server.run(
                transport=settings.mcp_transport,
                host=settings.mcp_host,
                port=settings.mcp_port,
            )
    except KeyboardInterrupt:
        # In-flight requests are abandoned.
        logger.info("dandi_query_interrupted")
    logger.info("dandi_query_shutdown")


if __name__ == "__main__":
    main()
