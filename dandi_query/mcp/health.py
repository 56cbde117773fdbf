"""Health check route served alongside the HTTP transport."""

from datetime import datetime, timezone

from starlette.requests import Request
from starlette.responses import JSONResponse


async def health_check(request: Request) -> JSONResponse:
    return JSONResponse(
        {
            "status": "ok",
            "timestamp": datetime.now(tz=timezone.utc).isoformat(),
        }
    )
