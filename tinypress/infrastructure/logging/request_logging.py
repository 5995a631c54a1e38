"""HTTP middleware that logs one line per request with request-scoped fields."""

import logging
import time
from collections.abc import Awaitable, Callable

from fastapi import Request, Response

logger = logging.getLogger("tinypress.requests")


def request_fields(request: Request) -> dict[str, str]:
    """Key-value fields identifying the request."""
    return {
        "method": request.method,
        "path": request.url.path,
        "remote_addr": request.client.host if request.client else "",
        "user_agent": request.headers.get("user-agent", ""),
    }


async def log_requests(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "Request handled",
        extra={
            **request_fields(request),
            "status": response.status_code,
            "duration_ms": round(elapsed_ms, 2),
        },
    )
    return response
