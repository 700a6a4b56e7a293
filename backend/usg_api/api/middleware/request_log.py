from __future__ import annotations

import time
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from usg_api.core.logging import get_logger

logger = get_logger("api.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request with method, path, status code, and duration."""

    async def dispatch(self, request: Request, call_next: Callable[..., Response]) -> Response:
        start = time.perf_counter()
        response: Response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000

        user = getattr(request.state, "user", None)
        logger.info(
            "%s %s -> %d (%.1fms)%s",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            f" user={user.email}" if user is not None else "",
        )
        return response
