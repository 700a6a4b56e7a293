"""IP-based fixed-window rate limiting middleware."""

from __future__ import annotations

from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from usg_api.api.access import limiter_for
from usg_api.api.responses import failure
from usg_api.core.logging import get_logger
from usg_api.core.network import get_client_ip
from usg_api.core.rate_limiter import AcquireResult

logger = get_logger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Enforce per-IP request limits.

    Which limiter applies is decided by :func:`usg_api.api.access.limiter_for`:
    feedback submissions, admin operations, identity lookups and everything
    else each have their own budget.  Profiles flagged ``skip_successful``
    only charge requests that end in an error response.  Limiters live on
    ``request.app.state.rate_limiters``.
    """

    async def dispatch(self, request: Request, call_next: Callable[..., Response]) -> Response:
        name = limiter_for(request.method, request.url.path)
        limiters = getattr(request.app.state, "rate_limiters", None)
        if name is None or not limiters or request.method == "OPTIONS":
            return await call_next(request)

        limiter = limiters[name]
        settings = getattr(request.app.state, "settings", None)
        trusted = settings.trusted_proxy_list if settings else ()
        client_ip = get_client_ip(request, trusted_proxies=trusted)

        result = await limiter.acquire(client_ip)
        headers = _rate_limit_headers(result)

        if not result.allowed:
            logger.warning(
                "Rate limit exceeded: limiter=%s ip=%s path=%s",
                name,
                client_ip,
                request.url.path,
            )
            headers["Retry-After"] = str(result.reset_seconds)
            return failure(429, limiter.profile.message, headers=headers)

        response = await call_next(request)
        if limiter.profile.skip_successful and response.status_code < 400:
            await limiter.release(client_ip)
            headers["RateLimit-Remaining"] = str(min(result.remaining + 1, result.limit))
        response.headers.update(headers)
        return response


def _rate_limit_headers(result: AcquireResult) -> dict[str, str]:
    return {
        "RateLimit-Limit": str(result.limit),
        "RateLimit-Remaining": str(result.remaining),
        "RateLimit-Reset": str(result.reset_seconds),
    }
