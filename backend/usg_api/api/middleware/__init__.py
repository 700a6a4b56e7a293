from __future__ import annotations

from fastapi import FastAPI

from usg_api.api.middleware.auth import AuthMiddleware
from usg_api.api.middleware.rate_limit import RateLimitMiddleware
from usg_api.api.middleware.request_log import RequestLoggingMiddleware
from usg_api.api.middleware.security_headers import SecurityHeadersMiddleware


def register_middleware(app: FastAPI) -> None:
    """Register all middleware on *app* in the correct order.

    All middleware classes resolve their dependencies lazily from
    ``request.app.state`` at request time, so this function can be called
    during ``create_app`` before the lifespan context has run.

    Starlette processes middleware in **reverse** registration order (last
    added wraps outermost), so we register from innermost to outermost.
    CORS is added in ``create_app`` after this call.  The resulting onion is:

        CORS (outermost)
          -> SecurityHeaders
            -> RequestLogging
              -> RateLimit
                -> Auth (innermost, sets request.state.user)
    """
    app.add_middleware(AuthMiddleware)
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
