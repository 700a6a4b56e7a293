from __future__ import annotations

from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from usg_api.api.access import Access, classify
from usg_api.api.responses import failure
from usg_api.core.exceptions import UnauthorizedError
from usg_api.core.logging import get_logger
from usg_api.services.auth import extract_bearer_token

logger = get_logger(__name__)

_ADMIN_REQUIRED = "Admin access required. Only UNC emails are allowed."


class AuthMiddleware(BaseHTTPMiddleware):
    """Resolves the caller's identity and enforces the route's access level.

    The access level comes from :func:`usg_api.api.access.classify`:

    - ``EXEMPT`` paths pass straight through.
    - ``PUBLIC`` paths attach ``request.state.user`` when a valid bearer
      token is present, and otherwise continue anonymously.
    - ``AUTHENTICATED`` paths require a valid token (401 otherwise).
    - ``ADMIN`` paths additionally require an email on the admin domain
      (403 otherwise).

    The ``AuthService`` is resolved lazily from ``request.app.state`` so the
    middleware can be registered before the lifespan context has run.
    """

    async def dispatch(self, request: Request, call_next: Callable[..., Response]) -> Response:
        request.state.user = None
        access = classify(request.method, request.url.path)

        if access is Access.EXEMPT:
            return await call_next(request)

        auth_service = getattr(request.app.state, "auth_service", None)
        if auth_service is None:
            return failure(503, "Service initializing")

        token = extract_bearer_token(request.headers.get("authorization"))

        if access is Access.PUBLIC:
            if token:
                try:
                    request.state.user = await auth_service.verify_token(token)
                except UnauthorizedError:
                    logger.debug("Ignoring invalid token on public route %s", request.url.path)
            return await call_next(request)

        if token is None:
            return failure(401, "No token provided")

        try:
            user = await auth_service.verify_token(token)
        except UnauthorizedError as exc:
            logger.warning(
                "Rejected token on %s %s: %s",
                request.method,
                request.url.path,
                exc.message,
            )
            return failure(401, exc.message)

        request.state.user = user

        if access is Access.ADMIN and not auth_service.is_admin(user):
            logger.warning(
                "Non-admin %s denied on %s %s",
                user.email,
                request.method,
                request.url.path,
            )
            return failure(403, _ADMIN_REQUIRED)

        return await call_next(request)
