from __future__ import annotations

from typing import Optional

from usg_api.core.config import Settings
from usg_api.core.constants import AUTH_USER_ENDPOINT
from usg_api.core.exceptions import (
    UnauthorizedError,
    UpstreamAuthError,
    UpstreamError,
)
from usg_api.core.http_client import HttpClient
from usg_api.core.logging import get_logger
from usg_api.models.auth import AuthUser

logger = get_logger(__name__)

_BEARER_PREFIX = "Bearer "


def extract_bearer_token(header_value: Optional[str]) -> Optional[str]:
    """Return the token from an ``Authorization: Bearer <token>`` header."""
    if not header_value or not header_value.startswith(_BEARER_PREFIX):
        return None
    token = header_value[len(_BEARER_PREFIX):].strip()
    return token or None


class AuthService:
    """Verifies bearer tokens against the Supabase auth endpoint.

    Tokens are never decoded locally.  Each verification is a
    ``GET {SUPABASE_URL}/auth/v1/user`` carrying the token; the identity in
    the response is the only thing trusted.
    """

    def __init__(self, settings: Settings, http_client: HttpClient) -> None:
        self._settings = settings
        self._http = http_client
        self._admin_domain = settings.admin_email_domain

        if not settings.supabase_url:
            logger.warning(
                "SUPABASE_URL is not set; bearer tokens cannot be verified "
                "and admin routes will reject every request"
            )

    @property
    def enabled(self) -> bool:
        return bool(self._settings.supabase_url)

    @property
    def admin_email_domain(self) -> str:
        return self._admin_domain

    async def verify_token(self, token: str) -> AuthUser:
        """Return the identity behind *token* or raise ``UnauthorizedError``."""
        if not self.enabled:
            raise UnauthorizedError("Invalid or expired token")

        url = self._settings.supabase_url.rstrip("/") + AUTH_USER_ENDPOINT
        headers = {"Authorization": f"{_BEARER_PREFIX}{token}"}
        if self._settings.supabase_service_key:
            headers["apikey"] = self._settings.supabase_service_key

        try:
            payload = await self._http.get(url, service="supabase-auth", headers=headers)
        except UpstreamAuthError as exc:
            logger.info("Token rejected by auth service (%s)", exc.status_code)
            raise UnauthorizedError("Invalid or expired token") from exc
        except UpstreamError as exc:
            logger.warning("Auth service unavailable: %s", exc.message)
            raise UnauthorizedError("Authentication failed") from exc

        if not isinstance(payload, dict) or not payload.get("id"):
            raise UnauthorizedError("Invalid or expired token")

        return AuthUser(
            id=str(payload["id"]),
            email=payload.get("email"),
            role=payload.get("role"),
        )

    def is_admin(self, user: Optional[AuthUser]) -> bool:
        return user is not None and user.has_email_suffix(self._admin_domain)
