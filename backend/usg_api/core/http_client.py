from __future__ import annotations

import asyncio
import random
from typing import Any, Optional

import aiohttp

from usg_api.core.exceptions import (
    NetworkError,
    UpstreamAuthError,
    UpstreamError,
    UpstreamServerError,
)
from usg_api.core.logging import get_logger

logger = get_logger(__name__)

_DEFAULT_TIMEOUT_SECONDS: int = 10
_DEFAULT_MAX_RETRIES: int = 3
_MAX_BACKOFF_SECONDS: float = 8.0
_USER_AGENT: str = "usg-api/1.0"


class HttpClient:
    """Async HTTP client wrapping :class:`aiohttp.ClientSession`.

    Features:
    - Automatic JSON response parsing
    - Exponential back-off retry with jitter for 5xx and connection errors
    - Error mapping (401/403 -> ``UpstreamAuthError``, 5xx -> ``UpstreamServerError``)
    """

    def __init__(
        self,
        *,
        timeout_seconds: int = _DEFAULT_TIMEOUT_SECONDS,
        max_retries: int = _DEFAULT_MAX_RETRIES,
    ) -> None:
        self._timeout_seconds = timeout_seconds
        self._max_retries = max_retries
        self._session: Optional[aiohttp.ClientSession] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Create the underlying :class:`aiohttp.ClientSession`."""
        if self._session is not None and not self._session.closed:
            return

        timeout = aiohttp.ClientTimeout(total=self._timeout_seconds)
        headers = {
            "User-Agent": _USER_AGENT,
            "Accept": "application/json",
        }
        self._session = aiohttp.ClientSession(timeout=timeout, headers=headers)
        logger.info("HttpClient session started (timeout=%ds)", self._timeout_seconds)

    async def close(self) -> None:
        """Close the underlying session."""
        if self._session is not None and not self._session.closed:
            await self._session.close()
            logger.info("HttpClient session closed")
        self._session = None

    # ------------------------------------------------------------------
    # Public request helpers
    # ------------------------------------------------------------------

    async def get(self, url: str, **kwargs: Any) -> dict | str:
        return await self.request("GET", url, **kwargs)

    async def request(
        self,
        method: str,
        url: str,
        *,
        service: str = "unknown",
        **kwargs: Any,
    ) -> dict | str:
        """Execute an HTTP request with exponential back-off retry.

        ``service`` names the upstream in error context.  Remaining keyword
        arguments are forwarded to :meth:`aiohttp.ClientSession.request`.

        Raises
        ------
        UpstreamAuthError
            On HTTP 401/403; never retried.
        UpstreamError
            On any other 4xx; never retried.
        UpstreamServerError
            On HTTP 5xx after all retries are exhausted.
        NetworkError
            On connection/timeout failures after all retries are exhausted.
        """
        if self._session is None or self._session.closed:
            raise NetworkError(
                service=service,
                message="HttpClient session is not started. Call start() first.",
            )

        last_exception: Exception | None = None

        for attempt in range(1, self._max_retries + 1):
            try:
                return await self._do_request(method, url, service, attempt, **kwargs)
            except (UpstreamServerError, NetworkError) as exc:
                last_exception = exc
                if attempt < self._max_retries:
                    backoff = self._backoff_seconds(attempt)
                    logger.warning(
                        "%s %s attempt %d/%d failed (%s), retrying in %.1fs",
                        method,
                        url,
                        attempt,
                        self._max_retries,
                        exc.message,
                        backoff,
                    )
                    await asyncio.sleep(backoff)

        logger.error("%s %s failed after %d attempts", method, url, self._max_retries)
        raise last_exception  # type: ignore[misc]

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    async def _do_request(
        self,
        method: str,
        url: str,
        service: str,
        attempt: int,
        **kwargs: Any,
    ) -> dict | str:
        """Single request attempt with response classification."""
        assert self._session is not None

        try:
            async with self._session.request(method, url, **kwargs) as resp:
                status = resp.status
                logger.debug("%s %s -> %d (attempt %d)", method, url, status, attempt)

                if status in (401, 403):
                    raise UpstreamAuthError(
                        service=service,
                        status_code=status,
                        message=f"Authentication rejected on {method} {url}",
                    )

                if status >= 500:
                    body_preview = await self._safe_text(resp, max_len=200)
                    raise UpstreamServerError(
                        service=service,
                        status_code=status,
                        message=f"Server error {status} on {method} {url}: {body_preview}",
                    )

                if status >= 400:
                    body_preview = await self._safe_text(resp, max_len=200)
                    raise UpstreamError(
                        service=service,
                        status_code=status,
                        message=f"Client error {status} on {method} {url}: {body_preview}",
                    )

                return await self._parse_response(resp)

        except aiohttp.ClientError as exc:
            raise NetworkError(
                service=service,
                message=f"Connection error on {method} {url}: {exc}",
            ) from exc
        except asyncio.TimeoutError as exc:
            raise NetworkError(
                service=service,
                message=f"Timed out on {method} {url}",
            ) from exc

    @staticmethod
    async def _parse_response(resp: aiohttp.ClientResponse) -> dict | str:
        """Return JSON dict if content-type is JSON, else raw text."""
        content_type = resp.headers.get("Content-Type", "")
        if "application/json" in content_type:
            return await resp.json()  # type: ignore[return-value]
        return await resp.text()

    @staticmethod
    async def _safe_text(resp: aiohttp.ClientResponse, *, max_len: int = 200) -> str:
        text = await resp.text()
        if len(text) > max_len:
            return text[:max_len] + "..."
        return text

    def _backoff_seconds(self, attempt: int) -> float:
        """Exponential back-off with jitter, capped at ``_MAX_BACKOFF_SECONDS``."""
        base = min(0.25 * 2 ** attempt, _MAX_BACKOFF_SECONDS)
        jitter = random.uniform(0, base * 0.5)  # noqa: S311
        return min(base + jitter, _MAX_BACKOFF_SECONDS)
