from __future__ import annotations

from typing import Any, Optional


class UsgApiError(Exception):
    """Base exception for the usg_api project."""

    def __init__(self, message: str = "") -> None:
        self.message = message
        super().__init__(self.message)


class ConfigError(UsgApiError):
    """Raised when configuration loading or validation fails."""


class DatabaseError(UsgApiError):
    """Raised when a datastore operation fails.

    ``code`` carries the backend's own error code (a PostgREST ``PGRSTxxx``
    value or a Postgres SQLSTATE) so the error formatter can classify it.
    """

    def __init__(
        self,
        message: str = "",
        code: Optional[str] = None,
        details: Any = None,
    ) -> None:
        self.code = code
        self.details = details
        super().__init__(message)


class RecordNotFoundError(DatabaseError):
    """Raised when a single-record read or an update matches no row."""

    def __init__(self, table: str, key: Any = None, code: Optional[str] = None) -> None:
        self.table = table
        self.key = key
        if key is None:
            message = f"Record not found in {table}"
        else:
            message = f"Record with id {key} not found in {table}"
        super().__init__(message, code=code)


class UpstreamError(UsgApiError):
    """Raised when a call to an external HTTP service fails."""

    def __init__(
        self,
        service: str,
        status_code: Optional[int] = None,
        message: str = "",
    ) -> None:
        self.service = service
        self.status_code = status_code
        super().__init__(message)


class UpstreamAuthError(UpstreamError):
    """Raised when the upstream service rejects the credentials (401/403)."""


class UpstreamServerError(UpstreamError):
    """Raised when the upstream service returns a 5xx error."""


class NetworkError(UpstreamError):
    """Raised when a network-level failure occurs (timeout, DNS, connection refused)."""


# ----------------------------------------------------------------------
# HTTP-facing errors
# ----------------------------------------------------------------------


class AppError(UsgApiError):
    """Operational error carrying the HTTP status it maps to."""

    status_code: int = 500

    def __init__(self, message: str = "", status_code: Optional[int] = None) -> None:
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationFailedError(AppError):
    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[list[dict[str, str]]] = None,
    ) -> None:
        self.details = details or []
        super().__init__(message)


class UnauthorizedError(AppError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized access") -> None:
        super().__init__(message)


class ForbiddenError(AppError):
    status_code = 403

    def __init__(self, message: str = "Access forbidden") -> None:
        super().__init__(message)


class NotFoundError(AppError):
    status_code = 404

    def __init__(self, resource: str = "Resource") -> None:
        super().__init__(f"{resource} not found")


class ConflictError(AppError):
    status_code = 409

    def __init__(self, message: str = "Resource conflict") -> None:
        super().__init__(message)

