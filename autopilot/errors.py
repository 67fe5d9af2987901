"""Exception hierarchy for the Autopilot SDK."""

from __future__ import annotations

from typing import Any


class AutopilotError(Exception):
    """Base SDK exception."""


class ConfigurationError(AutopilotError, ValueError):
    """Invalid or incomplete SDK configuration."""


class InvalidParameterError(AutopilotError, ValueError):
    """Malformed pagination input (non-positive page size or jump target)."""


class UnsupportedOperationError(AutopilotError):
    """Valid input that the target endpoint cannot honour."""


class InvalidCursorError(AutopilotError, ValueError):
    """Cursor cannot be decoded or belongs to another pagination type."""


class NetworkError(AutopilotError):
    """The request never produced an HTTP response."""


class ApiError(AutopilotError):
    """The backend answered with a non-success status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class AuthenticationError(ApiError):
    """No usable credential (-> HTTP 401)."""


class AuthorizationError(ApiError):
    """Credential lacks permission (-> HTTP 403)."""


class NotFoundError(ApiError):
    """Resource not found (-> HTTP 404)."""


class ValidationError(ApiError):
    """Request rejected as invalid (-> HTTP 400 / 422)."""


class RateLimitError(ApiError):
    """Too many requests (-> HTTP 429)."""


class ServerError(ApiError):
    """Backend failure (-> HTTP 5xx)."""


_STATUS_MAP: dict[int, type[ApiError]] = {
    400: ValidationError,
    401: AuthenticationError,
    403: AuthorizationError,
    404: NotFoundError,
    422: ValidationError,
    429: RateLimitError,
}


def error_from_status(status_code: int, message: str, payload: Any = None) -> ApiError:
    """Build the :class:`ApiError` subclass matching *status_code*."""
    cls = _STATUS_MAP.get(status_code)
    if cls is None:
        cls = ServerError if status_code >= 500 else ApiError
    return cls(message, status_code=status_code, payload=payload)
