"""Async Python client for the Autopilot automation platform."""

from autopilot.auth import (
    FileTokenStorage,
    HostChannel,
    MemoryTokenStorage,
    TokenInfo,
    TokenManager,
    TokenStorage,
)
from autopilot.client import AutopilotClient
from autopilot.core.config import AutopilotConfig
from autopilot.core.http import ApiClient
from autopilot.core.logging import setup_logging
from autopilot.errors import (
    ApiError,
    AuthenticationError,
    AuthorizationError,
    AutopilotError,
    ConfigurationError,
    InvalidCursorError,
    InvalidParameterError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    ServerError,
    UnsupportedOperationError,
    ValidationError,
)
from autopilot.pagination import (
    NonPaginatedResponse,
    PaginatedResponse,
    PaginationConfig,
    PaginationType,
)

__version__ = "0.1.0"

__all__ = [
    "ApiClient",
    "ApiError",
    "AuthenticationError",
    "AuthorizationError",
    "AutopilotClient",
    "AutopilotConfig",
    "AutopilotError",
    "ConfigurationError",
    "FileTokenStorage",
    "HostChannel",
    "InvalidCursorError",
    "InvalidParameterError",
    "MemoryTokenStorage",
    "NetworkError",
    "NonPaginatedResponse",
    "NotFoundError",
    "PaginatedResponse",
    "PaginationConfig",
    "PaginationType",
    "RateLimitError",
    "ServerError",
    "TokenInfo",
    "TokenManager",
    "TokenStorage",
    "UnsupportedOperationError",
    "ValidationError",
    "setup_logging",
]
