"""Authentication — token storage, expiry and refresh."""

from autopilot.auth.claims import ClaimReader, read_claims
from autopilot.auth.embedded import AUTHENTICATION_TIMEOUT, HostChannel, HostTokenRefresher
from autopilot.auth.models import AuthToken, StoredToken, TokenInfo
from autopilot.auth.storage import (
    FileTokenStorage,
    MemoryTokenStorage,
    StorageResult,
    TokenStorage,
    storage_key,
)
from autopilot.auth.token_manager import TokenManager

__all__ = [
    "AUTHENTICATION_TIMEOUT",
    "AuthToken",
    "ClaimReader",
    "FileTokenStorage",
    "HostChannel",
    "HostTokenRefresher",
    "MemoryTokenStorage",
    "StorageResult",
    "StoredToken",
    "TokenInfo",
    "TokenManager",
    "TokenStorage",
    "read_claims",
    "storage_key",
]
