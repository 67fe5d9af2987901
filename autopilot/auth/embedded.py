"""Token refresh delegated to an embedding host application.

When the SDK runs inside a host that owns the user's session, the host is
the only party able to mint tokens. The SDK asks it over a
:class:`HostChannel` and gives up after :data:`AUTHENTICATION_TIMEOUT`.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any, Protocol

import structlog

from autopilot.auth.models import TokenInfo
from autopilot.errors import AuthenticationError

log = structlog.get_logger("autopilot.auth")

AUTHENTICATION_TIMEOUT = 8.0  # seconds


class HostChannel(Protocol):
    """Message channel to the embedding host."""

    async def request_token(self, client_id: str | None, scope: str | None) -> Mapping[str, Any] | None:
        """Ask the host for a fresh token.

        Returns ``{"access_token": ..., "expires_at": ...}`` or ``None`` when
        the host declines.
        """


def _parse_expiry(value: Any) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    if isinstance(value, str):
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    raise ValueError(f"unsupported expiry value: {value!r}")


class HostTokenRefresher:
    """Single-flight token refresh through the embedding host.

    A token without an expiry counts as expired here: the host always
    issues expiring tokens, so a missing expiry means the SDK has not been
    handed one yet.
    """

    def __init__(
        self,
        channel: HostChannel,
        on_token_refreshed: Callable[[TokenInfo], None],
        *,
        client_id: str | None = None,
        scope: str | None = None,
        timeout: float = AUTHENTICATION_TIMEOUT,
    ) -> None:
        self._channel = channel
        self._on_token_refreshed = on_token_refreshed
        self._client_id = client_id
        self._scope = scope
        self._timeout = timeout
        self._pending: asyncio.Task[str] | None = None

    @staticmethod
    def is_token_expired(token_info: TokenInfo | None) -> bool:
        if token_info is None or token_info.expires_at is None:
            return True
        return datetime.now(timezone.utc) >= token_info.expires_at

    @property
    def is_pending(self) -> bool:
        return self._pending is not None

    async def refresh_access_token(self, token_info: TokenInfo | None) -> str:
        """Return *token_info*'s token if still valid, else one from the host."""
        if token_info is not None and not self.is_token_expired(token_info):
            return token_info.token

        task = self._pending
        if task is None:
            task = asyncio.ensure_future(self._request())
            self._pending = task
            task.add_done_callback(self._request_done)
        return await asyncio.shield(task)

    def _request_done(self, task: asyncio.Task[str]) -> None:
        if self._pending is task:
            self._pending = None

    async def _request(self) -> str:
        try:
            content = await asyncio.wait_for(
                self._channel.request_token(self._client_id, self._scope),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            log.warning("auth.host_refresh_timeout", timeout=self._timeout)
            raise AuthenticationError("failed to fetch access token", status_code=401) from None
        except Exception as exc:
            log.warning("auth.host_refresh_failed", error=str(exc))
            raise AuthenticationError("failed to fetch access token", status_code=401) from exc

        access_token = content.get("access_token") if content else None
        if not access_token:
            raise AuthenticationError("failed to fetch access token", status_code=401)

        try:
            expires_at = _parse_expiry(content.get("expires_at"))
        except ValueError as exc:
            raise AuthenticationError("failed to fetch access token", status_code=401) from exc

        self._on_token_refreshed(TokenInfo(token=access_token, type="secret", expires_at=expires_at))
        log.info("auth.host_refresh_succeeded")
        return access_token
