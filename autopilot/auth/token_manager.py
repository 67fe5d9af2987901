"""TokenManager — credential store and single-flight OAuth refresh."""

from __future__ import annotations

import asyncio
import json
from datetime import datetime, timedelta, timezone

import httpx
import pydantic
import structlog

from autopilot.auth.embedded import HostChannel, HostTokenRefresher
from autopilot.auth.models import AuthToken, StoredToken, TokenInfo
from autopilot.auth.storage import TokenStorage, guarded, storage_key
from autopilot.core.config import AutopilotConfig
from autopilot.endpoints import IDENTITY_TOKEN
from autopilot.errors import AuthenticationError

log = structlog.get_logger("autopilot.auth")


def _now() -> datetime:
    return datetime.now(timezone.utc)


class TokenManager:
    """Holds the credential of one SDK instance and keeps it fresh.

    OAuth tokens are mirrored to *storage* (when given) under a key derived
    from the client id; secret tokens live in memory only. At most one
    refresh request is in flight per instance: concurrent callers of
    :meth:`refresh_access_token` share its result.
    """

    def __init__(
        self,
        config: AutopilotConfig,
        http_client: httpx.AsyncClient,
        *,
        storage: TokenStorage | None = None,
        is_oauth: bool | None = None,
        host_channel: HostChannel | None = None,
    ) -> None:
        self._config = config
        self._http = http_client
        self._storage = storage
        self._host_refresher: HostTokenRefresher | None = None
        if host_channel is not None:
            self._host_refresher = HostTokenRefresher(
                host_channel,
                self.set_token,
                client_id=config.client_id,
                scope=config.scope,
            )
        # Tokens handed over by an embedding host are never persisted here.
        if self._host_refresher is not None:
            self._is_oauth = False
        elif is_oauth is None:
            self._is_oauth = config.has_oauth_config and not config.secret
        else:
            self._is_oauth = is_oauth
        self._current: TokenInfo | None = None
        self._refresh_task: asyncio.Task[AuthToken] | None = None

    # ── store ─────────────────────────────────────────────────────────────

    @property
    def is_oauth(self) -> bool:
        return self._is_oauth

    @property
    def is_refreshing(self) -> bool:
        return self._refresh_task is not None

    def _persists(self) -> bool:
        return self._is_oauth and self._storage is not None and bool(self._config.client_id)

    def _storage_key(self) -> str:
        return storage_key(self._config.client_id or "")

    @staticmethod
    def is_token_expired(token_info: TokenInfo | None) -> bool:
        """True iff *token_info* has an expiry that has passed.

        Tokens without ``expires_at`` (secrets, unknown expiry) never expire.
        """
        if token_info is None or token_info.expires_at is None:
            return False
        return _now() >= token_info.expires_at

    def set_token(self, token_info: TokenInfo) -> None:
        """Make *token_info* the current credential.

        A non-OAuth token also drops any OAuth token persisted earlier.
        """
        self._current = token_info
        if not self._persists():
            return
        storage = self._storage
        key = self._storage_key()
        if token_info.type == "oauth":
            guarded(
                "set_item",
                lambda: storage.set_item(key, StoredToken.from_token_info(token_info).to_json()),
            )
        else:
            guarded("remove_item", lambda: storage.remove_item(key))

    def authenticate_with_secret(self, secret: str) -> None:
        """Use a long-lived secret token; it is never persisted and never expires."""
        if not secret:
            raise AuthenticationError("secret must not be empty")
        self.set_token(TokenInfo(token=secret, type="secret"))

    def load_from_storage(self) -> bool:
        """Restore a persisted OAuth token.

        Returns ``False`` (and removes the entry) when the stored value is
        corrupt or already expired, or when nothing usable is stored.
        """
        if not self._persists():
            return False
        storage = self._storage
        key = self._storage_key()

        result = guarded("get_item", lambda: storage.get_item(key))
        if not result.ok or not result.value:
            return False

        try:
            token_info = StoredToken.model_validate_json(result.value).to_token_info()
        except pydantic.ValidationError as exc:
            log.warning("auth.stored_token_invalid", error_count=exc.error_count())
            guarded("remove_item", lambda: storage.remove_item(key))
            return False

        if self.is_token_expired(token_info):
            log.info("auth.stored_token_expired")
            guarded("remove_item", lambda: storage.remove_item(key))
            return False

        self._current = token_info
        return True

    def get_token_info(self) -> TokenInfo | None:
        return self._current

    def get_token(self) -> str | None:
        return self._current.token if self._current else None

    def has_valid_token(self) -> bool:
        if self._current is None:
            return False
        return not self.is_token_expired(self._current)

    def clear_token(self) -> None:
        """Forget the current credential, including its persisted copy."""
        self._current = None
        if self._persists():
            storage = self._storage
            key = self._storage_key()
            guarded("remove_item", lambda: storage.remove_item(key))

    # ── refresh ───────────────────────────────────────────────────────────

    async def get_valid_token(self) -> str:
        """Return a usable access token, refreshing it first if it expired.

        With an embedding host, the host is asked whenever the current token
        is missing or expired. Otherwise raises :class:`AuthenticationError`
        when no token was established or the refresh fails; the caller must
        re-authenticate in that case.
        """
        token_info = self._current
        if self._host_refresher is not None:
            return await self._host_refresher.refresh_access_token(token_info)

        if token_info is None:
            raise AuthenticationError(
                "no authentication token available; initialize the client first",
                status_code=401,
            )

        if token_info.type == "secret" or not self.is_token_expired(token_info):
            return token_info.token

        try:
            token = await self.refresh_access_token()
        except (AuthenticationError, httpx.HTTPError) as exc:
            raise AuthenticationError(
                f"token refresh failed: {exc}. Please re-authenticate.",
                status_code=401,
            ) from exc
        return token.access_token

    async def refresh_access_token(self) -> AuthToken:
        """Exchange the refresh token for a new access token.

        Joins the refresh already in flight, if any, instead of sending a
        second request: refresh tokens are single-use on the server.
        """
        task = self._refresh_task
        if task is None:
            task = asyncio.ensure_future(self._do_refresh())
            self._refresh_task = task
            task.add_done_callback(self._refresh_done)
        else:
            log.debug("auth.refresh_joined")
        return await asyncio.shield(task)

    def _refresh_done(self, task: asyncio.Task[AuthToken]) -> None:
        # Runs before any awaiter resumes, so the next caller starts a new refresh.
        if self._refresh_task is task:
            self._refresh_task = None

    async def _do_refresh(self) -> AuthToken:
        if not self._config.has_oauth_config:
            raise AuthenticationError("token refresh is only available for OAuth clients")

        token_info = self._current
        if token_info is None or not token_info.refresh_token:
            raise AuthenticationError(
                "no refresh token available; the user must re-authenticate",
                status_code=401,
            )

        log.info("auth.refresh_started", client_id=self._config.client_id)
        response = await self._http.post(
            f"{self._config.org_url}/{IDENTITY_TOKEN}",
            data={
                "grant_type": "refresh_token",
                "client_id": self._config.client_id,
                "refresh_token": token_info.refresh_token,
            },
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )

        if not response.is_success:
            try:
                error_data = response.json()
            except ValueError:
                error_data = {"message": response.reason_phrase}
            log.error("auth.refresh_failed", status=response.status_code)
            self.clear_token()
            raise AuthenticationError(
                f"failed to refresh access token: {json.dumps(error_data)}",
                status_code=response.status_code,
                payload=error_data,
            )

        try:
            token = AuthToken.model_validate(response.json())
        except (ValueError, pydantic.ValidationError) as exc:
            self.clear_token()
            raise AuthenticationError("malformed token refresh response") from exc

        self.set_token(
            TokenInfo(
                token=token.access_token,
                type="oauth",
                expires_at=_now() + timedelta(seconds=token.expires_in),
                refresh_token=token.refresh_token,
            )
        )
        log.info("auth.refresh_succeeded", expires_in=token.expires_in)
        return token
