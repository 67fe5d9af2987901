"""AutopilotClient — one authenticated session against a tenant."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import httpx
import structlog

from autopilot.auth import ClaimReader, HostChannel, TokenInfo, TokenManager, TokenStorage
from autopilot.core.config import AutopilotConfig
from autopilot.core.http import ApiClient
from autopilot.errors import AuthenticationError
from autopilot.services import (
    AssetService,
    BucketService,
    EntityService,
    ProcessInstanceService,
    QueueService,
    TaskService,
)

log = structlog.get_logger("autopilot.client")

USER_AGENT = "autopilot-sdk-python"


class AutopilotClient:
    """Entry point of the SDK.

    Each instance owns its own token manager, so several clients with
    different credentials can coexist in one process::

        async with AutopilotClient(AutopilotConfig.from_env()) as client:
            client.initialize()
            page = await client.assets.get_all(page_size=20)
    """

    def __init__(
        self,
        config: AutopilotConfig,
        *,
        storage: TokenStorage | None = None,
        http_client: httpx.AsyncClient | None = None,
        host_channel: HostChannel | None = None,
    ) -> None:
        self.config = config
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=config.timeout)
        self._embedded = host_channel is not None

        self.tokens = TokenManager(config, self._http, storage=storage, host_channel=host_channel)
        self.api = ApiClient(
            config, self.tokens, self._http, headers={"User-Agent": USER_AGENT}
        )

        self.assets = AssetService(self.api)
        self.queues = QueueService(self.api)
        self.tasks = TaskService(self.api)
        self.entities = EntityService(self.api)
        self.buckets = BucketService(self.api)
        self.process_instances = ProcessInstanceService(self.api)

    @classmethod
    def from_env(cls, **kwargs: Any) -> AutopilotClient:
        return cls(AutopilotConfig.from_env(), **kwargs)

    # ── authentication ─────────────────────────────────────────────────────

    def initialize(self) -> None:
        """Authenticate from the configuration.

        Uses the configured secret when there is one, otherwise restores an
        OAuth token from storage. Embedded clients fetch their first token
        from the host lazily.
        """
        if self._embedded:
            log.info("client.initialized", mode="embedded")
            return
        if self.config.secret:
            self.tokens.authenticate_with_secret(self.config.secret)
            log.info("client.initialized", mode="secret")
            return
        if self.tokens.load_from_storage():
            log.info("client.initialized", mode="oauth")
            return
        raise AuthenticationError(
            "no credentials available: configure a secret or sign in to obtain an OAuth token",
            status_code=401,
        )

    def is_authenticated(self) -> bool:
        return self.tokens.has_valid_token()

    def set_oauth_token(
        self,
        access_token: str,
        *,
        refresh_token: str | None = None,
        expires_in: int | None = None,
    ) -> None:
        """Adopt an OAuth token obtained outside the SDK.

        Without *expires_in* the expiry is taken from the token's ``exp``
        claim, when it has one.
        """
        if not access_token:
            raise AuthenticationError("access_token must not be empty")
        if expires_in is not None:
            expires_at = datetime.now(timezone.utc) + timedelta(seconds=expires_in)
        else:
            reader = ClaimReader.from_token(access_token)
            expires_at = reader.expires_at if reader else None
        self.tokens.set_token(
            TokenInfo(
                token=access_token,
                type="oauth",
                expires_at=expires_at,
                refresh_token=refresh_token,
            )
        )

    def get_user_info(self) -> dict[str, Any]:
        """Identity claims of the current token; empty for opaque tokens."""
        token = self.tokens.get_token()
        if token is None:
            raise AuthenticationError("not authenticated", status_code=401)
        reader = ClaimReader.from_token(token)
        return reader.as_dict() if reader else {}

    def logout(self) -> None:
        self.tokens.clear_token()

    # ── lifecycle ──────────────────────────────────────────────────────────

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> AutopilotClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
