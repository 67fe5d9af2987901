"""Shared fixtures for the autopilot test suite (no network required)."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from autopilot.auth import TokenManager
from autopilot.core.config import AutopilotConfig
from autopilot.core.http import ApiClient

BASE_URL = "https://cloud.example.com"
TENANT_URL = f"{BASE_URL}/acme/default"


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture
def secret_config():
    return AutopilotConfig(
        base_url=BASE_URL,
        org_name="acme",
        tenant_name="default",
        secret="pat-123",
        max_retries=2,
    )


@pytest.fixture
def oauth_config():
    return AutopilotConfig(
        base_url=BASE_URL,
        org_name="acme",
        tenant_name="default",
        client_id="client-1",
        redirect_uri="http://localhost:8080/callback",
        scope="OR.Assets OR.Queues",
    )


class FakeBackend:
    """Records every request and answers it with *handler*."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture
def make_api(secret_config):
    """Build an ``ApiClient`` authenticated with a secret, backed by *handler*."""

    def _make(
        handler, config: AutopilotConfig | None = None, headers: dict[str, str] | None = None
    ) -> tuple[ApiClient, FakeBackend]:
        cfg = config or secret_config
        backend = FakeBackend(handler)
        http = backend.client()
        tokens = TokenManager(cfg, http)
        tokens.authenticate_with_secret(cfg.secret or "pat-123")
        return ApiClient(cfg, tokens, http, headers=headers), backend

    return _make
