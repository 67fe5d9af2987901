"""Tests for ApiClient: auth header, URL building, error mapping and retry."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from autopilot.auth import TokenManager
from autopilot.core.http import ApiClient
from autopilot.errors import (
    ApiError,
    AuthenticationError,
    AuthorizationError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    ServerError,
    ValidationError,
)


def _sequence(*responses: httpx.Response):
    pending = list(responses)

    def handler(request):
        return pending.pop(0) if len(pending) > 1 else pending[0]

    return handler


# ── request shape ─────────────────────────────────────────────────────────


class TestRequest:
    @pytest.mark.anyio
    async def test_url_and_headers(self, make_api):
        api, backend = make_api(lambda r: httpx.Response(200, json={"ok": True}))

        result = await api.get(
            "orchestrator_/odata/Assets",
            params={"$top": 1},
            headers={"X-OrganizationUnitId": "3"},
        )

        assert result == {"ok": True}
        request = backend.last
        assert request.method == "GET"
        assert request.url.path == "/acme/default/orchestrator_/odata/Assets"
        assert request.url.params["$top"] == "1"
        assert request.headers["Authorization"] == "Bearer pat-123"
        assert request.headers["X-OrganizationUnitId"] == "3"
        assert request.headers["Content-Type"] == "application/json"

    @pytest.mark.anyio
    async def test_json_body(self, make_api):
        api, backend = make_api(lambda r: httpx.Response(201, json={"id": 9}))

        result = await api.post("datafabric_/api/x/insert", {"Name": "a"})

        assert result == {"id": 9}
        assert json.loads(backend.last.content) == {"Name": "a"}

    @pytest.mark.anyio
    @pytest.mark.parametrize("response", [httpx.Response(204), httpx.Response(200)])
    async def test_empty_body(self, make_api, response):
        api, _ = make_api(lambda r: response)
        assert await api.delete("x") is None

    @pytest.mark.anyio
    async def test_default_headers(self, make_api):
        api, backend = make_api(lambda r: httpx.Response(200, json={}), headers={"X-App": "tests"})
        await api.get("x")
        assert backend.last.headers["X-App"] == "tests"

    @pytest.mark.anyio
    async def test_no_token_fails_before_request(self, secret_config):
        requests = []
        http = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: requests.append(r)))
        api = ApiClient(secret_config, TokenManager(secret_config, http), http)

        with pytest.raises(AuthenticationError):
            await api.get("x")
        assert requests == []


# ── error mapping ─────────────────────────────────────────────────────────


class TestErrors:
    @pytest.mark.anyio
    @pytest.mark.parametrize(
        ("status", "error_cls"),
        [
            (400, ValidationError),
            (401, AuthenticationError),
            (403, AuthorizationError),
            (404, NotFoundError),
            (422, ValidationError),
            (429, RateLimitError),
            (500, ServerError),
            (503, ServerError),
            (418, ApiError),
        ],
    )
    async def test_status_mapping(self, make_api, status, error_cls):
        payload = {"message": "nope", "errorCode": 1002}
        api, _ = make_api(lambda r: httpx.Response(status, json=payload))

        with pytest.raises(error_cls) as exc_info:
            await api.post("x", {})

        assert type(exc_info.value) is error_cls
        assert exc_info.value.status_code == status
        assert exc_info.value.payload == payload
        assert "nope" in str(exc_info.value)

    @pytest.mark.anyio
    async def test_non_json_error_body(self, make_api):
        api, _ = make_api(lambda r: httpx.Response(500, text="upstream exploded"))
        with pytest.raises(ServerError) as exc_info:
            await api.post("x")
        assert exc_info.value.payload == "upstream exploded"

    @pytest.mark.anyio
    async def test_transport_error(self, make_api):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        api, _ = make_api(handler)
        with pytest.raises(NetworkError, match="connection refused"):
            await api.get("x")


# ── retry ─────────────────────────────────────────────────────────────────


class TestRetry:
    @pytest.mark.anyio
    async def test_get_retried_on_transient_status(self, make_api):
        api, backend = make_api(
            _sequence(
                httpx.Response(503),
                httpx.Response(429),
                httpx.Response(200, json={"value": []}),
            )
        )

        with patch("asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            result = await api.get("x")

        assert result == {"value": []}
        assert len(backend.requests) == 3
        assert [c.args[0] for c in mock_sleep.call_args_list] == [0.5, 1.0]

    @pytest.mark.anyio
    async def test_retry_exhausted(self, make_api):
        api, backend = make_api(lambda r: httpx.Response(502, json={"message": "bad gateway"}))

        with patch("asyncio.sleep", new_callable=AsyncMock):
            with pytest.raises(ServerError):
                await api.get("x")

        # max_retries=2 -> three attempts
        assert len(backend.requests) == 3

    @pytest.mark.anyio
    async def test_post_not_retried(self, make_api):
        api, backend = make_api(lambda r: httpx.Response(503))

        with patch("asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            with pytest.raises(ServerError):
                await api.post("x", {})

        assert len(backend.requests) == 1
        mock_sleep.assert_not_called()

    @pytest.mark.anyio
    async def test_client_errors_not_retried(self, make_api):
        api, backend = make_api(lambda r: httpx.Response(404))

        with pytest.raises(NotFoundError):
            await api.get("x")
        assert len(backend.requests) == 1
