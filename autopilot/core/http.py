"""Authenticated async HTTP transport for tenant-scoped REST calls."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

import httpx
import structlog

from autopilot.auth.token_manager import TokenManager
from autopilot.core.config import AutopilotConfig
from autopilot.errors import NetworkError, error_from_status

log = structlog.get_logger("autopilot.http")

_RETRY_STATUS = frozenset({429, 502, 503, 504})
_RETRY_BASE_DELAY = 0.5  # seconds


def _error_message(status_code: int, payload: Any, reason: str) -> str:
    if isinstance(payload, Mapping):
        for key in ("message", "errorMessage", "error_description", "error", "title"):
            value = payload.get(key)
            if isinstance(value, str) and value:
                return f"{status_code}: {value}"
    return f"{status_code}: {reason or 'request failed'}"


class ApiClient:
    """Thin wrapper around :class:`httpx.AsyncClient`.

    Every request carries a bearer token obtained from the
    :class:`TokenManager`. Non-success responses raise the matching
    :class:`~autopilot.errors.ApiError` subclass; transport failures raise
    :class:`~autopilot.errors.NetworkError`. GET requests are retried on
    429 / 502 / 503 / 504 with exponential backoff.
    """

    def __init__(
        self,
        config: AutopilotConfig,
        token_manager: TokenManager,
        http_client: httpx.AsyncClient,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self._config = config
        self._tokens = token_manager
        self._http = http_client
        self._default_headers: dict[str, str] = dict(headers or {})

    async def get_valid_token(self) -> str:
        return await self._tokens.get_valid_token()

    def build_url(self, path: str) -> str:
        return f"{self._config.tenant_url}/{path.lstrip('/')}"

    async def _headers(self, extra: Mapping[str, str] | None) -> dict[str, str]:
        token = await self.get_valid_token()
        headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        headers.update(self._default_headers)
        if extra:
            headers.update(extra)
        return headers

    # ── public ─────────────────────────────────────────────────────────────

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        body: Any = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Returns ``None`` for empty bodies and 204 responses.
        """
        method = method.upper()
        url = self.build_url(path)
        request_headers = await self._headers(headers)
        attempts = self._config.max_retries + 1 if method == "GET" else 1

        for attempt in range(attempts):
            try:
                response = await self._http.request(
                    method,
                    url,
                    params=dict(params) if params else None,
                    headers=request_headers,
                    json=body,
                )
            except httpx.TransportError as exc:
                log.warning("http.transport_error", method=method, path=path, error=str(exc))
                raise NetworkError(f"{method} {path} failed: {exc}") from exc

            if response.status_code in _RETRY_STATUS and attempt < attempts - 1:
                delay = _RETRY_BASE_DELAY * (2**attempt)
                log.warning(
                    "http.retry",
                    method=method,
                    path=path,
                    status=response.status_code,
                    attempt=attempt + 1,
                    delay=delay,
                )
                await asyncio.sleep(delay)
                continue
            break

        log.debug("http.response", method=method, path=path, status=response.status_code)
        return self._decode(response)

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        payload: Any = None
        if response.status_code != 204 and response.content:
            try:
                payload = response.json()
            except ValueError:
                payload = response.text

        if not response.is_success:
            raise error_from_status(
                response.status_code,
                _error_message(response.status_code, payload, response.reason_phrase),
                payload,
            )
        return payload

    async def get(
        self,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        return await self.request("GET", path, params=params, headers=headers)

    async def post(self, path: str, body: Any = None, **kwargs: Any) -> Any:
        return await self.request("POST", path, body=body, **kwargs)

    async def put(self, path: str, body: Any = None, **kwargs: Any) -> Any:
        return await self.request("PUT", path, body=body, **kwargs)

    async def patch(self, path: str, body: Any = None, **kwargs: Any) -> Any:
        return await self.request("PATCH", path, body=body, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self.request("DELETE", path, **kwargs)
