"""SDK configuration, constructed directly or read from ``AUTOPILOT_*`` env vars."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from autopilot.errors import ConfigurationError

_ENV_PREFIX = "AUTOPILOT_"


@dataclass
class AutopilotConfig:
    """Connection and credential settings for one SDK instance.

    Either ``secret`` (a long-lived access token) or ``client_id`` (an OAuth
    client whose tokens are refreshed) must be set.
    """

    base_url: str
    org_name: str
    tenant_name: str
    secret: str | None = None
    client_id: str | None = None
    redirect_uri: str | None = None
    scope: str | None = None
    timeout: float = 30.0
    max_retries: int = 2

    def __post_init__(self) -> None:
        for name in ("base_url", "org_name", "tenant_name"):
            if not getattr(self, name):
                raise ConfigurationError(f"{name} is required")
        self.base_url = self.base_url.rstrip("/")
        if not self.secret and not self.client_id:
            raise ConfigurationError("either secret or client_id must be configured")
        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")
        if self.max_retries < 0:
            raise ConfigurationError(f"max_retries must be >= 0, got {self.max_retries}")

    @property
    def has_oauth_config(self) -> bool:
        return bool(self.client_id)

    @property
    def org_url(self) -> str:
        return f"{self.base_url}/{self.org_name}"

    @property
    def tenant_url(self) -> str:
        return f"{self.base_url}/{self.org_name}/{self.tenant_name}"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AutopilotConfig:
        """Build a config from ``AUTOPILOT_*`` environment variables.

        Reads ``AUTOPILOT_BASE_URL``, ``AUTOPILOT_ORG_NAME``,
        ``AUTOPILOT_TENANT_NAME``, ``AUTOPILOT_SECRET``,
        ``AUTOPILOT_CLIENT_ID``, ``AUTOPILOT_REDIRECT_URI``,
        ``AUTOPILOT_SCOPE``, ``AUTOPILOT_TIMEOUT`` and
        ``AUTOPILOT_MAX_RETRIES``.
        """
        env = os.environ if environ is None else environ

        def _get(name: str) -> str | None:
            return env.get(_ENV_PREFIX + name) or None

        timeout_str = _get("TIMEOUT") or "30"
        try:
            timeout = float(timeout_str)
        except ValueError:
            raise ConfigurationError(
                f"{_ENV_PREFIX}TIMEOUT must be a number, got {timeout_str!r}"
            ) from None
        retries_str = _get("MAX_RETRIES") or "2"
        try:
            max_retries = int(retries_str)
        except ValueError:
            raise ConfigurationError(
                f"{_ENV_PREFIX}MAX_RETRIES must be an integer, got {retries_str!r}"
            ) from None

        return cls(
            base_url=_get("BASE_URL") or "",
            org_name=_get("ORG_NAME") or "",
            tenant_name=_get("TENANT_NAME") or "",
            secret=_get("SECRET"),
            client_id=_get("CLIENT_ID"),
            redirect_uri=_get("REDIRECT_URI"),
            scope=_get("SCOPE"),
            timeout=timeout,
            max_retries=max_retries,
        )
