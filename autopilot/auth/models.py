"""Credential records held by the token manager."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Literal

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

TokenType = Literal["secret", "oauth"]


@dataclass
class TokenInfo:
    """The credential currently in use.

    ``secret`` tokens never expire; ``oauth`` tokens carry an expiry and
    usually a refresh token.
    """

    token: str
    type: TokenType
    expires_at: datetime | None = None
    refresh_token: str | None = None

    def __post_init__(self) -> None:
        # Naive datetimes are local time.
        if self.expires_at is not None and self.expires_at.tzinfo is None:
            self.expires_at = self.expires_at.astimezone(timezone.utc)


class AuthToken(BaseModel):
    """Response body of the identity token endpoint."""

    model_config = ConfigDict(extra="ignore")

    access_token: str
    token_type: str = "Bearer"
    expires_in: int = 3600
    refresh_token: str | None = None
    id_token: str | None = None
    scope: str | None = None


class StoredToken(BaseModel):
    """Persisted form of :class:`TokenInfo` (camelCase JSON, ISO-8601 expiry)."""

    model_config = ConfigDict(populate_by_name=True)

    token: str = Field(min_length=1)
    type: TokenType
    expires_at: AwareDatetime | None = Field(default=None, alias="expiresAt")
    refresh_token: str | None = Field(default=None, alias="refreshToken")

    @classmethod
    def from_token_info(cls, info: TokenInfo) -> StoredToken:
        return cls(
            token=info.token,
            type=info.type,
            expires_at=info.expires_at,
            refresh_token=info.refresh_token,
        )

    def to_token_info(self) -> TokenInfo:
        return TokenInfo(
            token=self.token,
            type=self.type,
            expires_at=self.expires_at,
            refresh_token=self.refresh_token,
        )

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)
