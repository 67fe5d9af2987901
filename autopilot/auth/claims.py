"""Read identity claims from an access token without verifying it.

The SDK is not the token's audience; the backend verifies signatures.
Claims are only used for display and for expiry hints.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from jose import JWTError, jwt


def read_claims(token: str) -> dict[str, Any] | None:
    """Return the unverified claims of a JWT, or ``None`` if *token* is not one."""
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError:
        return None
    return claims if isinstance(claims, dict) else None


class ClaimReader:
    """Normalised accessors over a decoded claim set.

    Each getter walks a list of aliases and returns the first non-empty
    string claim.
    """

    def __init__(self, claims: dict[str, Any]) -> None:
        self._claims = claims

    @classmethod
    def from_token(cls, token: str) -> ClaimReader | None:
        claims = read_claims(token)
        return cls(claims) if claims is not None else None

    def _first(self, names: list[str]) -> str | None:
        for name in names:
            value = self._claims.get(name)
            if isinstance(value, str) and value:
                return value
        return None

    @property
    def user_id(self) -> str | None:
        return self._first(["sub", "user_id", "uid"])

    @property
    def username(self) -> str | None:
        return self._first(["preferred_username", "upn", "unique_name"])

    @property
    def email(self) -> str | None:
        return self._first(["email"])

    @property
    def name(self) -> str | None:
        return self._first(["name"])

    @property
    def given_name(self) -> str | None:
        return self._first(["given_name"])

    @property
    def family_name(self) -> str | None:
        return self._first(["family_name"])

    @property
    def tenant_name(self) -> str | None:
        return self._first(["tenantName", "tenant"])

    @property
    def org_name(self) -> str | None:
        return self._first(["orgName", "org"])

    @property
    def expires_at(self) -> datetime | None:
        exp = self._claims.get("exp")
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            return None
        return datetime.fromtimestamp(exp, tz=timezone.utc)

    @property
    def raw(self) -> dict[str, Any]:
        return dict(self._claims)

    def as_dict(self) -> dict[str, Any]:
        """Normalised claims, omitting the ones the token does not carry."""
        values = {
            "user_id": self.user_id,
            "username": self.username,
            "email": self.email,
            "name": self.name,
            "given_name": self.given_name,
            "family_name": self.family_name,
            "tenant_name": self.tenant_name,
            "org_name": self.org_name,
            "expires_at": self.expires_at,
        }
        return {k: v for k, v in values.items() if v is not None}
