"""Key case conversion, field renaming and key prefixing for API payloads."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def to_snake_case(name: str) -> str:
    """Convert ``PascalCase`` / ``camelCase`` names to ``snake_case``.

    ``"OrganizationUnitId"`` -> ``"organization_unit_id"``,
    ``"@odata.count"`` is returned unchanged apart from lower-casing.
    """
    if not name or not any(ch.isupper() for ch in name):
        return name
    return _CAMEL_BOUNDARY_RE.sub("_", name).lower()


def snake_case_keys(data: Any) -> Any:
    """Recursively convert every mapping key in *data* to snake_case."""
    if isinstance(data, Mapping):
        return {to_snake_case(str(k)): snake_case_keys(v) for k, v in data.items()}
    if isinstance(data, list):
        return [snake_case_keys(item) for item in data]
    return data


def rename_fields(data: Mapping[str, Any], field_map: Mapping[str, str]) -> dict[str, Any]:
    """Return a copy of *data* with keys renamed according to *field_map*."""
    return {field_map.get(k, k): v for k, v in data.items()}


def add_prefix_to_keys(
    data: Mapping[str, Any], prefix: str, keys: Iterable[str]
) -> dict[str, Any]:
    """Prefix the listed *keys* of *data* with *prefix*; other keys pass through.

    Keys that already carry the prefix are left alone.
    """
    selected = set(keys)
    result: dict[str, Any] = {}
    for key, value in data.items():
        if key in selected and not key.startswith(prefix):
            result[f"{prefix}{key}"] = value
        else:
            result[key] = value
    return result
