"""Persistent key/value stores for OAuth tokens.

Stores follow the session-storage shape (``get_item`` / ``set_item`` /
``remove_item`` on string values). Callers never let a storage failure
escape: every access goes through :func:`guarded`, which turns exceptions
into a :class:`StorageResult`.
"""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Generic, Protocol, TypeVar

import structlog

log = structlog.get_logger("autopilot.auth")

T = TypeVar("T")

TOKEN_STORAGE_PREFIX = "autopilot_sdk_user_token"


def storage_key(client_id: str) -> str:
    """Storage key for the tokens of *client_id*."""
    return f"{TOKEN_STORAGE_PREFIX}-{client_id}"


class TokenStorage(Protocol):
    """Session-storage style string store."""

    def get_item(self, key: str) -> str | None:
        """Return the stored value, or ``None``."""

    def set_item(self, key: str, value: str) -> None:
        """Store *value* under *key*."""

    def remove_item(self, key: str) -> None:
        """Forget *key*; missing keys are ignored."""


@dataclass
class StorageResult(Generic[T]):
    """Outcome of one guarded storage operation."""

    ok: bool
    value: T | None = None
    error: str | None = None


def guarded(operation: str, fn: Callable[[], T]) -> StorageResult[T]:
    """Run *fn*, logging and capturing storage failures instead of raising."""
    try:
        return StorageResult(ok=True, value=fn())
    except Exception as exc:
        log.warning("auth.storage_failed", operation=operation, error=str(exc))
        return StorageResult(ok=False, error=str(exc))


class MemoryTokenStorage:
    """In-process store, lost when the process exits."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FileTokenStorage:
    """All keys in one JSON document on disk.

    Writes go to a temporary file that replaces the original, so a crash
    mid-write leaves the previous document intact. The file is created
    with owner-only permissions.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        data = json.loads(self._path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"token store {self._path} is not a JSON object")
        return data

    def _write_all(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self._path.parent, prefix=".tokens-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh)
            os.chmod(tmp, 0o600)
            os.replace(tmp, self._path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def get_item(self, key: str) -> str | None:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def remove_item(self, key: str) -> None:
        data = self._read_all()
        if data.pop(key, None) is not None:
            self._write_all(data)
