"""Base classes shared by the resource services."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from autopilot.core.http import ApiClient
from autopilot.endpoints import FOLDER_ID_HEADER, FOLDER_KEY_HEADER
from autopilot.errors import InvalidParameterError


class BaseService:
    """Gives a service authenticated access to the tenant's REST API.

    Services also satisfy the pagination helpers' ``ServiceAccess``
    protocol, so they can be handed to ``get_all`` directly.
    """

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def get(
        self,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        return await self._api.get(path, params=params, headers=headers)

    async def post(self, path: str, body: Any = None, **kwargs: Any) -> Any:
        return await self._api.post(path, body, **kwargs)

    async def put(self, path: str, body: Any = None, **kwargs: Any) -> Any:
        return await self._api.put(path, body, **kwargs)

    async def patch(self, path: str, body: Any = None, **kwargs: Any) -> Any:
        return await self._api.patch(path, body, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self._api.delete(path, **kwargs)


class FolderScopedService(BaseService):
    """Service whose resources live in folders."""

    @staticmethod
    def folder_headers(folder_id: int | None) -> dict[str, str]:
        if folder_id is None:
            return {}
        return {FOLDER_ID_HEADER: str(folder_id)}

    @staticmethod
    def folder_key_headers(folder_key: str) -> dict[str, str]:
        if not folder_key:
            raise InvalidParameterError("folder_key is required")
        return {FOLDER_KEY_HEADER: folder_key}

    @staticmethod
    def require_folder(folder_id: int | None) -> int:
        if folder_id is None or isinstance(folder_id, bool):
            raise InvalidParameterError("folder_id is required")
        return folder_id

    @staticmethod
    def endpoint_for(all_folders: str, by_folder: str):
        """Pick *by_folder* when a folder id is given, *all_folders* otherwise."""
        return lambda folder_id: by_folder if folder_id is not None else all_folders
