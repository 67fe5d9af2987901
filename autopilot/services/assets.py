"""AssetService — orchestrator assets."""

from __future__ import annotations

from typing import Any

from autopilot.endpoints import AssetEndpoints
from autopilot.models import Asset
from autopilot.pagination import (
    NonPaginatedResponse,
    PaginatedResponse,
    PaginationConfig,
    PaginationType,
    get_all,
)
from autopilot.services.base import FolderScopedService

ASSET_PAGINATION = PaginationConfig(pagination_type=PaginationType.ODATA)


class AssetService(FolderScopedService):
    async def get_all(
        self, **options: Any
    ) -> PaginatedResponse[Asset] | NonPaginatedResponse[Asset]:
        """List assets across folders, or in one folder when ``folder_id`` is given.

        Accepts OData query options (``filter``, ``orderby``, ``select`` ...)
        and the pagination options ``cursor`` / ``page_size`` / ``jump_to_page``.
        """
        return await get_all(
            self,
            get_endpoint=self.endpoint_for(AssetEndpoints.GET_ALL, AssetEndpoints.GET_BY_FOLDER),
            pagination=ASSET_PAGINATION,
            transform=Asset.from_api,
            options=options,
        )

    async def get_by_id(self, asset_id: int, folder_id: int) -> Asset:
        body = await self.get(
            AssetEndpoints.get_by_id(asset_id),
            headers=self.folder_headers(self.require_folder(folder_id)),
        )
        return Asset.from_api(body)
