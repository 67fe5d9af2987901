"""ProcessInstanceService — process instance monitoring."""

from __future__ import annotations

from typing import Any

from autopilot.endpoints import ProcessInstanceEndpoints
from autopilot.models import ProcessInstance
from autopilot.pagination import (
    NonPaginatedResponse,
    PaginatedResponse,
    PaginationConfig,
    PaginationParams,
    PaginationType,
    get_all,
)
from autopilot.services.base import FolderScopedService

PROCESS_INSTANCE_PAGINATION = PaginationConfig(
    pagination_type=PaginationType.TOKEN,
    items_field="instances",
    continuation_token_field="nextPage",
    params=PaginationParams(page_size_param="pageSize", token_param="nextPage"),
)


class ProcessInstanceService(FolderScopedService):
    async def get_all(
        self, **options: Any
    ) -> PaginatedResponse[ProcessInstance] | NonPaginatedResponse[ProcessInstance]:
        """List process instances; filters (``process_key``, ``package_id`` ...) are sent unprefixed."""
        return await get_all(
            self,
            get_endpoint=lambda _folder_id: ProcessInstanceEndpoints.GET_ALL,
            pagination=PROCESS_INSTANCE_PAGINATION,
            transform=ProcessInstance.from_api,
            exclude_from_prefix=tuple(options),
            options=options,
        )

    async def get_by_id(self, instance_id: str, folder_key: str) -> ProcessInstance:
        body = await self.get(
            ProcessInstanceEndpoints.get_by_id(instance_id),
            headers=self.folder_key_headers(folder_key),
        )
        return ProcessInstance.from_api(body)

    async def cancel(
        self, instance_id: str, folder_key: str, *, comment: str | None = None
    ) -> None:
        body = {"comment": comment} if comment is not None else {}
        await self.post(
            ProcessInstanceEndpoints.cancel(instance_id),
            body,
            headers=self.folder_key_headers(folder_key),
        )
