"""QueueService — orchestrator queue definitions."""

from __future__ import annotations

from typing import Any

from autopilot.endpoints import QueueEndpoints
from autopilot.models import Queue
from autopilot.pagination import (
    NonPaginatedResponse,
    PaginatedResponse,
    PaginationConfig,
    PaginationType,
    get_all,
)
from autopilot.services.base import FolderScopedService

QUEUE_PAGINATION = PaginationConfig(pagination_type=PaginationType.ODATA)


class QueueService(FolderScopedService):
    async def get_all(
        self, **options: Any
    ) -> PaginatedResponse[Queue] | NonPaginatedResponse[Queue]:
        return await get_all(
            self,
            get_endpoint=self.endpoint_for(QueueEndpoints.GET_ALL, QueueEndpoints.GET_BY_FOLDER),
            pagination=QUEUE_PAGINATION,
            transform=Queue.from_api,
            options=options,
        )

    async def get_by_id(self, queue_id: int, folder_id: int) -> Queue:
        body = await self.get(
            QueueEndpoints.get_by_id(queue_id),
            headers=self.folder_headers(self.require_folder(folder_id)),
        )
        return Queue.from_api(body)
