"""TaskService — action center tasks."""

from __future__ import annotations

from typing import Any

from autopilot.endpoints import TaskEndpoints
from autopilot.models import Task, TaskAssignmentResult
from autopilot.pagination import (
    NonPaginatedResponse,
    PaginatedResponse,
    PaginationConfig,
    PaginationType,
    get_all,
)
from autopilot.services.base import FolderScopedService

TASK_PAGINATION = PaginationConfig(pagination_type=PaginationType.ODATA)


class TaskService(FolderScopedService):
    """Lists, assigns and completes tasks."""

    async def get_all(
        self, **options: Any
    ) -> PaginatedResponse[Task] | NonPaginatedResponse[Task]:
        # One endpoint serves both scopes; the folder only narrows it via the header.
        return await get_all(
            self,
            get_endpoint=lambda _folder_id: TaskEndpoints.GET_ALL,
            pagination=TASK_PAGINATION,
            transform=Task.from_api,
            options=options,
        )

    async def get_by_id(self, task_id: int, folder_id: int | None = None) -> Task:
        body = await self.get(
            TaskEndpoints.get_by_id(task_id), headers=self.folder_headers(folder_id)
        )
        return Task.from_api(body)

    async def assign(
        self, task_id: int, user_id: int, *, folder_id: int | None = None
    ) -> list[TaskAssignmentResult]:
        """Assign a task to a user.

        Returns the per-task failures reported by the backend; an empty list
        means the assignment went through.
        """
        body = await self.post(
            TaskEndpoints.ASSIGN,
            {"TaskAssignments": [{"TaskId": task_id, "UserId": user_id}]},
            headers=self.folder_headers(folder_id),
        )
        results = body.get("value") if isinstance(body, dict) else None
        return [TaskAssignmentResult.from_api(item) for item in results or []]

    async def complete(
        self,
        task_id: int,
        folder_id: int,
        *,
        action: str | None = None,
        data: dict[str, Any] | None = None,
    ) -> None:
        request: dict[str, Any] = {"taskId": task_id}
        if action is not None:
            request["action"] = action
        if data is not None:
            request["data"] = data
        await self.post(
            TaskEndpoints.COMPLETE,
            request,
            headers=self.folder_headers(self.require_folder(folder_id)),
        )
