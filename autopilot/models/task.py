"""Task models."""

from __future__ import annotations

from typing import Any

from autopilot.models.base import FOLDER_FIELD_MAP, ResourceModel


class Task(ResourceModel):
    field_map = FOLDER_FIELD_MAP

    id: int
    title: str | None = None
    status: str | None = None
    priority: str | None = None
    type: str | None = None
    key: str | None = None
    assigned_to_user_id: int | None = None
    creation_time: str | None = None
    last_modification_time: str | None = None
    completion_time: str | None = None
    is_deleted: bool | None = None
    data: dict[str, Any] | None = None
    action: str | None = None
    folder_id: int | None = None


class TaskAssignmentResult(ResourceModel):
    task_id: int | None = None
    user_id: int | None = None
    error_code: int | None = None
    error_message: str | None = None
