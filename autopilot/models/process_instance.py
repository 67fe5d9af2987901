"""Process instance models."""

from __future__ import annotations

from autopilot.models.base import ResourceModel


class ProcessInstance(ResourceModel):
    instance_id: str
    instance_display_name: str | None = None
    process_key: str | None = None
    package_id: str | None = None
    package_version: str | None = None
    folder_key: str | None = None
    latest_run_status: str | None = None
    started_by_user: str | None = None
    source: str | None = None
    creator_user_key: str | None = None
    started_time_utc: str | None = None
    completed_time_utc: str | None = None
