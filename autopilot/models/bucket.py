"""Storage bucket file metadata."""

from __future__ import annotations

from autopilot.models.base import ResourceModel


class BucketFile(ResourceModel):
    full_path: str
    content_type: str | None = None
    size: int | None = None
    last_modified: str | None = None
    is_directory: bool = False
