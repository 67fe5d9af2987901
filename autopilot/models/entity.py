"""Data Fabric entity records."""

from __future__ import annotations

from autopilot.models.base import ResourceModel


class EntityRecord(ResourceModel):
    """One record of a user-defined entity; fields depend on the entity schema."""

    id: str | None = None
    create_time: str | None = None
    update_time: str | None = None
    created_by: str | None = None
    updated_by: str | None = None
    record_owner: str | None = None
    record_version: int | None = None
