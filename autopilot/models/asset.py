"""Asset and queue models."""

from __future__ import annotations

from autopilot.models.base import FOLDER_FIELD_MAP, ResourceModel


class Asset(ResourceModel):
    field_map = FOLDER_FIELD_MAP

    id: int
    name: str
    key: str | None = None
    description: str | None = None
    value_scope: str | None = None
    value_type: str | None = None
    value: str | None = None
    string_value: str | None = None
    bool_value: bool | None = None
    int_value: int | None = None
    folder_id: int | None = None
    folder_name: str | None = None


class Queue(ResourceModel):
    field_map = FOLDER_FIELD_MAP

    id: int
    name: str
    key: str | None = None
    description: str | None = None
    max_number_of_retries: int | None = None
    accept_automatically_retry: bool | None = None
    enforce_unique_reference: bool | None = None
    creation_time: str | None = None
    folder_id: int | None = None
    folder_name: str | None = None
