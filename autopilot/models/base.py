"""Common base for resource models."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict

from autopilot.transform import rename_fields, snake_case_keys

# Backend folder fields, exposed under the SDK's folder vocabulary.
FOLDER_FIELD_MAP = {
    "organization_unit_id": "folder_id",
    "organization_unit_fully_qualified_name": "folder_name",
}


class ResourceModel(BaseModel):
    """API resource with snake_case fields.

    Unknown fields are kept, so new backend properties stay reachable as
    attributes without a model change. ``field_map`` renames snake-cased
    backend keys before validation.
    """

    model_config = ConfigDict(extra="allow")

    field_map: ClassVar[Mapping[str, str]] = {}

    @classmethod
    def from_api(cls, data: Any) -> ResourceModel:
        data = snake_case_keys(data)
        if cls.field_map and isinstance(data, Mapping):
            data = rename_fields(data, cls.field_map)
        return cls.model_validate(data)
