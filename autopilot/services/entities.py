"""EntityService — Data Fabric entity records."""

from __future__ import annotations

from typing import Any

from autopilot.endpoints import EntityEndpoints
from autopilot.errors import InvalidParameterError
from autopilot.models import EntityRecord
from autopilot.pagination import (
    NonPaginatedResponse,
    PaginatedResponse,
    PaginationConfig,
    PaginationType,
    get_all,
)
from autopilot.services.base import BaseService

ENTITY_PAGINATION = PaginationConfig(pagination_type=PaginationType.OFFSET)


def _expansion_params(expansion_level: int | None) -> dict[str, Any]:
    if not expansion_level:
        return {}
    return {"expansionLevel": expansion_level}


class EntityService(BaseService):
    async def get_all_records(
        self, entity_id: str, **options: Any
    ) -> PaginatedResponse[EntityRecord] | NonPaginatedResponse[EntityRecord]:
        """List records of *entity_id*.

        ``expansion_level`` (or ``expansionLevel``) is passed through verbatim;
        other query options get the OData prefix.
        """
        if not entity_id:
            raise InvalidParameterError("entity_id is required")
        if "expansion_level" in options:
            options["expansionLevel"] = options.pop("expansion_level")
        return await get_all(
            self,
            get_endpoint=lambda _folder_id: EntityEndpoints.read_records(entity_id),
            pagination=ENTITY_PAGINATION,
            transform=EntityRecord.from_api,
            exclude_from_prefix=("expansionLevel",),
            options=options,
        )

    async def get_record_by_id(
        self, entity_id: str, record_id: str, *, expansion_level: int | None = None
    ) -> EntityRecord:
        body = await self.get(
            EntityEndpoints.get_record(entity_id, record_id),
            params=_expansion_params(expansion_level),
        )
        return EntityRecord.from_api(body)

    async def insert_record(
        self,
        entity_id: str,
        data: dict[str, Any],
        *,
        expansion_level: int | None = None,
    ) -> EntityRecord:
        body = await self.post(
            EntityEndpoints.insert_record(entity_id),
            data,
            params=_expansion_params(expansion_level),
        )
        return EntityRecord.from_api(body)
