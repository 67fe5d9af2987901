"""Pagination records shared by the cursor codec, selector and executor."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 1000

ODATA_PREFIX = "$"
DEFAULT_ITEMS_FIELD = "value"
DEFAULT_TOTAL_COUNT_FIELD = "totalRecordCount"
DEFAULT_CONTINUATION_TOKEN_FIELD = "continuationToken"

# Keys of a caller's options mapping that steer pagination rather than filtering.
PAGINATION_KEYS = ("cursor", "page_size", "jump_to_page")
FOLDER_KEY = "folder_id"


class PaginationType(str, Enum):
    """Pagination strategy a backend endpoint implements."""

    OFFSET = "offset"
    TOKEN = "token"
    ODATA = "odata"

    @property
    def supports_page_jump(self) -> bool:
        return self is not PaginationType.TOKEN


def get_limited_page_size(page_size: int | None) -> int:
    """Return *page_size* (or the default) clamped to :data:`MAX_PAGE_SIZE`."""
    if page_size is None:
        return DEFAULT_PAGE_SIZE
    return min(page_size, MAX_PAGE_SIZE)


@dataclass
class PaginationOptions:
    """Caller-facing pagination vocabulary.

    Setting any field switches the call into paginated mode; leaving all
    three unset asks for the whole collection.
    """

    cursor: str | None = None
    page_size: int | None = None
    jump_to_page: int | None = None

    @property
    def is_paginated(self) -> bool:
        return self.cursor is not None or self.page_size is not None or self.jump_to_page is not None

    @classmethod
    def split(
        cls, options: Mapping[str, Any] | None
    ) -> tuple[PaginationOptions, Any, dict[str, Any]]:
        """Split *options* into ``(pagination, folder_id, query_options)``.

        ``None`` values are dropped from the query options.
        """
        remaining = {k: v for k, v in (options or {}).items() if v is not None}
        pagination = cls(**{k: remaining.pop(k) for k in PAGINATION_KEYS if k in remaining})
        folder_id = remaining.pop(FOLDER_KEY, None)
        return pagination, folder_id, remaining


@dataclass
class InternalPaginationOptions:
    """Concrete page position derived from :class:`PaginationOptions`."""

    page_size: int | None = None
    page_number: int | None = None
    continuation_token: str | None = None
    type: PaginationType | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return the set fields only."""
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}


@dataclass
class CursorData:
    """Decoded cursor envelope."""

    type: PaginationType | None = None
    page_number: int | None = None
    page_size: int | None = None
    continuation_token: str | None = None


@dataclass
class PaginationParams:
    """Query-parameter names an endpoint uses for pagination."""

    page_size_param: str | None = None
    offset_param: str | None = None
    count_param: str | None = None
    token_param: str | None = None

    @classmethod
    def defaults_for(cls, pagination_type: PaginationType) -> PaginationParams:
        if pagination_type is PaginationType.ODATA:
            return cls(page_size_param="$top", offset_param="$skip", count_param="$count")
        if pagination_type is PaginationType.OFFSET:
            return cls(page_size_param="limit", offset_param="start")
        return cls(page_size_param="takeHint", token_param="continuationToken")


@dataclass
class PaginationConfig:
    """Everything the executor needs to know about one list endpoint."""

    pagination_type: PaginationType = PaginationType.ODATA
    items_field: str | None = None
    total_count_field: str | None = None
    continuation_token_field: str | None = None
    params: PaginationParams | None = None

    def resolved_params(self) -> PaginationParams:
        """Endpoint-declared names, falling back to the per-type defaults."""
        defaults = PaginationParams.defaults_for(self.pagination_type)
        if self.params is None:
            return defaults
        return PaginationParams(
            page_size_param=self.params.page_size_param or defaults.page_size_param,
            offset_param=self.params.offset_param or defaults.offset_param,
            count_param=self.params.count_param or defaults.count_param,
            token_param=self.params.token_param or defaults.token_param,
        )

    def resolved_items_field(self) -> str:
        if self.items_field:
            return self.items_field
        return "items" if self.pagination_type is PaginationType.TOKEN else DEFAULT_ITEMS_FIELD

    def resolved_total_count_field(self) -> str:
        if self.total_count_field:
            return self.total_count_field
        if self.pagination_type is PaginationType.ODATA:
            return "@odata.count"
        return DEFAULT_TOTAL_COUNT_FIELD

    def resolved_continuation_token_field(self) -> str:
        return self.continuation_token_field or DEFAULT_CONTINUATION_TOKEN_FIELD


@dataclass
class PaginatedResponse(Generic[T]):
    """One page of results.

    ``next_cursor`` is set exactly when ``has_next_page`` is true.
    """

    items: list[T]
    has_next_page: bool
    next_cursor: str | None = None
    total_count: int | None = None
    previous_cursor: str | None = None
    current_page: int | None = None
    total_pages: int | None = None
    supports_page_jump: bool = False


@dataclass
class NonPaginatedResponse(Generic[T]):
    """The whole collection in one response."""

    items: list[T] = field(default_factory=list)
    total_count: int | None = None
