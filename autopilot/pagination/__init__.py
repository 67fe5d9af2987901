"""Cursor-based pagination over offset, continuation-token and OData endpoints."""

from autopilot.pagination.cursor import decode_cursor, encode_cursor
from autopilot.pagination.executor import ServiceAccess, request_with_pagination
from autopilot.pagination.helpers import get_all, get_all_non_paginated, get_all_paginated
from autopilot.pagination.selector import has_pagination_parameters, validate_pagination_options
from autopilot.pagination.types import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    CursorData,
    InternalPaginationOptions,
    NonPaginatedResponse,
    PaginatedResponse,
    PaginationConfig,
    PaginationOptions,
    PaginationParams,
    PaginationType,
)

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "CursorData",
    "InternalPaginationOptions",
    "NonPaginatedResponse",
    "PaginatedResponse",
    "PaginationConfig",
    "PaginationOptions",
    "PaginationParams",
    "PaginationType",
    "ServiceAccess",
    "decode_cursor",
    "encode_cursor",
    "get_all",
    "get_all_non_paginated",
    "get_all_paginated",
    "has_pagination_parameters",
    "request_with_pagination",
    "validate_pagination_options",
]
