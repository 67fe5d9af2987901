"""Turn caller pagination options into a concrete page request."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from autopilot.errors import InvalidParameterError, UnsupportedOperationError
from autopilot.pagination.cursor import decode_cursor
from autopilot.pagination.types import (
    PAGINATION_KEYS,
    InternalPaginationOptions,
    PaginationOptions,
    PaginationType,
)


def has_pagination_parameters(options: Mapping[str, Any] | None) -> bool:
    """True if any of ``cursor`` / ``page_size`` / ``jump_to_page`` is set."""
    if not options:
        return False
    return any(options.get(key) is not None for key in PAGINATION_KEYS)


def _require_positive(name: str, value: int | None) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidParameterError(f"{name} must be a positive integer, got {value!r}")


def validate_pagination_options(
    options: PaginationOptions, pagination_type: PaginationType
) -> InternalPaginationOptions:
    """Validate *options* against the endpoint's *pagination_type*.

    Runs before any I/O. Raises ``InvalidParameterError``,
    ``UnsupportedOperationError`` or ``InvalidCursorError``.
    """
    _require_positive("page_size", options.page_size)
    _require_positive("jump_to_page", options.jump_to_page)

    if options.jump_to_page is not None and pagination_type is PaginationType.TOKEN:
        raise UnsupportedOperationError(
            "jump_to_page is not supported for token-based pagination; "
            "follow next_cursor instead"
        )

    if options.cursor is not None:
        cursor = decode_cursor(options.cursor, pagination_type)
        page_size = options.page_size if options.page_size is not None else cursor.page_size
        return InternalPaginationOptions(
            page_size=page_size,
            page_number=cursor.page_number,
            continuation_token=cursor.continuation_token,
            type=cursor.type,
        )

    if options.jump_to_page is not None:
        return InternalPaginationOptions(
            page_size=options.page_size, page_number=options.jump_to_page
        )

    return InternalPaginationOptions(page_size=options.page_size, page_number=1)
