"""Fetch one page from a list endpoint and assemble the cursor for the next."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Protocol

import structlog

from autopilot.pagination.cursor import create_cursor, create_previous_cursor
from autopilot.pagination.selector import validate_pagination_options
from autopilot.pagination.types import (
    InternalPaginationOptions,
    PaginatedResponse,
    PaginationConfig,
    PaginationOptions,
    PaginationType,
    get_limited_page_size,
)

log = structlog.get_logger("autopilot.pagination")


class ServiceAccess(Protocol):
    """What the pagination helpers need from a service: one GET returning JSON."""

    async def get(
        self,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any: ...


def build_request_params(
    pagination_type: PaginationType,
    options: InternalPaginationOptions,
    config: PaginationConfig,
) -> dict[str, Any]:
    """Map the internal page position onto the endpoint's query parameter names."""
    names = config.resolved_params()
    params: dict[str, Any] = {}

    if pagination_type is PaginationType.TOKEN:
        if options.page_size is not None and names.page_size_param:
            params[names.page_size_param] = get_limited_page_size(options.page_size)
        if options.continuation_token and names.token_param:
            params[names.token_param] = options.continuation_token
        return params

    page_size = get_limited_page_size(options.page_size)
    if names.page_size_param:
        params[names.page_size_param] = page_size
    if options.page_number and options.page_number > 1 and names.offset_param:
        params[names.offset_param] = (options.page_number - 1) * page_size
    if names.count_param:
        params[names.count_param] = True
    return params


def determine_has_more(
    pagination_type: PaginationType,
    *,
    page_size: int | None,
    current_page: int,
    items_count: int,
    total_count: int | None = None,
    continuation_token: str | None = None,
) -> bool:
    """Whether the backend has data past the page just fetched."""
    if pagination_type is PaginationType.TOKEN:
        return bool(continuation_token)
    effective = page_size or get_limited_page_size(None)
    if total_count is not None:
        return current_page * effective < total_count
    # No total reported: a full page suggests there is more.
    return items_count == effective


def _extract(body: Any, field_name: str) -> Any:
    if isinstance(body, Mapping):
        return body.get(field_name)
    return None


async def request_with_pagination(
    access: ServiceAccess,
    path: str,
    options: PaginationOptions,
    config: PaginationConfig,
    *,
    params: Mapping[str, Any] | None = None,
    headers: Mapping[str, str] | None = None,
) -> PaginatedResponse[Any]:
    """Fetch one page of raw items from *path*.

    Validation errors are raised before the request is sent. Transport
    errors propagate unchanged. A body without the items field is an
    empty page.
    """
    pagination_type = config.pagination_type
    internal = validate_pagination_options(options, pagination_type)

    request_params = dict(params or {})
    request_params.update(build_request_params(pagination_type, internal, config))

    log.debug(
        "pagination.request",
        path=path,
        pagination_type=pagination_type.value,
        page_number=internal.page_number,
        page_size=internal.page_size,
        has_token=internal.continuation_token is not None,
    )
    body = await access.get(path, params=request_params, headers=headers)

    raw_items = _extract(body, config.resolved_items_field())
    if not isinstance(raw_items, list):
        if raw_items is None:
            log.warning("pagination.missing_items", path=path, field=config.resolved_items_field())
        raw_items = []
    total_count = _extract(body, config.resolved_total_count_field())
    if not isinstance(total_count, int) or isinstance(total_count, bool):
        total_count = None
    continuation_token = _extract(body, config.resolved_continuation_token_field())
    if pagination_type is not PaginationType.TOKEN:
        continuation_token = None

    if pagination_type is PaginationType.TOKEN:
        page_size = (
            get_limited_page_size(internal.page_size) if internal.page_size is not None else None
        )
        current_page = None
    else:
        page_size = get_limited_page_size(internal.page_size)
        current_page = internal.page_number or 1

    has_more = determine_has_more(
        pagination_type,
        page_size=page_size,
        current_page=current_page or 1,
        items_count=len(raw_items),
        total_count=total_count,
        continuation_token=continuation_token,
    )
    next_cursor = create_cursor(
        pagination_type,
        has_more=has_more,
        page_size=page_size,
        current_page=current_page,
        continuation_token=continuation_token,
    )

    total_pages = None
    if total_count is not None and page_size:
        total_pages = math.ceil(total_count / page_size)

    return PaginatedResponse(
        items=raw_items,
        has_next_page=next_cursor is not None,
        next_cursor=next_cursor,
        total_count=total_count,
        previous_cursor=create_previous_cursor(
            pagination_type, page_size=page_size, current_page=current_page
        ),
        current_page=current_page,
        total_pages=total_pages,
        supports_page_jump=pagination_type.supports_page_jump,
    )
