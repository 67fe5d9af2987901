"""Unified ``get_all`` entry point used by every list method of the SDK."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any, TypeVar

import structlog

from autopilot.endpoints import FOLDER_ID_HEADER
from autopilot.pagination.executor import ServiceAccess, request_with_pagination
from autopilot.pagination.types import (
    ODATA_PREFIX,
    NonPaginatedResponse,
    PaginatedResponse,
    PaginationConfig,
    PaginationOptions,
)
from autopilot.transform import add_prefix_to_keys

log = structlog.get_logger("autopilot.pagination")

R = TypeVar("R")

EndpointFactory = Callable[[Any], str]


def _folder_headers(folder_id: Any) -> dict[str, str]:
    if folder_id is None:
        return {}
    return {FOLDER_ID_HEADER: str(folder_id)}


def _prefixed(
    query: Mapping[str, Any], exclude_from_prefix: Iterable[str], prefix: str
) -> dict[str, Any]:
    excluded = set(exclude_from_prefix)
    return add_prefix_to_keys(query, prefix, [k for k in query if k not in excluded])


def _apply(transform: Callable[[Any], R] | None, items: list[Any]) -> list[Any]:
    if transform is None:
        return list(items)
    return [transform(item) for item in items]


async def get_all_paginated(
    access: ServiceAccess,
    *,
    get_endpoint: EndpointFactory,
    pagination: PaginationConfig,
    options: PaginationOptions,
    folder_id: Any = None,
    params: Mapping[str, Any] | None = None,
    transform: Callable[[Any], R] | None = None,
) -> PaginatedResponse[R]:
    """Fetch one page and transform its items."""
    page = await request_with_pagination(
        access,
        get_endpoint(folder_id),
        options,
        pagination,
        params=params,
        headers=_folder_headers(folder_id),
    )
    page.items = _apply(transform, page.items)
    return page


async def get_all_non_paginated(
    access: ServiceAccess,
    *,
    get_endpoint: EndpointFactory,
    pagination: PaginationConfig,
    folder_id: Any = None,
    params: Mapping[str, Any] | None = None,
    transform: Callable[[Any], R] | None = None,
) -> NonPaginatedResponse[R]:
    """Fetch the whole collection in one request, without page parameters."""
    path = get_endpoint(folder_id)
    body = await access.get(path, params=dict(params or {}), headers=_folder_headers(folder_id))

    items: Any = None
    total_count: Any = None
    if isinstance(body, Mapping):
        items = body.get(pagination.resolved_items_field())
        total_count = body.get(pagination.resolved_total_count_field())
    if not isinstance(items, list):
        items = []
    if not isinstance(total_count, int) or isinstance(total_count, bool):
        total_count = None

    return NonPaginatedResponse(items=_apply(transform, items), total_count=total_count)


async def get_all(
    access: ServiceAccess,
    *,
    get_endpoint: EndpointFactory,
    pagination: PaginationConfig,
    transform: Callable[[Any], R] | None = None,
    exclude_from_prefix: Iterable[str] = (),
    prefix: str = ODATA_PREFIX,
    options: Mapping[str, Any] | None = None,
) -> PaginatedResponse[R] | NonPaginatedResponse[R]:
    """List a resource, paginated or not depending on *options*.

    *options* may hold ``cursor`` / ``page_size`` / ``jump_to_page`` (any of
    them selects paginated mode), ``folder_id`` (selects the folder-scoped
    endpoint and header) and query options such as ``filter`` or
    ``orderby``. Query options are sent with *prefix* prepended unless
    listed in *exclude_from_prefix*.

    *get_endpoint* receives the folder id (or ``None``) and returns the path.
    """
    page_options, folder_id, query = PaginationOptions.split(options)
    params = _prefixed(query, exclude_from_prefix, prefix)

    if page_options.is_paginated:
        return await get_all_paginated(
            access,
            get_endpoint=get_endpoint,
            pagination=pagination,
            options=page_options,
            folder_id=folder_id,
            params=params,
            transform=transform,
        )

    log.debug("pagination.fetch_all", pagination_type=pagination.pagination_type.value)
    return await get_all_non_paginated(
        access,
        get_endpoint=get_endpoint,
        pagination=pagination,
        folder_id=folder_id,
        params=params,
        transform=transform,
    )
