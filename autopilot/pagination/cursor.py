"""Opaque pagination cursor codec — JSON envelope in URL-safe base64."""

from __future__ import annotations

import base64
import binascii
import json

from autopilot.errors import InvalidCursorError
from autopilot.pagination.types import CursorData, PaginationType

# JSON envelope key <-> CursorData attribute
_ENVELOPE_KEYS = {
    "type": "type",
    "pageNumber": "page_number",
    "pageSize": "page_size",
    "continuationToken": "continuation_token",
}


def encode_cursor(state: CursorData) -> str:
    """Encode *state* into an opaque cursor string. Absent fields are omitted."""
    envelope = {}
    for key, attr in _ENVELOPE_KEYS.items():
        value = getattr(state, attr)
        if value is None:
            continue
        envelope[key] = value.value if isinstance(value, PaginationType) else value
    payload = json.dumps(envelope, separators=(",", ":"))
    return base64.urlsafe_b64encode(payload.encode()).decode()


def decode_cursor(cursor: str, expected_type: PaginationType | None = None) -> CursorData:
    """Decode a cursor string produced by :func:`encode_cursor`.

    When *expected_type* is given the cursor must carry the same type tag;
    cursors are not interchangeable across endpoints.

    Raises ``InvalidCursorError`` for anything that does not decode.
    """
    if not isinstance(cursor, str) or not cursor:
        raise InvalidCursorError("cursor must be a non-empty string")
    try:
        raw = base64.b64decode(cursor.encode(), altchars=b"-_", validate=True)
        data = json.loads(raw.decode())
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise InvalidCursorError("invalid pagination cursor") from exc
    if not isinstance(data, dict):
        raise InvalidCursorError("invalid pagination cursor: not an object")

    raw_type = data.get("type")
    cursor_type: PaginationType | None = None
    if raw_type is not None:
        try:
            cursor_type = PaginationType(raw_type)
        except ValueError:
            raise InvalidCursorError(f"invalid cursor: unknown pagination type {raw_type!r}")

    if expected_type is not None:
        if cursor_type is None:
            raise InvalidCursorError("invalid cursor: missing pagination type")
        if cursor_type is not expected_type:
            raise InvalidCursorError(
                f"pagination type mismatch: cursor is for {cursor_type.value} "
                f"but endpoint uses {expected_type.value}"
            )

    return CursorData(
        type=cursor_type,
        page_number=data.get("pageNumber"),
        page_size=data.get("pageSize"),
        continuation_token=data.get("continuationToken"),
    )


def create_cursor(
    pagination_type: PaginationType,
    *,
    has_more: bool,
    page_size: int | None,
    current_page: int | None = None,
    continuation_token: str | None = None,
) -> str | None:
    """Build the cursor for the page after *current_page*.

    Returns ``None`` when there is nothing to continue from.
    """
    if not has_more:
        return None
    state = CursorData(type=pagination_type, page_size=page_size)
    if pagination_type is PaginationType.TOKEN:
        if not continuation_token:
            return None
        state.continuation_token = continuation_token
    else:
        state.page_number = (current_page or 1) + 1
    return encode_cursor(state)


def create_previous_cursor(
    pagination_type: PaginationType, *, page_size: int | None, current_page: int | None
) -> str | None:
    """Cursor for the page before *current_page* (offset / odata only)."""
    if not pagination_type.supports_page_jump or not current_page or current_page <= 1:
        return None
    return encode_cursor(
        CursorData(type=pagination_type, page_number=current_page - 1, page_size=page_size)
    )
