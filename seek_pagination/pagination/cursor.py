"""Opaque cursors carrying a boundary tuple between requests."""

import base64
import json
from typing import Optional, Any, List, Mapping, Sequence, Tuple

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from ..config import get_settings
from ..errors.exceptions import InvalidCursorError
from .ordering import OrderColumn


_values_adapter = TypeAdapter(List[Any])


class CursorData(BaseModel):
    """Data structure for cursor pagination."""

    values: List[Any] = Field(description="Boundary values of the last row on the page")


class PaginationParams(BaseModel):
    """Query parameters for pagination."""

    limit: int = Field(
        default_factory=lambda: get_settings().default_page_size,
        ge=1,
        description="Number of items per page"
    )
    cursor: Optional[str] = Field(default=None, description="Cursor for pagination")

    def page_size(self) -> int:
        """The requested limit, capped at the configured maximum."""
        return min(self.limit, get_settings().max_page_size)


class PaginatedResponse(BaseModel):
    """Response model for paginated data."""

    items: List[Any] = Field(description="List of items")
    next_cursor: Optional[str] = Field(default=None, description="Cursor for next page")
    has_more: bool = Field(description="Whether more items are available")


def encode_cursor(values: Sequence[Any]) -> str:
    """Encode a boundary tuple as a pagination cursor.

    Args:
        values: Boundary values, one per ordering column

    Returns:
        URL-safe base64 encoded cursor string

    Raises:
        ValueError: If a value cannot be serialized
    """
    try:
        cursor_json = _values_adapter.dump_json(list(values))
    except Exception as e:
        raise ValueError(f"Failed to encode cursor: {e}")

    return base64.urlsafe_b64encode(cursor_json).decode('ascii')


def decode_cursor(cursor: str, types: Optional[Sequence[Any]] = None) -> Tuple[Any, ...]:
    """Decode a pagination cursor back into a boundary tuple.

    Args:
        cursor: Cursor produced by encode_cursor
        types: Optional type per position (e.g. datetime, UUID); JSON values
            are validated into these types

    Returns:
        Boundary tuple

    Raises:
        InvalidCursorError: If the cursor is empty, malformed, has the wrong
            number of values or a value fails type validation
    """
    if not cursor:
        raise InvalidCursorError("Empty cursor provided")

    try:
        cursor_json = base64.urlsafe_b64decode(cursor.encode('ascii')).decode('utf-8')
        cursor_data = CursorData(values=json.loads(cursor_json))
    except (ValueError, TypeError, ValidationError) as e:
        raise InvalidCursorError(f"Invalid cursor format: {e}")

    values = cursor_data.values
    if types is None:
        return tuple(values)

    if len(types) != len(values):
        raise InvalidCursorError(
            f"Cursor holds {len(values)} values but the ordering has {len(types)} columns"
        )

    try:
        return tuple(
            value if value is None else TypeAdapter(type_).validate_python(value)
            for type_, value in zip(types, values)
        )
    except ValidationError as e:
        raise InvalidCursorError(f"Invalid cursor value: {e}")


def row_boundary(row: Mapping[Any, Any], columns: Sequence[OrderColumn]) -> Tuple[Any, ...]:
    """The boundary tuple of a row under an ordering."""
    return tuple(row[column.ref] for column in columns)


def paginate_query_results(
    items: List[Mapping[str, Any]],
    limit: int,
    columns: Sequence[OrderColumn]
) -> Tuple[List[Mapping[str, Any]], Optional[str], bool]:
    """Process query results fetched with one row of look-ahead.

    Args:
        items: Rows from a query run with ``limit + 1``
        limit: Requested page size
        columns: Ordering the rows were fetched with

    Returns:
        Tuple of (page_items, next_cursor, has_more)
    """
    # Check if we have more items than requested
    has_more = len(items) > limit

    # Take only the requested number of items
    page_items = items[:limit]

    # Generate next cursor if there are more items
    next_cursor = None
    if has_more and page_items:
        next_cursor = encode_cursor(row_boundary(page_items[-1], columns))

    return page_items, next_cursor, has_more
