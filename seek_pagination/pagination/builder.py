"""Boundary predicate builder for keyset pagination."""

import logging
from enum import Enum
from typing import Any, Optional, Sequence

from ..errors.exceptions import ArityMismatchError, NoOrderError
from .ordering import Direction, Nulls, OrderColumn
from .predicate import (
    FALSE, TRUE, Compare, IsNull, Not, Predicate, TupleCompare, conjoin, disjoin
)


logger = logging.getLogger(__name__)


class Mode(str, Enum):
    """Whether the boundary row itself qualifies."""

    EXCLUSIVE = "exclusive"
    INCLUSIVE = "inclusive"


def tuple_comparison_applies(columns: Sequence[OrderColumn]) -> bool:
    """Whether a single row-value comparison is equivalent to the general form.

    Requires more than one column, one shared direction, every column
    non-null and every column using its direction's default null ordering.
    """
    if len(columns) < 2:
        return False
    direction = columns[0].direction
    return all(
        column.direction is direction and column.not_null and column.has_default_nulls
        for column in columns
    )


def build(
    columns: Sequence[OrderColumn],
    values: Sequence[Any],
    mode: Mode = Mode.EXCLUSIVE,
    option: Optional[str] = None
) -> Predicate:
    """Build the predicate selecting rows after (or from) a boundary tuple.

    Args:
        columns: Normalized ordering, most significant first
        values: Boundary value per column; None is the NULL marker
        mode: EXCLUSIVE for rows strictly after the boundary, INCLUSIVE to
            include the boundary row itself
        option: Name of the caller's option, used in error messages

    Returns:
        Predicate tree

    Raises:
        NoOrderError: If there are no columns
        ArityMismatchError: If values and columns differ in length
    """
    mode = Mode(mode)
    if not columns:
        raise NoOrderError()
    if len(values) != len(columns):
        raise ArityMismatchError(option, expected=len(columns), got=len(values))

    if tuple_comparison_applies(columns) and all(value is not None for value in values):
        logger.debug(f"Using row-value comparison for {len(columns)} columns")
        return _tuple_comparison(columns, values, mode)

    return build_general(columns, values, mode)


def build_general(columns: Sequence[OrderColumn], values: Sequence[Any], mode: Mode) -> Predicate:
    """The OR-of-ANDs lexicographic form, correct for every ordering.

    Disjunct i requires columns 0..i-1 to tie with the boundary and column i
    to sort after it; only the last column may tie in INCLUSIVE mode.
    """
    mode = Mode(mode)
    last = len(columns) - 1
    disjuncts = []
    for i, (column, value) in enumerate(zip(columns, values)):
        allow_equal = mode is Mode.INCLUSIVE and i == last
        prefix = [equality(columns[j], values[j]) for j in range(i)]
        disjuncts.append(conjoin(prefix + [inequality(column, value, allow_equal)]))

    predicate = disjoin(disjuncts)
    logger.debug(f"Built {mode.value} boundary predicate over {len(columns)} columns")
    return predicate


def equality(column: OrderColumn, value: Any) -> Predicate:
    """The column ties with the boundary value."""
    if value is None:
        return IsNull(ref=column.ref)
    return Compare(ref=column.ref, op="=", value=value)


def inequality(column: OrderColumn, value: Any, allow_equal: bool) -> Predicate:
    """The column sorts after (or, with allow_equal, with) the boundary value.

    Returns TRUE when every row qualifies and FALSE when none can.
    """
    ref = column.ref

    if value is None:
        if column.nulls is Nulls.LAST:
            # Only another NULL can tie with a NULL that sorts last.
            return IsNull(ref=ref) if allow_equal else FALSE
        return TRUE if allow_equal else Not(operand=IsNull(ref=ref))

    op = ">" if column.direction is Direction.ASC else "<"
    if allow_equal:
        op += "="
    comparison = Compare(ref=ref, op=op, value=value)

    if column.nulls is Nulls.LAST and not column.not_null:
        return disjoin([comparison, IsNull(ref=ref)])
    return comparison


def _tuple_comparison(columns, values, mode) -> TupleCompare:
    op = ">" if columns[0].direction is Direction.ASC else "<"
    if mode is Mode.INCLUSIVE:
        op += "="
    return TupleCompare(
        refs=tuple(column.ref for column in columns),
        op=op,
        values=tuple(values)
    )
