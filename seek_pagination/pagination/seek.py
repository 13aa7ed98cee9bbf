"""Seek pagination facade.

``paginate`` is the entry point used by query-building code: it validates
the ordering and targeting options, resolves primary keys through a row
locator and returns a SeekPlan (ordering, WHERE predicate and limit). It
does no comparison logic of its own; see ``builder.build``.
"""

import logging
from enum import Enum
from typing import Any, Mapping, Optional, Protocol, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict

from ..config import get_settings
from ..errors.exceptions import (
    ArityMismatchError,
    ConflictingTargetError,
    PrimaryKeyLookupUnsupportedError,
    PrimaryKeyNotFoundError,
)
from .builder import Mode, build
from .ordering import NullabilityOracle, OrderColumn, OrderTerm, normalize_ordering
from .predicate import FALSE, Predicate


logger = logging.getLogger(__name__)


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


# Marks an option as not given; None is a valid (NULL) boundary value.
UNSET: Any = _Unset()

_MODES = {"after": Mode.EXCLUSIVE, "from": Mode.INCLUSIVE}


class MissingPkPolicy(str, Enum):
    """What paginate does when a primary key has no matching row."""

    RAISE = "raise"
    NIL = "nil"
    NULLIFY = "nullify"
    IGNORE = "ignore"


class Found(BaseModel):
    """A row locator resolved the primary key to a boundary tuple."""

    model_config = ConfigDict(frozen=True)

    values: Tuple[Any, ...]

    @classmethod
    def from_row(cls, row: Mapping[Any, Any], columns: Sequence[OrderColumn]) -> "Found":
        return cls(values=tuple(row[column.ref] for column in columns))


class NotFound(BaseModel):
    """No row exists for the primary key."""

    model_config = ConfigDict(frozen=True)

    pk: Any = None


LookupResult = Union[Found, NotFound]


class RowLocator(Protocol):
    def __call__(self, pk: Any, columns: Sequence[OrderColumn]) -> LookupResult: ...


class AsyncRowLocator(Protocol):
    async def __call__(self, pk: Any, columns: Sequence[OrderColumn]) -> LookupResult: ...


class SeekPlan(BaseModel):
    """Everything a renderer needs to fetch one page."""

    model_config = ConfigDict(frozen=True)

    order: Tuple[OrderColumn, ...]
    where: Optional[Predicate] = None
    limit: Optional[int] = None


def seek(
    order: Sequence[OrderTerm],
    boundary: Any,
    mode: Mode = Mode.EXCLUSIVE,
    not_null: Optional[NullabilityOracle] = None
) -> Predicate:
    """Build the boundary predicate for an ordering and a boundary tuple.

    A single-column ordering also accepts a bare value as the boundary.

    Raises:
        NoOrderError: If the ordering is empty
        ArityMismatchError: If the boundary length differs from the ordering
        UnrecognizedOrderTermError: If an ordering term cannot be interpreted
    """
    columns = normalize_ordering(order, not_null)
    mode = Mode(mode)
    option = "after" if mode is Mode.EXCLUSIVE else "from"
    return build(columns, _boundary_values(boundary, columns, option), mode, option)


def paginate(
    order: Sequence[OrderTerm],
    limit: Optional[int] = None,
    *,
    after: Any = UNSET,
    from_: Any = UNSET,
    after_pk: Any = UNSET,
    from_pk: Any = UNSET,
    locator: Optional[RowLocator] = None,
    not_null: Optional[NullabilityOracle] = None,
    missing_pk: Optional[Union[MissingPkPolicy, str]] = None
) -> Optional[SeekPlan]:
    """Plan one page of a keyset-paginated query.

    Args:
        order: Ordering terms; must uniquely order the rows
        limit: Page size, or None for no limit
        after: Boundary tuple; rows strictly after it are returned
        from_: Boundary tuple; rows from it onwards are returned
        after_pk: Primary key of the row to start after
        from_pk: Primary key of the row to start from
        locator: Resolves a primary key into a boundary tuple
        not_null: Refs known to be non-null (enables row-value comparison)
        missing_pk: Policy when the primary key has no row; defaults to
            the ``missing_pk_policy`` setting

    Returns:
        SeekPlan, or None when the missing-pk policy is NIL and the key
        was not found
    """
    columns, target = _prepare(order, after, from_, after_pk, from_pk, not_null)
    if target is None:
        return SeekPlan(order=columns, limit=limit)

    option, value = target
    if not option.endswith("_pk"):
        return _plan(columns, option, value, limit)

    if locator is None:
        raise PrimaryKeyLookupUnsupportedError(option)
    result = locator(value, columns)
    return _plan_from_lookup(columns, option, value, result, limit, missing_pk)


async def apaginate(
    order: Sequence[OrderTerm],
    limit: Optional[int] = None,
    *,
    after: Any = UNSET,
    from_: Any = UNSET,
    after_pk: Any = UNSET,
    from_pk: Any = UNSET,
    locator: Optional[AsyncRowLocator] = None,
    not_null: Optional[NullabilityOracle] = None,
    missing_pk: Optional[Union[MissingPkPolicy, str]] = None
) -> Optional[SeekPlan]:
    """Same as ``paginate`` with an awaitable row locator."""
    columns, target = _prepare(order, after, from_, after_pk, from_pk, not_null)
    if target is None:
        return SeekPlan(order=columns, limit=limit)

    option, value = target
    if not option.endswith("_pk"):
        return _plan(columns, option, value, limit)

    if locator is None:
        raise PrimaryKeyLookupUnsupportedError(option)
    result = await locator(value, columns)
    return _plan_from_lookup(columns, option, value, result, limit, missing_pk)


def _prepare(order, after, from_, after_pk, from_pk, not_null):
    columns = normalize_ordering(order, not_null)

    given = [
        (name, value)
        for name, value in (("after", after), ("from", from_), ("after_pk", after_pk), ("from_pk", from_pk))
        if value is not UNSET
    ]
    if len(given) > 1:
        raise ConflictingTargetError([name for name, _ in given])

    return columns, (given[0] if given else None)


def _plan(columns, option: str, boundary: Any, limit: Optional[int]) -> SeekPlan:
    values = _boundary_values(boundary, columns, option)
    where = build(columns, values, _MODES[option], option)
    return SeekPlan(order=columns, where=where, limit=limit)


def _plan_from_lookup(columns, option, pk, result: LookupResult, limit, missing_pk) -> Optional[SeekPlan]:
    option_name = option[:-len("_pk")]
    if isinstance(result, Found):
        return _plan(columns, option_name, result.values, limit)

    if isinstance(missing_pk, str):
        missing_pk = missing_pk.lower()
    policy = MissingPkPolicy(missing_pk or get_settings().missing_pk_policy)
    if policy is MissingPkPolicy.RAISE:
        raise PrimaryKeyNotFoundError(option, pk)

    logger.info(f"No row for primary key {pk!r} passed as :{option}, applying '{policy.value}' policy")
    if policy is MissingPkPolicy.NIL:
        return None
    if policy is MissingPkPolicy.NULLIFY:
        return SeekPlan(order=columns, where=FALSE, limit=limit)
    return SeekPlan(order=columns, limit=limit)


def _boundary_values(boundary: Any, columns: Sequence[OrderColumn], option: str) -> Tuple[Any, ...]:
    if isinstance(boundary, (list, tuple)):
        values = tuple(boundary)
    elif len(columns) == 1:
        values = (boundary,)
    else:
        raise ArityMismatchError(option, expected=len(columns), got=1)
    return values
