"""Ordering terms and their normalized OrderColumn form."""

from enum import Enum
from typing import Any, Callable, Collection, Iterable, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..errors.exceptions import NoOrderError, UnrecognizedOrderTermError


class Direction(str, Enum):
    """Sort direction of one ordering column."""

    ASC = "asc"
    DESC = "desc"

    def reverse(self) -> "Direction":
        return Direction.DESC if self is Direction.ASC else Direction.ASC


class Nulls(str, Enum):
    """Where NULL values sort relative to non-null values."""

    FIRST = "first"
    LAST = "last"

    def reverse(self) -> "Nulls":
        return Nulls.LAST if self is Nulls.FIRST else Nulls.FIRST


def default_nulls(direction: Direction) -> Nulls:
    """NULL sorts high: last when ascending, first when descending."""
    return Nulls.LAST if direction is Direction.ASC else Nulls.FIRST


class Sql(BaseModel):
    """A verbatim SQL expression used as an ordering reference."""

    model_config = ConfigDict(frozen=True)

    text: str

    def __init__(self, text: str, **data: Any):
        super().__init__(text=text, **data)

    def __str__(self) -> str:
        return self.text


class BareColumn(BaseModel):
    """An ordering term with no direction or null ordering attached."""

    model_config = ConfigDict(frozen=True)

    ref: Any


class AnnotatedColumn(BaseModel):
    """An ordering term with an explicit direction and optional null ordering."""

    model_config = ConfigDict(frozen=True)

    ref: Any
    direction: Direction
    nulls: Optional[Nulls] = None


class OrderColumn(BaseModel):
    """Normalized description of one ORDER BY term."""

    model_config = ConfigDict(frozen=True)

    ref: Any = Field(description="Opaque column or expression reference")
    direction: Direction = Direction.ASC
    nulls: Nulls = Field(description="Defaults from the direction when omitted")
    not_null: bool = False

    @model_validator(mode="before")
    @classmethod
    def default_nulls_from_direction(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("nulls") is None:
            direction = Direction(data.get("direction", Direction.ASC))
            data = {**data, "nulls": default_nulls(direction)}
        return data

    @property
    def has_default_nulls(self) -> bool:
        return self.nulls is default_nulls(self.direction)

    def reversed(self) -> "OrderColumn":
        """The same column sorted the opposite way, NULLs included."""
        return self.model_copy(
            update={"direction": self.direction.reverse(), "nulls": self.nulls.reverse()}
        )


OrderTerm = Union[BareColumn, AnnotatedColumn, OrderColumn, str, Sql]

# A collection of refs known to be non-null, or a predicate over refs.
NullabilityOracle = Union[Collection[Any], Callable[[Any], bool]]


def asc(ref: Any, nulls: Optional[Union[Nulls, str]] = None) -> AnnotatedColumn:
    """Ascending ordering term."""
    return AnnotatedColumn(ref=ref, direction=Direction.ASC, nulls=nulls)


def desc(ref: Any, nulls: Optional[Union[Nulls, str]] = None) -> AnnotatedColumn:
    """Descending ordering term."""
    return AnnotatedColumn(ref=ref, direction=Direction.DESC, nulls=nulls)


def normalize_term(term: OrderTerm) -> OrderColumn:
    """Resolve one raw ordering term into an OrderColumn.

    Bare references (including plain strings and Sql expressions) sort
    ascending with NULLs last. Annotated terms keep their direction and fall
    back to the direction default when no null ordering is given.

    Raises:
        UnrecognizedOrderTermError: If the term has any other shape
    """
    if isinstance(term, OrderColumn):
        return term
    if isinstance(term, AnnotatedColumn):
        return OrderColumn(ref=term.ref, direction=term.direction, nulls=term.nulls)
    if isinstance(term, BareColumn):
        return OrderColumn(ref=term.ref)
    if isinstance(term, (str, Sql)):
        return OrderColumn(ref=term)
    raise UnrecognizedOrderTermError(term)


def normalize_ordering(
    terms: Iterable[OrderTerm],
    not_null: Optional[NullabilityOracle] = None
) -> Tuple[OrderColumn, ...]:
    """Normalize an ordering and merge nullability information into it.

    Args:
        terms: Raw ordering terms, most significant first
        not_null: Refs known to be non-null, or a callable answering that
            per ref. When omitted every column is treated as nullable.

    Returns:
        Tuple of OrderColumns in the same order

    Raises:
        NoOrderError: If the ordering is empty
        UnrecognizedOrderTermError: If a term cannot be interpreted
    """
    if isinstance(terms, (str, Sql, BareColumn, AnnotatedColumn, OrderColumn)):
        terms = [terms]
    columns = [normalize_term(term) for term in (terms or ())]
    if not columns:
        raise NoOrderError()

    if not_null is not None:
        is_not_null = _as_predicate(not_null)
        columns = [
            column.model_copy(update={"not_null": True}) if is_not_null(column.ref) else column
            for column in columns
        ]

    return tuple(columns)


def reverse_order(columns: Iterable[OrderColumn]) -> Tuple[OrderColumn, ...]:
    """Mirror an ordering, as used to page backwards."""
    return tuple(column.reversed() for column in columns)


def _as_predicate(not_null: NullabilityOracle) -> Callable[[Any], bool]:
    if callable(not_null):
        return not_null
    known = set(not_null)
    return lambda ref: ref in known
