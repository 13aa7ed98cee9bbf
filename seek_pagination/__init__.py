"""Keyset ("seek") pagination predicates for ordered result sets."""

from .pagination import (
    Direction,
    Nulls,
    OrderColumn,
    Sql,
    asc,
    desc,
    Mode,
    MissingPkPolicy,
    SeekPlan,
    build,
    seek,
    paginate,
    apaginate
)
from .errors import (
    SeekPaginationError,
    NoOrderError,
    ArityMismatchError,
    ConflictingTargetError,
    PrimaryKeyLookupUnsupportedError,
    PrimaryKeyNotFoundError,
    UnrecognizedOrderTermError,
    InvalidCursorError
)

__version__ = "0.1.0"

__all__ = [
    "Direction",
    "Nulls",
    "OrderColumn",
    "Sql",
    "asc",
    "desc",
    "Mode",
    "MissingPkPolicy",
    "SeekPlan",
    "build",
    "seek",
    "paginate",
    "apaginate",
    "SeekPaginationError",
    "NoOrderError",
    "ArityMismatchError",
    "ConflictingTargetError",
    "PrimaryKeyLookupUnsupportedError",
    "PrimaryKeyNotFoundError",
    "UnrecognizedOrderTermError",
    "InvalidCursorError"
]
