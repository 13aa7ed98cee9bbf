"""Error handling module for seek pagination."""

from .problem_details import (
    ProblemDetail,
    ProblemDetailException,
    build_problem_detail
)
from .exceptions import (
    SeekPaginationError,
    NoOrderError,
    ArityMismatchError,
    ConflictingTargetError,
    PrimaryKeyLookupUnsupportedError,
    PrimaryKeyNotFoundError,
    UnrecognizedOrderTermError,
    InvalidCursorError,
    DatabaseError
)
from .handlers import register_exception_handlers

__all__ = [
    "ProblemDetail",
    "ProblemDetailException",
    "build_problem_detail",
    "SeekPaginationError",
    "NoOrderError",
    "ArityMismatchError",
    "ConflictingTargetError",
    "PrimaryKeyLookupUnsupportedError",
    "PrimaryKeyNotFoundError",
    "UnrecognizedOrderTermError",
    "InvalidCursorError",
    "DatabaseError",
    "register_exception_handlers"
]
