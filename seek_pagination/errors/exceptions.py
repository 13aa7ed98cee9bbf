"""Exceptions raised while building seek pagination predicates.

Every condition here is a usage error detected before any predicate is
built. Each exception is also a ProblemDetailException so that a web layer
can return it to a client unchanged.
"""

from typing import Any, Optional

from .problem_details import ProblemDetailException, PROBLEM_TYPE_BASE


class SeekPaginationError(ProblemDetailException):
    """Base class for seek pagination usage errors (400 Bad Request)."""

    status_code = 400
    title_text = "Bad Request"
    problem = "seek-pagination-error"

    def __init__(self, detail: str, **extensions: Any):
        super().__init__(
            status=self.status_code,
            title=self.title_text,
            detail=detail,
            type_uri=f"{PROBLEM_TYPE_BASE}:{self.problem}",
            **extensions
        )


class NoOrderError(SeekPaginationError):
    """Pagination was requested on an unordered dataset."""

    problem = "no-order"

    def __init__(self, detail: str = "cannot seek_paginate on a dataset with no order", **extensions: Any):
        super().__init__(detail, **extensions)


class ArityMismatchError(SeekPaginationError):
    """The boundary tuple does not have one value per ordering column."""

    problem = "arity-mismatch"

    def __init__(self, option: Optional[str] = None, expected: int = None, got: int = None, **extensions: Any):
        if option:
            detail = f"passed the wrong number of values in the :{option} option to seek_paginate"
        else:
            detail = f"expected {expected} boundary values but got {got}"
        super().__init__(detail, expected=expected, got=got, **extensions)


class ConflictingTargetError(SeekPaginationError):
    """More than one of after/from/after_pk/from_pk was given."""

    problem = "conflicting-targets"

    def __init__(self, options, **extensions: Any):
        names = [f":{option}" for option in options]
        if len(names) == 2:
            detail = f"cannot pass both {names[0]} and {names[1]} params to seek_paginate"
        else:
            detail = f"cannot pass more than one of {', '.join(names[:-1])} and {names[-1]} params to seek_paginate"
        super().__init__(detail, options=list(options), **extensions)


class PrimaryKeyLookupUnsupportedError(SeekPaginationError):
    """A primary key was given but there is no row locator to resolve it."""

    problem = "pk-lookup-unsupported"

    def __init__(self, option: str, **extensions: Any):
        super().__init__(
            f"passed the :{option} option to seek_paginate on a dataset that doesn't have an associated model",
            **extensions
        )


class PrimaryKeyNotFoundError(SeekPaginationError):
    """The row locator found no row for the requested primary key."""

    status_code = 404
    title_text = "Not Found"
    problem = "pk-not-found"

    def __init__(self, option: str, pk: Any, **extensions: Any):
        self.pk = pk
        super().__init__(
            f"passed the :{option} option to seek_paginate, but no row was found for primary key {pk!r}",
            **extensions
        )


class UnrecognizedOrderTermError(SeekPaginationError):
    """An ordering entry is neither a bare reference nor an annotated one."""

    problem = "unrecognized-order-term"

    def __init__(self, term: Any, **extensions: Any):
        self.term = term
        super().__init__(f"unrecognized ordering term for seek_paginate: {term!r}", **extensions)


class InvalidCursorError(SeekPaginationError):
    """A pagination cursor could not be decoded."""

    problem = "invalid-cursor"


class DatabaseError(ProblemDetailException):
    """A storage call made on behalf of seek pagination failed."""

    def __init__(self, detail: str = "Database error", **extensions: Any):
        super().__init__(
            status=500,
            title="Internal Server Error",
            detail=detail,
            type_uri=f"{PROBLEM_TYPE_BASE}:database-error",
            **extensions
        )
