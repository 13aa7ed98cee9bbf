"""Keyset ("seek") pagination: orderings, boundary predicates and cursors."""

from .ordering import (
    AnnotatedColumn,
    BareColumn,
    Direction,
    Nulls,
    OrderColumn,
    Sql,
    asc,
    desc,
    normalize_ordering,
    normalize_term,
    reverse_order
)
from .predicate import (
    And,
    Compare,
    IsNull,
    Not,
    Or,
    Predicate,
    TupleCompare,
    conjoin,
    disjoin,
    dump_predicate,
    load_predicate
)
from .builder import Mode, build, build_general, tuple_comparison_applies
from .seek import (
    UNSET,
    Found,
    NotFound,
    LookupResult,
    MissingPkPolicy,
    SeekPlan,
    seek,
    paginate,
    apaginate
)
from .evaluate import evaluate, matches, sort_key, paginate_rows
from .cursor import (
    CursorData,
    PaginationParams,
    PaginatedResponse,
    encode_cursor,
    decode_cursor,
    paginate_query_results
)

__all__ = [
    "AnnotatedColumn",
    "BareColumn",
    "Direction",
    "Nulls",
    "OrderColumn",
    "Sql",
    "asc",
    "desc",
    "normalize_ordering",
    "normalize_term",
    "reverse_order",
    "And",
    "Compare",
    "IsNull",
    "Not",
    "Or",
    "Predicate",
    "TupleCompare",
    "conjoin",
    "disjoin",
    "dump_predicate",
    "load_predicate",
    "Mode",
    "build",
    "build_general",
    "tuple_comparison_applies",
    "UNSET",
    "Found",
    "NotFound",
    "LookupResult",
    "MissingPkPolicy",
    "SeekPlan",
    "seek",
    "paginate",
    "apaginate",
    "evaluate",
    "matches",
    "sort_key",
    "paginate_rows",
    "CursorData",
    "PaginationParams",
    "PaginatedResponse",
    "encode_cursor",
    "decode_cursor",
    "paginate_query_results"
]
