"""In-memory evaluation of predicates and orderings.

Evaluation follows SQL three-valued logic: a comparison against NULL is
unknown (None), and a row only matches when the predicate is True. Rows are
mappings keyed by the ordering refs.
"""

import operator
from functools import cmp_to_key
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from .ordering import Direction, Nulls, OrderColumn
from .predicate import And, Compare, IsNull, Not, Or, Predicate, TupleCompare


_OPERATORS = {
    ">": operator.gt,
    ">=": operator.ge,
    "<": operator.lt,
    "<=": operator.le,
    "=": operator.eq,
}


def evaluate(predicate: Predicate, row: Mapping[Any, Any]) -> Optional[bool]:
    """Evaluate a predicate against one row, returning True, False or None."""
    if isinstance(predicate, Compare):
        value = row[predicate.ref]
        if value is None or predicate.value is None:
            return None
        return _OPERATORS[predicate.op](value, predicate.value)

    if isinstance(predicate, IsNull):
        return row[predicate.ref] is None

    if isinstance(predicate, Not):
        result = evaluate(predicate.operand, row)
        return None if result is None else not result

    if isinstance(predicate, And):
        results = [evaluate(operand, row) for operand in predicate.operands]
        if False in results:
            return False
        return None if None in results else True

    if isinstance(predicate, Or):
        results = [evaluate(operand, row) for operand in predicate.operands]
        if True in results:
            return True
        return None if None in results else False

    if isinstance(predicate, TupleCompare):
        return _evaluate_row_comparison(predicate, row)

    raise TypeError(f"Unknown predicate node: {predicate!r}")


def matches(predicate: Optional[Predicate], row: Mapping[Any, Any]) -> bool:
    """Whether a row passes a WHERE clause; no predicate passes everything."""
    return predicate is None or evaluate(predicate, row) is True


def compare_rows(columns: Sequence[OrderColumn], left: Mapping, right: Mapping) -> int:
    """Three-way comparison of two rows under an ordering."""
    for column in columns:
        a, b = left[column.ref], right[column.ref]
        if a is None and b is None:
            continue
        if a is None or b is None:
            null_first = column.nulls is Nulls.FIRST
            return -1 if (a is None) == null_first else 1
        if a == b:
            continue
        result = -1 if a < b else 1
        return result if column.direction is Direction.ASC else -result
    return 0


def sort_key(columns: Sequence[OrderColumn]):
    """Key function sorting rows the way ``ORDER BY`` would."""
    return cmp_to_key(lambda left, right: compare_rows(columns, left, right))


def paginate_rows(rows: Iterable[Mapping], plan) -> List[Mapping]:
    """Apply a SeekPlan to an in-memory sequence of rows."""
    selected = [row for row in rows if matches(plan.where, row)]
    selected.sort(key=sort_key(plan.order))
    if plan.limit is not None:
        selected = selected[:plan.limit]
    return selected


def _evaluate_row_comparison(predicate: TupleCompare, row: Mapping) -> Optional[bool]:
    # Row-value comparison: the first non-equal pair decides.
    for ref, boundary in zip(predicate.refs, predicate.values):
        value = row[ref]
        if value is None or boundary is None:
            return None
        if value != boundary:
            return _OPERATORS[predicate.op[0]](value, boundary)
    return predicate.op.endswith("=")
