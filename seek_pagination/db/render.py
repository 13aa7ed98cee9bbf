"""Render predicates and orderings as PostgreSQL for asyncpg."""

from typing import Any, List, Sequence, Tuple

from ..pagination.ordering import Direction, OrderColumn, Sql
from ..pagination.predicate import And, Compare, IsNull, Not, Or, Predicate, TupleCompare


def quote_ident(name: str) -> str:
    """Quote a (possibly schema- or table-qualified) identifier."""
    return ".".join('"' + part.replace('"', '""') + '"' for part in name.split("."))


def render_ref(ref: Any) -> str:
    """Render an ordering reference: strings are identifiers, Sql is verbatim."""
    if isinstance(ref, Sql):
        return ref.text
    if isinstance(ref, str):
        return quote_ident(ref)
    raise TypeError(f"Cannot render ordering reference {ref!r} as SQL")


class _PredicateRenderer:
    """Accumulates positional parameters while walking a predicate."""

    def __init__(self, start: int):
        self.params: List[Any] = []
        self.param_count = start - 1

    def param(self, value: Any) -> str:
        self.param_count += 1
        self.params.append(value)
        return f"${self.param_count}"

    def render(self, node: Predicate) -> str:
        if isinstance(node, Compare):
            return f"{render_ref(node.ref)} {node.op} {self.param(node.value)}"

        if isinstance(node, IsNull):
            return f"{render_ref(node.ref)} IS NULL"

        if isinstance(node, Not):
            if isinstance(node.operand, IsNull):
                return f"{render_ref(node.operand.ref)} IS NOT NULL"
            return f"NOT ({self.render(node.operand)})"

        if isinstance(node, And):
            if not node.operands:
                return "TRUE"
            return " AND ".join(self.operand(child) for child in node.operands)

        if isinstance(node, Or):
            if not node.operands:
                return "FALSE"
            return " OR ".join(self.operand(child) for child in node.operands)

        if isinstance(node, TupleCompare):
            refs = ", ".join(render_ref(ref) for ref in node.refs)
            params = ", ".join(self.param(value) for value in node.values)
            return f"({refs}) {node.op} ({params})"

        raise TypeError(f"Unknown predicate node: {node!r}")

    def operand(self, node: Predicate) -> str:
        sql = self.render(node)
        if isinstance(node, (And, Or)) and node.operands:
            return f"({sql})"
        return sql


def render_predicate(predicate: Predicate, start: int = 1) -> Tuple[str, List[Any]]:
    """Render a predicate as a SQL expression.

    A top-level AND/OR is parenthesized, so the result can be joined to
    other conditions with AND.

    Args:
        predicate: Predicate tree
        start: Number of the first positional parameter, for appending to
            a query that already has parameters

    Returns:
        Tuple of (sql, parameters)
    """
    renderer = _PredicateRenderer(start)
    sql = renderer.operand(predicate)
    return sql, renderer.params


def render_order_clause(columns: Sequence[OrderColumn]) -> str:
    """Build the ORDER BY clause for an ordering.

    NULLS FIRST/LAST is only spelled out where it differs from PostgreSQL's
    default for the direction.
    """
    terms = []
    for column in columns:
        term = f"{render_ref(column.ref)} {'ASC' if column.direction is Direction.ASC else 'DESC'}"
        if not column.has_default_nulls:
            term += f" NULLS {column.nulls.value.upper()}"
        terms.append(term)
    return "ORDER BY " + ", ".join(terms)
