"""Run keyset-paginated queries against PostgreSQL."""

import logging
from typing import Any, Dict, List, Optional, Sequence

import asyncpg

from ..errors.exceptions import DatabaseError
from ..pagination.ordering import NullabilityOracle, OrderTerm
from ..pagination.seek import UNSET, MissingPkPolicy, SeekPlan, apaginate
from .connection import get_db_pool
from .locator import PostgresRowLocator
from .render import quote_ident, render_order_clause, render_predicate
from .schema import fetch_not_null_columns


logger = logging.getLogger(__name__)


def build_page_query(table: str, plan: SeekPlan, columns: str = "*") -> tuple[str, List[Any]]:
    """Build the SELECT statement for one page.

    Returns:
        Tuple of (query, parameters)
    """
    params: List[Any] = []
    query = f"SELECT {columns} FROM {quote_ident(table)}"

    if plan.where is not None:
        where_clause, params = render_predicate(plan.where)
        query += f" WHERE {where_clause}"

    query += f" {render_order_clause(plan.order)}"

    if plan.limit is not None:
        params.append(plan.limit)
        query += f" LIMIT ${len(params)}"

    return query, params


async def fetch_page(table: str, plan: Optional[SeekPlan], columns: str = "*") -> List[Dict[str, Any]]:
    """Execute a SeekPlan.

    Args:
        table: Table to select from
        plan: Plan from paginate; None (missing-pk policy NIL) yields no rows
        columns: Select list

    Returns:
        Rows as dictionaries

    Raises:
        DatabaseError: If the query fails
    """
    if plan is None:
        return []

    query, params = build_page_query(table, plan, columns)
    pool = await get_db_pool()

    try:
        async with pool.acquire() as conn:
            rows = await conn.fetch(query, *params)
    except asyncpg.PostgresError as e:
        logger.error(f"Database error fetching page from {table}: {e}")
        raise DatabaseError(f"Database error: {e}")

    logger.debug(f"Fetched {len(rows)} rows from {table}")
    return [dict(row) for row in rows]


async def seek_paginate(
    table: str,
    order: Sequence[OrderTerm],
    limit: Optional[int] = None,
    *,
    after: Any = UNSET,
    from_: Any = UNSET,
    after_pk: Any = UNSET,
    from_pk: Any = UNSET,
    pk_column: str = "id",
    columns: str = "*",
    not_null: Optional[NullabilityOracle] = None,
    missing_pk: Optional[MissingPkPolicy] = None
) -> List[Dict[str, Any]]:
    """Fetch one page of a table in keyset order.

    When ``not_null`` is omitted the table's NOT NULL columns are read from
    the catalog, so uniform non-null orderings use a row-value comparison.
    Primary keys passed as ``after_pk``/``from_pk`` are looked up in
    ``pk_column``.
    """
    if not_null is None:
        not_null = await fetch_not_null_columns(table)

    plan = await apaginate(
        order,
        limit,
        after=after,
        from_=from_,
        after_pk=after_pk,
        from_pk=from_pk,
        locator=PostgresRowLocator(table, pk_column),
        not_null=not_null,
        missing_pk=missing_pk
    )
    return await fetch_page(table, plan, columns)
