"""Resolve primary keys into boundary tuples with a single-row read."""

import logging
from typing import Any, Sequence

import asyncpg

from ..errors.exceptions import DatabaseError
from ..pagination.ordering import OrderColumn
from ..pagination.seek import Found, LookupResult, NotFound
from .connection import get_db_pool
from .render import quote_ident, render_ref


logger = logging.getLogger(__name__)


class PostgresRowLocator:
    """Async row locator reading the ordering values of one row by primary key."""

    def __init__(self, table: str, pk_column: str = "id"):
        self.table = table
        self.pk_column = pk_column

    def build_query(self, columns: Sequence[OrderColumn]) -> str:
        # Ordering refs may be expressions, so every value gets a positional alias.
        select_list = ", ".join(
            f"{render_ref(column.ref)} AS v{i}" for i, column in enumerate(columns)
        )
        return f"""
            SELECT {select_list}
            FROM {quote_ident(self.table)}
            WHERE {quote_ident(self.pk_column)} = $1
            LIMIT 1
        """

    async def __call__(self, pk: Any, columns: Sequence[OrderColumn]) -> LookupResult:
        """Look up the boundary tuple for a primary key.

        Returns:
            Found with one value per column, or NotFound

        Raises:
            DatabaseError: If the query fails
        """
        pool = await get_db_pool()
        query = self.build_query(columns)

        try:
            async with pool.acquire() as conn:
                row = await conn.fetchrow(query, pk)
        except asyncpg.PostgresError as e:
            logger.error(f"Database error locating row {pk!r} in {self.table}: {e}")
            raise DatabaseError(f"Database error: {e}")

        if row is None:
            logger.debug(f"No row in {self.table} for primary key {pk!r}")
            return NotFound(pk=pk)

        return Found(values=tuple(row[f"v{i}"] for i in range(len(columns))))
