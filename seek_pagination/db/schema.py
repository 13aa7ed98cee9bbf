"""Nullability information from the PostgreSQL catalog."""

import logging
from typing import FrozenSet

import asyncpg

from ..errors.exceptions import DatabaseError
from .connection import get_db_pool


logger = logging.getLogger(__name__)


async def fetch_not_null_columns(table: str, default_schema: str = "public") -> FrozenSet[str]:
    """Get the names of a table's NOT NULL columns.

    Args:
        table: Table name, optionally schema-qualified ("schema.table")
        default_schema: Schema used when the table name is unqualified

    Returns:
        Frozen set of column names usable as a nullability oracle

    Raises:
        DatabaseError: If the catalog query fails
    """
    schema, _, name = table.rpartition(".")
    schema = schema or default_schema

    pool = await get_db_pool()

    try:
        async with pool.acquire() as conn:
            query = """
                SELECT column_name
                FROM information_schema.columns
                WHERE table_schema = $1 AND table_name = $2 AND is_nullable = 'NO'
            """
            rows = await conn.fetch(query, schema, name)
    except asyncpg.PostgresError as e:
        logger.error(f"Database error reading nullability for {table}: {e}")
        raise DatabaseError(f"Database error: {e}")

    columns = frozenset(row["column_name"] for row in rows)
    logger.debug(f"Table {table} has {len(columns)} NOT NULL columns")
    return columns
