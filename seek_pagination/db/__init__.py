"""PostgreSQL collaborators: rendering, row lookup, catalog and page queries."""

from .connection import DatabaseManager, db_manager, get_db_pool
from .render import quote_ident, render_ref, render_predicate, render_order_clause
from .locator import PostgresRowLocator
from .schema import fetch_not_null_columns
from .queries import build_page_query, fetch_page, seek_paginate

__all__ = [
    "DatabaseManager",
    "db_manager",
    "get_db_pool",
    "quote_ident",
    "render_ref",
    "render_predicate",
    "render_order_clause",
    "PostgresRowLocator",
    "fetch_not_null_columns",
    "build_page_query",
    "fetch_page",
    "seek_paginate"
]
