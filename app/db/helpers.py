# app/db/helpers.py
"""
Database helper functions for common patterns.
Reduces boilerplate in the repository layer.
"""

from typing import Any

import psycopg

from app.db.pool import get_db_connection, get_db_transaction
from app.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


class DatabaseError(Exception):
    """Custom exception for database operations."""

    def __init__(self, message: str, operation: str = "unknown", sqlstate: str | None = None):
        super().__init__(message)
        self.operation = operation
        self.sqlstate = sqlstate


async def fetch_one(query: str, params: tuple = ()) -> dict[str, Any] | None:
    """
    Execute query and return single row as dict.

    Args:
        query: SQL query with %s placeholders
        params: Query parameters

    Returns:
        Dict with row data or None if no results
    """
    try:
        async with await get_db_connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(query, params)
                row = await cur.fetchone()
                return row if row else None

    except psycopg.Error as e:
        logger.error("Database fetch_one error", query=query[:100], error=str(e))
        raise DatabaseError(f"Query failed: {e}", "fetch_one", e.sqlstate) from e


async def fetch_all(query: str, params: tuple = ()) -> list[dict[str, Any]]:
    """Execute query and return all rows as list of dicts."""
    try:
        async with await get_db_connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(query, params)
                return await cur.fetchall()

    except psycopg.Error as e:
        logger.error("Database fetch_all error", query=query[:100], error=str(e))
        raise DatabaseError(f"Query failed: {e}", "fetch_all", e.sqlstate) from e


async def fetch_val(query: str, params: tuple = ()) -> Any:
    """
    Execute query and return single value.

    Returns:
        Single value from first column of first row
    """
    try:
        async with await get_db_connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(query, params)
                row = await cur.fetchone()
                return list(row.values())[0] if row else None

    except psycopg.Error as e:
        logger.error("Database fetch_val error", query=query[:100], error=str(e))
        raise DatabaseError(f"Query failed: {e}", "fetch_val", e.sqlstate) from e


async def execute_transaction(queries_and_params: list[tuple]) -> list[int]:
    """
    Execute multiple queries in a single transaction.

    Args:
        queries_and_params: List of (query, params) tuples

    Returns:
        Affected row count per query, in order

    Example:
        await execute_transaction([
            ('DELETE FROM feedback WHERE contact_id = %s', (contact_id,)),
            ('DELETE FROM contacts WHERE id = %s', (contact_id,)),
        ])
    """
    try:
        rowcounts = []
        async with await get_db_transaction() as conn:
            for query, params in queries_and_params:
                cursor = await conn.execute(query, params)
                rowcounts.append(cursor.rowcount)

        logger.debug("Transaction completed successfully", query_count=len(queries_and_params))
        return rowcounts

    except psycopg.Error as e:
        logger.error("Transaction failed", query_count=len(queries_and_params), error=str(e))
        raise DatabaseError(f"Transaction failed: {e}", "transaction", e.sqlstate) from e
