"""
repositories/base.py
--------------------
Shared plumbing for the psycopg2 repositories.

Every statement runs on a cursor of the injected connection inside
`asyncio.to_thread`, so the database round trip suspends the calling task
instead of blocking the event loop. Repositories never commit, roll back
or release the connection: that belongs to the caller's unit of work.
"""

import asyncio
from typing import Any, Optional, Sequence

from psycopg2.extras import execute_values


def page_offset(page: Optional[int], items_per_page: Optional[int]) -> int:
    """
    Convert a 1-based page number into a row offset.

    Raises:
        ValueError: If page or items_per_page is below 1.
    """
    if page is None or items_per_page is None:
        return 0
    if page < 1:
        raise ValueError("page must be >= 1")
    if items_per_page < 1:
        raise ValueError("items_per_page must be >= 1")
    return (page - 1) * items_per_page


def contains_pattern(text: str) -> str:
    """
    Wrap `text` for a literal substring match with `ILIKE %s ESCAPE '\\'`.
    Backslash, % and _ in the input are escaped so they match themselves.
    """
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def check_window(offset: int, items_per_page: int) -> None:
    """Validate a LIMIT/OFFSET window before any SQL is sent."""
    if offset < 0:
        raise ValueError("offset must be >= 0")
    if items_per_page < 1:
        raise ValueError("items_per_page must be >= 1")


class SqlRepository:
    """Base class holding the connection and the threaded execute helpers."""

    def __init__(self, connection):
        self._connection = connection

    # ── sync primitives (run in a worker thread) ──────────

    def _fetch_all_sync(self, sql: str, params: Sequence[Any]) -> list[tuple]:
        with self._connection.cursor() as cur:
            cur.execute(sql, params)
            return cur.fetchall()

    def _fetch_one_sync(self, sql: str, params: Sequence[Any]) -> Optional[tuple]:
        with self._connection.cursor() as cur:
            cur.execute(sql, params)
            return cur.fetchone()

    def _execute_sync(self, sql: str, params: Sequence[Any]) -> int:
        with self._connection.cursor() as cur:
            cur.execute(sql, params)
            return cur.rowcount

    def _execute_values_sync(self, sql: str, rows: list[tuple]) -> int:
        with self._connection.cursor() as cur:
            # page_size covers every row so the batch goes out as one statement
            execute_values(cur, sql, rows, page_size=max(len(rows), 1))
            return cur.rowcount

    # ── async wrappers ────────────────────────────────────

    async def _fetch_all(self, sql: str, params: Sequence[Any] = ()) -> list[tuple]:
        return await asyncio.to_thread(self._fetch_all_sync, sql, params)

    async def _fetch_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[tuple]:
        return await asyncio.to_thread(self._fetch_one_sync, sql, params)

    async def _execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run a write statement and return the affected row count."""
        return await asyncio.to_thread(self._execute_sync, sql, params)

    async def _execute_values(self, sql: str, rows: list[tuple]) -> int:
        """Run a multi-row INSERT ... VALUES %s as one batched statement."""
        return await asyncio.to_thread(self._execute_values_sync, sql, rows)

    async def _count(self, sql: str, params: Sequence[Any] = ()) -> int:
        row = await self._fetch_one(sql, params)
        return int(row[0]) if row else 0
