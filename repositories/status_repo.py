"""
repositories/status_repo.py
---------------------------
Data access layer for the `status` table.
"""

from typing import Optional

import psycopg2

from models.page import ListResult
from models.status import StatusDTO, StatusInsertDTO
from repositories.base import SqlRepository, page_offset
from repositories.interfaces import StatusRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class SqlStatusRepository(SqlRepository, StatusRepository):
    """psycopg2 implementation of StatusRepository."""

    # ── CREATE ────────────────────────────────────────────

    async def insert(self, status: StatusInsertDTO) -> int:
        sql = "INSERT INTO status (name) VALUES (%s) RETURNING id;"
        try:
            row = await self._fetch_one(sql, (status.name,))
        except psycopg2.Error as e:
            logger.error(f"Failed to insert status '{status.name}': {e}")
            raise
        logger.info(f"Inserted status #{row[0]} '{status.name}'")
        return row[0]

    # ── READ ──────────────────────────────────────────────

    async def get_all(
        self, items_per_page: Optional[int] = None, page: Optional[int] = None
    ) -> ListResult[StatusDTO]:
        """
        List statuses ordered by id.

        Args:
            items_per_page: Page size; None returns every row.
            page: 1-based page number; defaults to 1 when only a size is given.
        """
        sql = "SELECT id, name FROM status ORDER BY id"
        params: list = []
        if items_per_page is not None:
            sql += " LIMIT %s OFFSET %s"
            params += [items_per_page, page_offset(1 if page is None else page, items_per_page)]

        total = await self._count("SELECT COUNT(*) FROM status;")

        rows = await self._fetch_all(sql + ";", params)
        return ListResult(total, [self._row_to_status(r) for r in rows])

    async def get_by_id(self, status_id: int) -> Optional[StatusDTO]:
        sql = "SELECT id, name FROM status WHERE id = %s;"
        row = await self._fetch_one(sql, (status_id,))
        return self._row_to_status(row) if row else None

    # ── UPDATE ────────────────────────────────────────────

    async def update(self, status: StatusDTO) -> bool:
        sql = "UPDATE status SET name = %s WHERE id = %s;"
        try:
            return await self._execute(sql, (status.name, status.id)) > 0
        except psycopg2.Error as e:
            logger.error(f"Failed to update status #{status.id}: {e}")
            raise

    # ── DELETE ────────────────────────────────────────────

    async def delete(self, status_id: int) -> int:
        sql = "DELETE FROM status WHERE id = %s;"
        try:
            affected = await self._execute(sql, (status_id,))
        except psycopg2.Error as e:
            logger.error(f"Failed to delete status #{status_id}: {e}")
            raise
        if affected:
            logger.info(f"Deleted status #{status_id}")
        return affected

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_status(row: tuple) -> StatusDTO:
        return StatusDTO(id=row[0], name=row[1])
