"""
repositories/specialty_repo.py
------------------------------
Data access layer for the `specialty` table.
"""

from typing import Optional, Sequence

import psycopg2

from models.page import ListResult
from models.specialty import SpecialtyDTO, SpecialtyInsertDTO
from repositories.base import SqlRepository, page_offset
from repositories.interfaces import SpecialtyRepository
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "id, name, scheduled_duration"


class SqlSpecialtyRepository(SqlRepository, SpecialtyRepository):
    """psycopg2 implementation of SpecialtyRepository."""

    # ── CREATE ────────────────────────────────────────────

    async def insert(self, specialty: SpecialtyInsertDTO) -> int:
        sql = """
            INSERT INTO specialty (name, scheduled_duration)
            VALUES (%s, %s)
            RETURNING id;
        """
        try:
            row = await self._fetch_one(sql, (specialty.name, specialty.scheduled_duration))
        except psycopg2.Error as e:
            logger.error(f"Failed to insert specialty '{specialty.name}': {e}")
            raise
        logger.info(f"Inserted specialty #{row[0]} '{specialty.name}'")
        return row[0]

    # ── READ ──────────────────────────────────────────────

    async def get_all(
        self, items_per_page: Optional[int] = None, page: Optional[int] = None
    ) -> ListResult[SpecialtyDTO]:
        sql = f"SELECT {_COLUMNS} FROM specialty ORDER BY id"
        params: list = []
        if items_per_page is not None:
            sql += " LIMIT %s OFFSET %s"
            params += [items_per_page, page_offset(1 if page is None else page, items_per_page)]

        total = await self._count("SELECT COUNT(*) FROM specialty;")

        rows = await self._fetch_all(sql + ";", params)
        return ListResult(total, [self._row_to_specialty(r) for r in rows])

    async def get_by_id(self, specialty_id: int) -> Optional[SpecialtyDTO]:
        sql = f"SELECT {_COLUMNS} FROM specialty WHERE id = %s;"
        row = await self._fetch_one(sql, (specialty_id,))
        return self._row_to_specialty(row) if row else None

    async def get_by_ids(self, specialty_ids: Sequence[int]) -> list[SpecialtyDTO]:
        if not specialty_ids:
            return []
        sql = f"SELECT {_COLUMNS} FROM specialty WHERE id = ANY(%s) ORDER BY id;"
        rows = await self._fetch_all(sql, (list(specialty_ids),))
        return [self._row_to_specialty(r) for r in rows]

    # ── UPDATE ────────────────────────────────────────────

    async def update(self, specialty: SpecialtyDTO) -> bool:
        sql = "UPDATE specialty SET name = %s, scheduled_duration = %s WHERE id = %s;"
        try:
            affected = await self._execute(
                sql, (specialty.name, specialty.scheduled_duration, specialty.id)
            )
        except psycopg2.Error as e:
            logger.error(f"Failed to update specialty #{specialty.id}: {e}")
            raise
        return affected > 0

    # ── DELETE ────────────────────────────────────────────

    async def delete(self, specialty_id: int) -> int:
        sql = "DELETE FROM specialty WHERE id = %s;"
        try:
            affected = await self._execute(sql, (specialty_id,))
        except psycopg2.Error as e:
            logger.error(f"Failed to delete specialty #{specialty_id}: {e}")
            raise
        if affected:
            logger.info(f"Deleted specialty #{specialty_id}")
        return affected

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_specialty(row: tuple) -> SpecialtyDTO:
        return SpecialtyDTO(id=row[0], name=row[1], scheduled_duration=row[2])
