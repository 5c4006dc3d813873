"""
repositories/doctor_repo.py
---------------------------
Data access layer for the `doctor` table.
All SQL queries related to doctors (and reading their specialties) live here.
"""

from typing import Optional, Sequence

import psycopg2

from models.doctor import DoctorDTO, DoctorInsertDTO, DoctorListDTO, SpecialtyDoctorDTO
from models.page import ListResult
from repositories.base import SqlRepository, check_window, contains_pattern
from repositories.interfaces import DoctorRepository
from utils.logger import get_logger

logger = get_logger(__name__)

_FROM = "FROM doctor d JOIN status s ON s.id = d.status_id"


def _doctor_filters(
    name: Optional[str], specialty_id: Optional[int], status_id: Optional[int]
) -> tuple[str, list]:
    """
    Build the WHERE fragment shared by the count and page queries.

    Returns:
        (where_sql, params); where_sql is empty when no filter is given.
    """
    clauses: list[str] = []
    params: list = []
    if name:
        clauses.append("d.name ILIKE %s ESCAPE '\\'")
        params.append(contains_pattern(name))
    if specialty_id is not None:
        clauses.append(
            "EXISTS (SELECT 1 FROM doctor_specialty ds"
            " WHERE ds.doctor_id = d.id AND ds.specialty_id = %s)"
        )
        params.append(specialty_id)
    if status_id is not None:
        clauses.append("d.status_id = %s")
        params.append(status_id)
    where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
    return where, params


class SqlDoctorRepository(SqlRepository, DoctorRepository):
    """psycopg2 implementation of DoctorRepository."""

    # ── CREATE ────────────────────────────────────────────

    async def insert_doctor(self, doctor: DoctorInsertDTO) -> int:
        """
        Insert a doctor row. Specialties are stored separately through
        DoctorSpecialtyRepository.

        Raises:
            psycopg2.errors.ForeignKeyViolation: If status_id does not exist.
        """
        sql = "INSERT INTO doctor (name, status_id) VALUES (%s, %s) RETURNING id;"
        try:
            row = await self._fetch_one(sql, (doctor.name, doctor.status_id))
        except psycopg2.Error as e:
            logger.error(f"Failed to insert doctor '{doctor.name}': {e}")
            raise
        logger.info(f"Inserted doctor #{row[0]}")
        return row[0]

    # ── READ ──────────────────────────────────────────────

    async def get_doctors(
        self,
        name: Optional[str] = None,
        specialty_id: Optional[int] = None,
        status_id: Optional[int] = None,
        offset: int = 0,
        items_per_page: int = 10,
    ) -> ListResult[DoctorListDTO]:
        """
        List doctors joined with their status.

        The count and the page are read with the same WHERE fragment, so
        `total` always describes the filtered set the page was cut from.
        """
        check_window(offset, items_per_page)
        where, params = _doctor_filters(name, specialty_id, status_id)

        total = await self._count(f"SELECT COUNT(*) {_FROM}{where};", params)

        sql = (
            f"SELECT d.id, d.name, d.status_id, s.name {_FROM}{where}"
            " ORDER BY d.id LIMIT %s OFFSET %s;"
        )
        rows = await self._fetch_all(sql, [*params, items_per_page, offset])
        return ListResult(total, [self._row_to_doctor(r) for r in rows])

    async def get_doctor_specialties(self, doctor_ids: Sequence[int]) -> list[SpecialtyDoctorDTO]:
        if not doctor_ids:
            return []
        sql = """
            SELECT ds.doctor_id, sp.id, sp.name, sp.scheduled_duration
            FROM doctor_specialty ds
            JOIN specialty sp ON sp.id = ds.specialty_id
            WHERE ds.doctor_id = ANY(%s)
            ORDER BY ds.doctor_id, sp.id;
        """
        rows = await self._fetch_all(sql, (list(doctor_ids),))
        return [
            SpecialtyDoctorDTO(
                doctor_id=r[0], specialty_id=r[1], specialty_name=r[2], scheduled_duration=r[3]
            )
            for r in rows
        ]

    async def get_by_id(self, doctor_id: int) -> Optional[DoctorListDTO]:
        sql = f"SELECT d.id, d.name, d.status_id, s.name {_FROM} WHERE d.id = %s;"
        row = await self._fetch_one(sql, (doctor_id,))
        return self._row_to_doctor(row) if row else None

    # ── UPDATE ────────────────────────────────────────────

    async def update(self, doctor: DoctorDTO) -> bool:
        sql = "UPDATE doctor SET name = %s, status_id = %s WHERE id = %s;"
        try:
            affected = await self._execute(sql, (doctor.name, doctor.status_id, doctor.id))
        except psycopg2.Error as e:
            logger.error(f"Failed to update doctor #{doctor.id}: {e}")
            raise
        return affected > 0

    # ── DELETE ────────────────────────────────────────────

    async def delete_by_doctor_id(self, doctor_id: int) -> int:
        """
        Delete a doctor row. Associations in doctor_specialty are not
        cascaded; remove them first or the delete fails on the foreign key.
        """
        sql = "DELETE FROM doctor WHERE id = %s;"
        try:
            affected = await self._execute(sql, (doctor_id,))
        except psycopg2.Error as e:
            logger.error(f"Failed to delete doctor #{doctor_id}: {e}")
            raise
        if affected:
            logger.info(f"Deleted doctor #{doctor_id}")
        return affected

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_doctor(row: tuple) -> DoctorListDTO:
        return DoctorListDTO(id=row[0], name=row[1], status_id=row[2], status_name=row[3])
