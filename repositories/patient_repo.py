"""
repositories/patient_repo.py
----------------------------
Data access layer for the `patient` table.
"""

from typing import Optional

import psycopg2

from models.page import ListResult
from models.patient import PatientDTO, PatientInsertDTO, PatientListDTO
from repositories.base import SqlRepository, check_window, contains_pattern
from repositories.interfaces import PatientRepository
from utils.logger import get_logger

logger = get_logger(__name__)

_FROM = "FROM patient p JOIN status s ON s.id = p.status_id"
_COLUMNS = "p.id, p.name, p.phone_number, p.document_number, p.status_id, s.name, p.birth_date"


def _patient_filters(
    name: Optional[str], document_number: Optional[str], status_id: Optional[int]
) -> tuple[str, list]:
    """WHERE fragment shared by the count and page queries."""
    clauses: list[str] = []
    params: list = []
    if name:
        clauses.append("p.name ILIKE %s ESCAPE '\\'")
        params.append(contains_pattern(name))
    if document_number:
        clauses.append("p.document_number = %s")
        params.append(document_number)
    if status_id is not None:
        clauses.append("p.status_id = %s")
        params.append(status_id)
    where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
    return where, params


class SqlPatientRepository(SqlRepository, PatientRepository):
    """psycopg2 implementation of PatientRepository."""

    # ── CREATE ────────────────────────────────────────────

    async def insert_patient(self, patient: PatientInsertDTO) -> int:
        sql = """
            INSERT INTO patient (name, phone_number, document_number, status_id, birth_date)
            VALUES (%s, %s, %s, %s, %s)
            RETURNING id;
        """
        try:
            row = await self._fetch_one(sql, (
                patient.name, patient.phone_number, patient.document_number,
                patient.status_id, patient.birth_date,
            ))
        except psycopg2.Error as e:
            logger.error(f"Failed to insert patient '{patient.document_number}': {e}")
            raise
        logger.info(f"Inserted patient #{row[0]}")
        return row[0]

    # ── READ ──────────────────────────────────────────────

    async def get_patients(
        self,
        name: Optional[str] = None,
        document_number: Optional[str] = None,
        status_id: Optional[int] = None,
        offset: int = 0,
        items_per_page: int = 10,
    ) -> ListResult[PatientListDTO]:
        """
        List patients joined with their status.

        Args:
            name: Case-insensitive substring of the patient's name.
            document_number: Exact document number.
            status_id: Only patients with this status.
            offset: Rows to skip.
            items_per_page: Maximum rows to return.
        """
        check_window(offset, items_per_page)
        where, params = _patient_filters(name, document_number, status_id)

        total = await self._count(f"SELECT COUNT(*) {_FROM}{where};", params)

        sql = f"SELECT {_COLUMNS} {_FROM}{where} ORDER BY p.id LIMIT %s OFFSET %s;"
        rows = await self._fetch_all(sql, [*params, items_per_page, offset])
        return ListResult(total, [self._row_to_patient(r) for r in rows])

    async def get_by_id(self, patient_id: int) -> Optional[PatientListDTO]:
        sql = f"SELECT {_COLUMNS} {_FROM} WHERE p.id = %s;"
        row = await self._fetch_one(sql, (patient_id,))
        return self._row_to_patient(row) if row else None

    # ── UPDATE ────────────────────────────────────────────

    async def update(self, patient: PatientDTO) -> bool:
        sql = """
            UPDATE patient
            SET name = %s, phone_number = %s, document_number = %s, status_id = %s, birth_date = %s
            WHERE id = %s;
        """
        try:
            affected = await self._execute(sql, (
                patient.name, patient.phone_number, patient.document_number,
                patient.status_id, patient.birth_date, patient.id,
            ))
        except psycopg2.Error as e:
            logger.error(f"Failed to update patient #{patient.id}: {e}")
            raise
        return affected > 0

    # ── DELETE ────────────────────────────────────────────

    async def delete_by_patient_id(self, patient_id: int) -> int:
        sql = "DELETE FROM patient WHERE id = %s;"
        try:
            affected = await self._execute(sql, (patient_id,))
        except psycopg2.Error as e:
            logger.error(f"Failed to delete patient #{patient_id}: {e}")
            raise
        if affected:
            logger.info(f"Deleted patient #{patient_id}")
        return affected

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_patient(row: tuple) -> PatientListDTO:
        """Convert a database row tuple to a PatientListDTO (birth_date as ISO string)."""
        birth_date = row[6]
        return PatientListDTO(
            id=row[0],
            name=row[1],
            phone_number=row[2],
            document_number=row[3],
            status_id=row[4],
            status_name=row[5],
            birth_date=birth_date if isinstance(birth_date, str) else birth_date.isoformat(),
        )
