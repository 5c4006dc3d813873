"""
repositories/doctor_specialty_repo.py
-------------------------------------
Data access layer for the `doctor_specialty` association table.
"""

import psycopg2

from models.doctor import DoctorSpecialtyDTO
from repositories.base import SqlRepository
from repositories.interfaces import DoctorSpecialtyRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class SqlDoctorSpecialtyRepository(SqlRepository, DoctorSpecialtyRepository):
    """psycopg2 implementation of DoctorSpecialtyRepository."""

    async def insert(self, doctor_specialty: DoctorSpecialtyDTO) -> int:
        """
        Expand (doctor, {s1..sn}) into n rows and send them as one INSERT.

        A pair that already exists fails the whole statement with
        UniqueViolation; nothing from the batch is kept.
        """
        rows = [(doctor_specialty.doctor_id, sid) for sid in doctor_specialty.specialty_ids]
        if not rows:
            return 0
        sql = "INSERT INTO doctor_specialty (doctor_id, specialty_id) VALUES %s;"
        try:
            inserted = await self._execute_values(sql, rows)
        except psycopg2.Error as e:
            logger.error(
                f"Failed to associate doctor #{doctor_specialty.doctor_id} "
                f"with specialties {list(doctor_specialty.specialty_ids)}: {e}"
            )
            raise
        logger.info(f"Associated doctor #{doctor_specialty.doctor_id} with {inserted} specialties")
        return inserted

    async def delete_by_doctor_id(self, doctor_id: int) -> int:
        sql = "DELETE FROM doctor_specialty WHERE doctor_id = %s;"
        try:
            return await self._execute(sql, (doctor_id,))
        except psycopg2.Error as e:
            logger.error(f"Failed to delete specialties of doctor #{doctor_id}: {e}")
            raise
