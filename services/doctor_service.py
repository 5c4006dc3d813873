"""
services/doctor_service.py
--------------------------
Business logic for doctors.
Composes DoctorRepository and DoctorSpecialtyRepository inside one unit of work
so a doctor and its specialty set are written (or removed) together.
"""

from collections import defaultdict
from typing import Optional

from config import DEFAULT_ITEMS_PER_PAGE
from models.doctor import (
    DoctorDTO,
    DoctorDetailDTO,
    DoctorInsertDTO,
    DoctorSpecialtyDTO,
    SpecialtyDoctorDTO,
)
from models.page import ListResult
from repositories.base import page_offset
from services.unit_of_work import UnitOfWorkFactory, sql_unit_of_work
from utils.logger import get_logger

logger = get_logger(__name__)


def _group_by_doctor(rows: list[SpecialtyDoctorDTO]) -> dict[int, list[SpecialtyDoctorDTO]]:
    grouped: dict[int, list[SpecialtyDoctorDTO]] = defaultdict(list)
    for row in rows:
        grouped[row.doctor_id].append(row)
    return grouped


class DoctorService:
    """
    Handles doctor workflows.

    Workflow for writes:
        1. Open a unit of work.
        2. Write the doctor row.
        3. Replace its specialty associations with one batched insert.
        4. Commit, or roll everything back on the first store error.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory = sql_unit_of_work):
        self._uow = uow_factory

    async def list_doctors(
        self,
        name: Optional[str] = None,
        specialty_id: Optional[int] = None,
        status_id: Optional[int] = None,
        page: int = 1,
        items_per_page: int = DEFAULT_ITEMS_PER_PAGE,
    ) -> ListResult[DoctorDetailDTO]:
        """
        List one page of doctors, each hydrated with its specialties.

        Args:
            name: Case-insensitive substring filter.
            specialty_id: Only doctors holding this specialty.
            status_id: Only doctors in this status.
            page: 1-based page number.
            items_per_page: Page size.

        Returns:
            ListResult whose total counts every doctor matching the filters.
        """
        offset = page_offset(page, items_per_page)
        async with self._uow() as uow:
            total, doctors = await uow.doctors.get_doctors(
                name=name,
                specialty_id=specialty_id,
                status_id=status_id,
                offset=offset,
                items_per_page=items_per_page,
            )
            rows = await uow.doctors.get_doctor_specialties([d.id for d in doctors])

        grouped = _group_by_doctor(rows)
        return ListResult(total, [DoctorDetailDTO.from_rows(d, grouped[d.id]) for d in doctors])

    async def get_doctor(self, doctor_id: int) -> Optional[DoctorDetailDTO]:
        """Fetch one doctor with its specialties, or None if absent."""
        async with self._uow() as uow:
            doctor = await uow.doctors.get_by_id(doctor_id)
            if doctor is None:
                return None
            rows = await uow.doctors.get_doctor_specialties([doctor_id])
        return DoctorDetailDTO.from_rows(doctor, rows)

    async def create_doctor(self, doctor: DoctorInsertDTO) -> int:
        """
        Insert a doctor and its specialties atomically.

        Returns:
            The new doctor id.

        Raises:
            psycopg2.errors.ForeignKeyViolation: Unknown status or specialty.
        """
        async with self._uow() as uow:
            doctor_id = await uow.doctors.insert_doctor(doctor)
            await uow.doctor_specialties.insert(
                DoctorSpecialtyDTO(doctor_id=doctor_id, specialty_ids=doctor.specialty_ids)
            )
        logger.info(f"Created doctor #{doctor_id} with {len(doctor.specialty_ids)} specialties")
        return doctor_id

    async def update_doctor(self, doctor: DoctorDTO) -> bool:
        """
        Replace a doctor record and its whole specialty set.

        Returns:
            False if no doctor has this id (nothing is written).
        """
        async with self._uow() as uow:
            if not await uow.doctors.update(doctor):
                return False
            await uow.doctor_specialties.delete_by_doctor_id(doctor.id)
            await uow.doctor_specialties.insert(
                DoctorSpecialtyDTO(doctor_id=doctor.id, specialty_ids=doctor.specialty_ids)
            )
        return True

    async def delete_doctor(self, doctor_id: int) -> int:
        """
        Remove a doctor's associations, then the doctor itself.

        Returns:
            Number of doctor rows deleted (0 when the id does not exist).
        """
        async with self._uow() as uow:
            await uow.doctor_specialties.delete_by_doctor_id(doctor_id)
            deleted = await uow.doctors.delete_by_doctor_id(doctor_id)
        return deleted
