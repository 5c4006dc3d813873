"""
services/patient_service.py
---------------------------
Business logic for patients.
"""

from typing import Optional

from config import DEFAULT_ITEMS_PER_PAGE
from models.page import ListResult
from models.patient import PatientDTO, PatientInsertDTO, PatientListDTO
from repositories.base import page_offset
from services.unit_of_work import UnitOfWorkFactory, sql_unit_of_work
from utils.logger import get_logger

logger = get_logger(__name__)


class PatientService:
    """Handles patient workflows, one unit of work per call."""

    def __init__(self, uow_factory: UnitOfWorkFactory = sql_unit_of_work):
        self._uow = uow_factory

    async def list_patients(
        self,
        name: Optional[str] = None,
        document_number: Optional[str] = None,
        status_id: Optional[int] = None,
        page: int = 1,
        items_per_page: int = DEFAULT_ITEMS_PER_PAGE,
    ) -> ListResult[PatientListDTO]:
        offset = page_offset(page, items_per_page)
        async with self._uow() as uow:
            return await uow.patients.get_patients(
                name=name,
                document_number=document_number,
                status_id=status_id,
                offset=offset,
                items_per_page=items_per_page,
            )

    async def get_patient(self, patient_id: int) -> Optional[PatientListDTO]:
        async with self._uow() as uow:
            return await uow.patients.get_by_id(patient_id)

    async def create_patient(self, patient: PatientInsertDTO) -> int:
        async with self._uow() as uow:
            patient_id = await uow.patients.insert_patient(patient)
        logger.info(f"Created patient #{patient_id}")
        return patient_id

    async def update_patient(self, patient: PatientDTO) -> bool:
        async with self._uow() as uow:
            return await uow.patients.update(patient)

    async def delete_patient(self, patient_id: int) -> int:
        async with self._uow() as uow:
            return await uow.patients.delete_by_patient_id(patient_id)
