"""
services/specialty_service.py
-----------------------------
Business logic for specialties.
"""

from typing import Optional

from models.page import ListResult
from models.specialty import SpecialtyDTO, SpecialtyInsertDTO
from services.unit_of_work import UnitOfWorkFactory, sql_unit_of_work


class SpecialtyService:

    def __init__(self, uow_factory: UnitOfWorkFactory = sql_unit_of_work):
        self._uow = uow_factory

    async def list_specialties(
        self, items_per_page: Optional[int] = None, page: Optional[int] = None
    ) -> ListResult[SpecialtyDTO]:
        async with self._uow() as uow:
            return await uow.specialties.get_all(items_per_page=items_per_page, page=page)

    async def get_specialty(self, specialty_id: int) -> Optional[SpecialtyDTO]:
        async with self._uow() as uow:
            return await uow.specialties.get_by_id(specialty_id)

    async def create_specialty(self, specialty: SpecialtyInsertDTO) -> int:
        async with self._uow() as uow:
            return await uow.specialties.insert(specialty)

    async def update_specialty(self, specialty: SpecialtyDTO) -> bool:
        async with self._uow() as uow:
            return await uow.specialties.update(specialty)

    async def delete_specialty(self, specialty_id: int) -> int:
        async with self._uow() as uow:
            return await uow.specialties.delete(specialty_id)

    async def get_specialties(self, specialty_ids: list[int]) -> list[SpecialtyDTO]:
        """Fetch several specialties at once; unknown ids are left out."""
        async with self._uow() as uow:
            return await uow.specialties.get_by_ids(specialty_ids)
