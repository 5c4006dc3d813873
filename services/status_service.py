"""
services/status_service.py
--------------------------
Business logic for statuses.
"""

from typing import Optional

from models.page import ListResult
from models.status import StatusDTO, StatusInsertDTO
from services.unit_of_work import UnitOfWorkFactory, sql_unit_of_work


class StatusService:
    """Thin wrapper running each StatusRepository call in its own unit of work."""

    def __init__(self, uow_factory: UnitOfWorkFactory = sql_unit_of_work):
        self._uow = uow_factory

    async def list_statuses(
        self, items_per_page: Optional[int] = None, page: Optional[int] = None
    ) -> ListResult[StatusDTO]:
        async with self._uow() as uow:
            return await uow.statuses.get_all(items_per_page=items_per_page, page=page)

    async def get_status(self, status_id: int) -> Optional[StatusDTO]:
        async with self._uow() as uow:
            return await uow.statuses.get_by_id(status_id)

    async def create_status(self, status: StatusInsertDTO) -> int:
        async with self._uow() as uow:
            return await uow.statuses.insert(status)

    async def update_status(self, status: StatusDTO) -> bool:
        async with self._uow() as uow:
            return await uow.statuses.update(status)

    async def delete_status(self, status_id: int) -> int:
        """
        Delete a status.

        Raises:
            psycopg2.errors.ForeignKeyViolation: If a doctor or patient still uses it.
        """
        async with self._uow() as uow:
            return await uow.statuses.delete(status_id)
