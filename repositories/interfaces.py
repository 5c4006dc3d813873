"""
repositories/interfaces.py
--------------------------
Storage contracts, one per entity. Services depend on these, never on a
concrete backend. Two backends implement them: the psycopg2 repositories
in this package and the in-memory ones in memory_repo.py.

Conventions shared by every contract:
    - Lookups by id return None when the row does not exist.
    - Listings return a ListResult whose total ignores the page window.
    - Update returns False when no row matched the id.
    - Delete returns the number of affected rows (0 for a missing id).
    - Store errors (constraint violations, lost connections) propagate as-is.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from models.doctor import (
    DoctorDTO,
    DoctorInsertDTO,
    DoctorListDTO,
    DoctorSpecialtyDTO,
    SpecialtyDoctorDTO,
)
from models.page import ListResult
from models.patient import PatientDTO, PatientInsertDTO, PatientListDTO
from models.specialty import SpecialtyDTO, SpecialtyInsertDTO
from models.status import StatusDTO, StatusInsertDTO


class StatusRepository(ABC):
    """Contract for the status table."""

    @abstractmethod
    async def get_all(
        self, items_per_page: Optional[int] = None, page: Optional[int] = None
    ) -> ListResult[StatusDTO]:
        """List statuses ordered by id. Without paging arguments, returns every row."""
        raise NotImplementedError

    @abstractmethod
    async def get_by_id(self, status_id: int) -> Optional[StatusDTO]:
        raise NotImplementedError

    @abstractmethod
    async def insert(self, status: StatusInsertDTO) -> int:
        """Insert a status and return its new id."""
        raise NotImplementedError

    @abstractmethod
    async def update(self, status: StatusDTO) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def delete(self, status_id: int) -> int:
        raise NotImplementedError


class SpecialtyRepository(ABC):
    """Contract for the specialty table."""

    @abstractmethod
    async def get_all(
        self, items_per_page: Optional[int] = None, page: Optional[int] = None
    ) -> ListResult[SpecialtyDTO]:
        raise NotImplementedError

    @abstractmethod
    async def get_by_id(self, specialty_id: int) -> Optional[SpecialtyDTO]:
        raise NotImplementedError

    @abstractmethod
    async def get_by_ids(self, specialty_ids: Sequence[int]) -> list[SpecialtyDTO]:
        """Fetch the specialties whose id is in `specialty_ids`; unknown ids are skipped."""
        raise NotImplementedError

    @abstractmethod
    async def insert(self, specialty: SpecialtyInsertDTO) -> int:
        raise NotImplementedError

    @abstractmethod
    async def update(self, specialty: SpecialtyDTO) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def delete(self, specialty_id: int) -> int:
        raise NotImplementedError


class DoctorRepository(ABC):
    """Contract for the doctor table."""

    @abstractmethod
    async def get_doctors(
        self,
        name: Optional[str] = None,
        specialty_id: Optional[int] = None,
        status_id: Optional[int] = None,
        offset: int = 0,
        items_per_page: int = 10,
    ) -> ListResult[DoctorListDTO]:
        """
        List doctors matching every filter that is given.

        Args:
            name: Case-insensitive substring of the doctor's name.
            specialty_id: Only doctors associated with this specialty.
            status_id: Only doctors with this status.
            offset: Rows to skip.
            items_per_page: Maximum rows to return.
        """
        raise NotImplementedError

    @abstractmethod
    async def get_doctor_specialties(self, doctor_ids: Sequence[int]) -> list[SpecialtyDoctorDTO]:
        """One row per (doctor, specialty) pair for the given doctors."""
        raise NotImplementedError

    @abstractmethod
    async def get_by_id(self, doctor_id: int) -> Optional[DoctorListDTO]:
        raise NotImplementedError

    @abstractmethod
    async def insert_doctor(self, doctor: DoctorInsertDTO) -> int:
        raise NotImplementedError

    @abstractmethod
    async def update(self, doctor: DoctorDTO) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def delete_by_doctor_id(self, doctor_id: int) -> int:
        raise NotImplementedError


class DoctorSpecialtyRepository(ABC):
    """Contract for the doctor_specialty association table."""

    @abstractmethod
    async def insert(self, doctor_specialty: DoctorSpecialtyDTO) -> int:
        """
        Associate one doctor with a set of specialties in a single statement.

        Returns:
            Number of association rows created.

        Raises:
            psycopg2.errors.UniqueViolation: If any pair already exists.
        """
        raise NotImplementedError

    @abstractmethod
    async def delete_by_doctor_id(self, doctor_id: int) -> int:
        raise NotImplementedError


class PatientRepository(ABC):
    """Contract for the patient table."""

    @abstractmethod
    async def get_patients(
        self,
        name: Optional[str] = None,
        document_number: Optional[str] = None,
        status_id: Optional[int] = None,
        offset: int = 0,
        items_per_page: int = 10,
    ) -> ListResult[PatientListDTO]:
        raise NotImplementedError

    @abstractmethod
    async def get_by_id(self, patient_id: int) -> Optional[PatientListDTO]:
        raise NotImplementedError

    @abstractmethod
    async def insert_patient(self, patient: PatientInsertDTO) -> int:
        raise NotImplementedError

    @abstractmethod
    async def update(self, patient: PatientDTO) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def delete_by_patient_id(self, patient_id: int) -> int:
        raise NotImplementedError
