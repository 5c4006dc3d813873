"""
repositories/memory_repo.py
---------------------------
In-memory implementations of every repository contract.

All repositories built on the same InMemoryStore see the same rows, the
way the SQL repositories share a connection. The store enforces the
schema's constraints (foreign keys without cascade, unique names, unique
doctor/specialty pairs) and raises the matching psycopg2.errors classes,
so callers observe one error taxonomy with either backend.
"""

import copy
from dataclasses import dataclass, field
from typing import Optional, Sequence

from psycopg2 import errors

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
from repositories.base import check_window, page_offset
from repositories.interfaces import (
    DoctorRepository,
    DoctorSpecialtyRepository,
    PatientRepository,
    SpecialtyRepository,
    StatusRepository,
)


@dataclass
class InMemoryStore:
    """Rows keyed by id, plus the association pairs and id sequences."""
    statuses: dict[int, dict] = field(default_factory=dict)
    specialties: dict[int, dict] = field(default_factory=dict)
    doctors: dict[int, dict] = field(default_factory=dict)
    patients: dict[int, dict] = field(default_factory=dict)
    doctor_specialties: set[tuple[int, int]] = field(default_factory=set)
    sequences: dict[str, int] = field(default_factory=dict)

    def next_id(self, table: str) -> int:
        self.sequences[table] = self.sequences.get(table, 0) + 1
        return self.sequences[table]

    def snapshot(self) -> dict:
        return copy.deepcopy(vars(self))

    def restore(self, snapshot: dict) -> None:
        vars(self).update(copy.deepcopy(snapshot))

    # ── constraint checks ─────────────────────────────────

    def check_status(self, status_id: int) -> None:
        if status_id not in self.statuses:
            raise errors.ForeignKeyViolation(f"status {status_id} does not exist")

    def check_unique(self, table: dict[int, dict], column: str, value, exclude_id: Optional[int] = None) -> None:
        for row_id, row in table.items():
            if row[column] == value and row_id != exclude_id:
                raise errors.UniqueViolation(f"duplicate {column} {value!r}")


def _window(rows: list, items_per_page: Optional[int], page: Optional[int]) -> list:
    if items_per_page is None:
        return rows
    offset = page_offset(1 if page is None else page, items_per_page)
    return rows[offset:offset + items_per_page]


class InMemoryStatusRepository(StatusRepository):

    def __init__(self, store: InMemoryStore):
        self._store = store

    async def get_all(
        self, items_per_page: Optional[int] = None, page: Optional[int] = None
    ) -> ListResult[StatusDTO]:
        rows = [StatusDTO(**self._store.statuses[k]) for k in sorted(self._store.statuses)]
        return ListResult(len(rows), _window(rows, items_per_page, page))

    async def get_by_id(self, status_id: int) -> Optional[StatusDTO]:
        row = self._store.statuses.get(status_id)
        return StatusDTO(**row) if row else None

    async def insert(self, status: StatusInsertDTO) -> int:
        self._store.check_unique(self._store.statuses, "name", status.name)
        new_id = self._store.next_id("status")
        self._store.statuses[new_id] = {"id": new_id, "name": status.name}
        return new_id

    async def update(self, status: StatusDTO) -> bool:
        if status.id not in self._store.statuses:
            return False
        self._store.check_unique(self._store.statuses, "name", status.name, exclude_id=status.id)
        self._store.statuses[status.id] = {"id": status.id, "name": status.name}
        return True

    async def delete(self, status_id: int) -> int:
        if status_id not in self._store.statuses:
            return 0
        in_use = any(
            row["status_id"] == status_id
            for table in (self._store.doctors, self._store.patients)
            for row in table.values()
        )
        if in_use:
            raise errors.ForeignKeyViolation(f"status {status_id} is still referenced")
        del self._store.statuses[status_id]
        return 1


class InMemorySpecialtyRepository(SpecialtyRepository):

    def __init__(self, store: InMemoryStore):
        self._store = store

    async def get_all(
        self, items_per_page: Optional[int] = None, page: Optional[int] = None
    ) -> ListResult[SpecialtyDTO]:
        rows = [SpecialtyDTO(**self._store.specialties[k]) for k in sorted(self._store.specialties)]
        return ListResult(len(rows), _window(rows, items_per_page, page))

    async def get_by_id(self, specialty_id: int) -> Optional[SpecialtyDTO]:
        row = self._store.specialties.get(specialty_id)
        return SpecialtyDTO(**row) if row else None

    async def get_by_ids(self, specialty_ids: Sequence[int]) -> list[SpecialtyDTO]:
        wanted = set(specialty_ids)
        return [
            SpecialtyDTO(**self._store.specialties[k])
            for k in sorted(self._store.specialties)
            if k in wanted
        ]

    async def insert(self, specialty: SpecialtyInsertDTO) -> int:
        self._store.check_unique(self._store.specialties, "name", specialty.name)
        new_id = self._store.next_id("specialty")
        self._store.specialties[new_id] = {
            "id": new_id,
            "name": specialty.name,
            "scheduled_duration": specialty.scheduled_duration,
        }
        return new_id

    async def update(self, specialty: SpecialtyDTO) -> bool:
        if specialty.id not in self._store.specialties:
            return False
        self._store.check_unique(self._store.specialties, "name", specialty.name, exclude_id=specialty.id)
        self._store.specialties[specialty.id] = {
            "id": specialty.id,
            "name": specialty.name,
            "scheduled_duration": specialty.scheduled_duration,
        }
        return True

    async def delete(self, specialty_id: int) -> int:
        if specialty_id not in self._store.specialties:
            return 0
        if any(sid == specialty_id for _, sid in self._store.doctor_specialties):
            raise errors.ForeignKeyViolation(f"specialty {specialty_id} is still referenced")
        del self._store.specialties[specialty_id]
        return 1


class InMemoryDoctorRepository(DoctorRepository):

    def __init__(self, store: InMemoryStore):
        self._store = store

    def _to_list_dto(self, row: dict) -> DoctorListDTO:
        # status name read at query time, like the SQL join
        return DoctorListDTO(
            id=row["id"],
            name=row["name"],
            status_id=row["status_id"],
            status_name=self._store.statuses[row["status_id"]]["name"],
        )

    async def get_doctors(
        self,
        name: Optional[str] = None,
        specialty_id: Optional[int] = None,
        status_id: Optional[int] = None,
        offset: int = 0,
        items_per_page: int = 10,
    ) -> ListResult[DoctorListDTO]:
        check_window(offset, items_per_page)
        matches = []
        for doctor_id in sorted(self._store.doctors):
            row = self._store.doctors[doctor_id]
            if name and name.casefold() not in row["name"].casefold():
                continue
            if specialty_id is not None and (doctor_id, specialty_id) not in self._store.doctor_specialties:
                continue
            if status_id is not None and row["status_id"] != status_id:
                continue
            matches.append(row)
        page = matches[offset:offset + items_per_page]
        return ListResult(len(matches), [self._to_list_dto(r) for r in page])

    async def get_doctor_specialties(self, doctor_ids: Sequence[int]) -> list[SpecialtyDoctorDTO]:
        wanted = set(doctor_ids)
        result = []
        for doctor_id, specialty_id in sorted(self._store.doctor_specialties):
            if doctor_id not in wanted:
                continue
            specialty = self._store.specialties[specialty_id]
            result.append(SpecialtyDoctorDTO(
                doctor_id=doctor_id,
                specialty_id=specialty_id,
                specialty_name=specialty["name"],
                scheduled_duration=specialty["scheduled_duration"],
            ))
        return result

    async def get_by_id(self, doctor_id: int) -> Optional[DoctorListDTO]:
        row = self._store.doctors.get(doctor_id)
        return self._to_list_dto(row) if row else None

    async def insert_doctor(self, doctor: DoctorInsertDTO) -> int:
        self._store.check_status(doctor.status_id)
        new_id = self._store.next_id("doctor")
        self._store.doctors[new_id] = {"id": new_id, "name": doctor.name, "status_id": doctor.status_id}
        return new_id

    async def update(self, doctor: DoctorDTO) -> bool:
        if doctor.id not in self._store.doctors:
            return False
        self._store.check_status(doctor.status_id)
        self._store.doctors[doctor.id] = {"id": doctor.id, "name": doctor.name, "status_id": doctor.status_id}
        return True

    async def delete_by_doctor_id(self, doctor_id: int) -> int:
        if doctor_id not in self._store.doctors:
            return 0
        if any(did == doctor_id for did, _ in self._store.doctor_specialties):
            raise errors.ForeignKeyViolation(f"doctor {doctor_id} still has specialties")
        del self._store.doctors[doctor_id]
        return 1


class InMemoryDoctorSpecialtyRepository(DoctorSpecialtyRepository):

    def __init__(self, store: InMemoryStore):
        self._store = store

    async def insert(self, doctor_specialty: DoctorSpecialtyDTO) -> int:
        pairs = [(doctor_specialty.doctor_id, sid) for sid in doctor_specialty.specialty_ids]
        # Validate the whole batch first: one statement, all or nothing
        if pairs and doctor_specialty.doctor_id not in self._store.doctors:
            raise errors.ForeignKeyViolation(f"doctor {doctor_specialty.doctor_id} does not exist")
        for pair in pairs:
            if pair[1] not in self._store.specialties:
                raise errors.ForeignKeyViolation(f"specialty {pair[1]} does not exist")
            if pair in self._store.doctor_specialties:
                raise errors.UniqueViolation(f"doctor_specialty {pair} already exists")
        self._store.doctor_specialties.update(pairs)
        return len(pairs)

    async def delete_by_doctor_id(self, doctor_id: int) -> int:
        pairs = {p for p in self._store.doctor_specialties if p[0] == doctor_id}
        self._store.doctor_specialties -= pairs
        return len(pairs)


class InMemoryPatientRepository(PatientRepository):

    def __init__(self, store: InMemoryStore):
        self._store = store

    def _to_list_dto(self, row: dict) -> PatientListDTO:
        return PatientListDTO(
            status_name=self._store.statuses[row["status_id"]]["name"],
            **row,
        )

    def _write(self, patient_id: int, patient) -> None:
        self._store.check_status(patient.status_id)
        self._store.check_unique(
            self._store.patients, "document_number", patient.document_number, exclude_id=patient_id
        )
        self._store.patients[patient_id] = {
            "id": patient_id,
            "name": patient.name,
            "phone_number": patient.phone_number,
            "document_number": patient.document_number,
            "status_id": patient.status_id,
            "birth_date": patient.birth_date,
        }

    async def get_patients(
        self,
        name: Optional[str] = None,
        document_number: Optional[str] = None,
        status_id: Optional[int] = None,
        offset: int = 0,
        items_per_page: int = 10,
    ) -> ListResult[PatientListDTO]:
        check_window(offset, items_per_page)
        matches = [
            row for _, row in sorted(self._store.patients.items())
            if (not name or name.casefold() in row["name"].casefold())
            and (not document_number or row["document_number"] == document_number)
            and (status_id is None or row["status_id"] == status_id)
        ]
        page = matches[offset:offset + items_per_page]
        return ListResult(len(matches), [self._to_list_dto(r) for r in page])

    async def get_by_id(self, patient_id: int) -> Optional[PatientListDTO]:
        row = self._store.patients.get(patient_id)
        return self._to_list_dto(row) if row else None

    async def insert_patient(self, patient: PatientInsertDTO) -> int:
        # Check constraints before consuming an id
        self._store.check_status(patient.status_id)
        self._store.check_unique(self._store.patients, "document_number", patient.document_number)
        new_id = self._store.next_id("patient")
        self._write(new_id, patient)
        return new_id

    async def update(self, patient: PatientDTO) -> bool:
        if patient.id not in self._store.patients:
            return False
        self._write(patient.id, patient)
        return True

    async def delete_by_patient_id(self, patient_id: int) -> int:
        return 1 if self._store.patients.pop(patient_id, None) else 0
