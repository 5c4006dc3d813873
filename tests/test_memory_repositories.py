"""
Behaviour tests for the repository contracts, run against the in-memory backend.
"""

import pytest
import pytest_asyncio
from psycopg2 import errors

from models.doctor import DoctorDTO, DoctorInsertDTO, DoctorSpecialtyDTO
from models.patient import PatientInsertDTO
from models.specialty import SpecialtyDTO
from models.status import StatusDTO, StatusInsertDTO
from repositories.memory_repo import (
    InMemoryDoctorRepository,
    InMemoryDoctorSpecialtyRepository,
    InMemoryPatientRepository,
    InMemorySpecialtyRepository,
    InMemoryStatusRepository,
)

ACTIVE, INACTIVE = 1, 2
CARDIOLOGY, DERMATOLOGY, PEDIATRICS = 1, 2, 3


@pytest.fixture
def doctors(store):
    return InMemoryDoctorRepository(store)


@pytest.fixture
def links(store):
    return InMemoryDoctorSpecialtyRepository(store)


@pytest_asyncio.fixture
async def seeded_doctors(doctors, links):
    """Five doctors; Ana and Anabel are cardiologists, Bruno is inactive."""
    ids = {}
    for name, status in (
        ("Ana Souza", ACTIVE),
        ("Bruno Dias", INACTIVE),
        ("Anabel Costa", ACTIVE),
        ("Carla Mendes", ACTIVE),
        ("Diego Alves", ACTIVE),
    ):
        ids[name] = await doctors.insert_doctor(DoctorInsertDTO(name=name, status_id=status))
    await links.insert(DoctorSpecialtyDTO(doctor_id=ids["Ana Souza"], specialty_ids=(CARDIOLOGY,)))
    await links.insert(DoctorSpecialtyDTO(doctor_id=ids["Anabel Costa"], specialty_ids=(CARDIOLOGY, DERMATOLOGY)))
    return ids


class TestDoctorListing:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("offset,size", [(0, 1), (0, 10), (1, 2), (3, 1)])
    async def test_total_ignores_window(self, doctors, seeded_doctors, offset, size):
        result = await doctors.get_doctors(status_id=ACTIVE, offset=offset, items_per_page=size)

        assert result.total == 4
        assert len(result.items) == min(size, max(4 - offset, 0))

    @pytest.mark.asyncio
    async def test_filters_combine(self, doctors, seeded_doctors):
        total, items = await doctors.get_doctors(name="ANA", specialty_id=CARDIOLOGY, status_id=ACTIVE)

        assert total == 2
        assert [d.name for d in items] == ["Ana Souza", "Anabel Costa"]

    @pytest.mark.asyncio
    async def test_offset_past_end_gives_empty_page(self, doctors, seeded_doctors):
        total, items = await doctors.get_doctors(offset=5, items_per_page=10)

        assert total == 5
        assert items == []

    @pytest.mark.asyncio
    async def test_order_is_stable_by_id(self, doctors, seeded_doctors):
        first = await doctors.get_doctors(offset=0, items_per_page=3)
        second = await doctors.get_doctors(offset=3, items_per_page=3)

        ids = [d.id for d in first.items + second.items]
        assert ids == sorted(ids)
        assert len(set(ids)) == 5

    @pytest.mark.asyncio
    async def test_bad_window_rejected(self, doctors):
        with pytest.raises(ValueError):
            await doctors.get_doctors(items_per_page=0)

    @pytest.mark.asyncio
    async def test_name_underscore_is_literal(self, doctors, seeded_doctors):
        total, _ = await doctors.get_doctors(name="_")
        assert total == 0

        new_id = await doctors.insert_doctor(DoctorInsertDTO(name="Ana_Maria", status_id=ACTIVE))
        total, found = await doctors.get_doctors(name="_")

        assert total == 1
        assert [d.id for d in found] == [new_id]


class TestDoctorWrites:

    @pytest.mark.asyncio
    async def test_insert_unknown_status_fails(self, doctors):
        with pytest.raises(errors.ForeignKeyViolation):
            await doctors.insert_doctor(DoctorInsertDTO(name="Ana Souza", status_id=99))

    @pytest.mark.asyncio
    async def test_insert_assigns_fresh_ids(self, doctors):
        first = await doctors.insert_doctor(DoctorInsertDTO(name="Ana Souza", status_id=ACTIVE))
        second = await doctors.insert_doctor(DoctorInsertDTO(name="Ana Souza", status_id=ACTIVE))

        assert first != second

    @pytest.mark.asyncio
    async def test_ids_are_not_reused_after_delete(self, doctors):
        first = await doctors.insert_doctor(DoctorInsertDTO(name="Ana Souza", status_id=ACTIVE))
        await doctors.delete_by_doctor_id(first)
        second = await doctors.insert_doctor(DoctorInsertDTO(name="Bruno Dias", status_id=ACTIVE))

        assert second != first

    @pytest.mark.asyncio
    async def test_delete_counts(self, doctors):
        doctor_id = await doctors.insert_doctor(DoctorInsertDTO(name="Ana Souza", status_id=ACTIVE))

        assert await doctors.delete_by_doctor_id(999) == 0
        assert await doctors.delete_by_doctor_id(doctor_id) == 1
        assert await doctors.get_by_id(doctor_id) is None

    @pytest.mark.asyncio
    async def test_delete_with_associations_fails(self, doctors, seeded_doctors):
        with pytest.raises(errors.ForeignKeyViolation):
            await doctors.delete_by_doctor_id(seeded_doctors["Ana Souza"])

    @pytest.mark.asyncio
    async def test_update_missing_returns_false(self, doctors):
        assert await doctors.update(DoctorDTO(id=404, name="Nobody", status_id=ACTIVE)) is False

    @pytest.mark.asyncio
    async def test_status_name_is_read_live(self, store, doctors):
        doctor_id = await doctors.insert_doctor(DoctorInsertDTO(name="Ana Souza", status_id=ACTIVE))
        await InMemoryStatusRepository(store).update(StatusDTO(id=ACTIVE, name="Available"))

        doctor = await doctors.get_by_id(doctor_id)

        assert doctor.status_id == ACTIVE
        assert doctor.status_name == "Available"


class TestDoctorSpecialties:

    @pytest.mark.asyncio
    async def test_insert_set_creates_one_row_per_pair(self, doctors, links):
        doctor_id = await doctors.insert_doctor(DoctorInsertDTO(name="Ana Souza", status_id=ACTIVE))

        inserted = await links.insert(
            DoctorSpecialtyDTO(doctor_id=doctor_id, specialty_ids=(CARDIOLOGY, DERMATOLOGY, PEDIATRICS))
        )
        rows = await doctors.get_doctor_specialties([doctor_id])

        assert inserted == 3
        assert {(r.doctor_id, r.specialty_id) for r in rows} == {
            (doctor_id, CARDIOLOGY), (doctor_id, DERMATOLOGY), (doctor_id, PEDIATRICS)
        }

    @pytest.mark.asyncio
    async def test_reinsert_fails_and_keeps_rows(self, store, doctors, links):
        doctor_id = await doctors.insert_doctor(DoctorInsertDTO(name="Ana Souza", status_id=ACTIVE))
        dto = DoctorSpecialtyDTO(doctor_id=doctor_id, specialty_ids=(CARDIOLOGY, DERMATOLOGY, PEDIATRICS))
        await links.insert(dto)

        with pytest.raises(errors.UniqueViolation):
            await links.insert(dto)

        assert len(store.doctor_specialties) == 3

    @pytest.mark.asyncio
    async def test_partial_duplicate_inserts_nothing(self, store, doctors, links):
        doctor_id = await doctors.insert_doctor(DoctorInsertDTO(name="Ana Souza", status_id=ACTIVE))
        await links.insert(DoctorSpecialtyDTO(doctor_id=doctor_id, specialty_ids=(DERMATOLOGY,)))

        with pytest.raises(errors.UniqueViolation):
            await links.insert(DoctorSpecialtyDTO(doctor_id=doctor_id, specialty_ids=(CARDIOLOGY, DERMATOLOGY)))

        assert store.doctor_specialties == {(doctor_id, DERMATOLOGY)}

    @pytest.mark.asyncio
    async def test_unknown_specialty_fails(self, doctors, links):
        doctor_id = await doctors.insert_doctor(DoctorInsertDTO(name="Ana Souza", status_id=ACTIVE))

        with pytest.raises(errors.ForeignKeyViolation):
            await links.insert(DoctorSpecialtyDTO(doctor_id=doctor_id, specialty_ids=(77,)))

    @pytest.mark.asyncio
    async def test_delete_by_doctor(self, doctors, links, seeded_doctors):
        assert await links.delete_by_doctor_id(seeded_doctors["Anabel Costa"]) == 2
        assert await links.delete_by_doctor_id(seeded_doctors["Anabel Costa"]) == 0


class TestStatusAndSpecialty:

    @pytest.mark.asyncio
    async def test_status_paging(self, store):
        repo = InMemoryStatusRepository(store)
        await repo.insert(StatusInsertDTO(name="On leave"))

        total, page = await repo.get_all(items_per_page=2, page=2)

        assert total == 3
        assert [s.name for s in page] == ["On leave"]

    @pytest.mark.asyncio
    async def test_page_zero_rejected(self, store):
        with pytest.raises(ValueError, match="page"):
            await InMemoryStatusRepository(store).get_all(items_per_page=1, page=0)
        with pytest.raises(ValueError, match="page"):
            await InMemorySpecialtyRepository(store).get_all(items_per_page=2, page=0)

    @pytest.mark.asyncio
    async def test_status_get_missing(self, store):
        assert await InMemoryStatusRepository(store).get_by_id(50) is None

    @pytest.mark.asyncio
    async def test_status_in_use_cannot_be_deleted(self, store, doctors):
        await doctors.insert_doctor(DoctorInsertDTO(name="Ana Souza", status_id=ACTIVE))
        repo = InMemoryStatusRepository(store)

        with pytest.raises(errors.ForeignKeyViolation):
            await repo.delete(ACTIVE)
        assert await repo.delete(INACTIVE) == 1

    @pytest.mark.asyncio
    async def test_specialty_name_unique(self, store):
        repo = InMemorySpecialtyRepository(store)

        with pytest.raises(errors.UniqueViolation):
            await repo.update(SpecialtyDTO(id=PEDIATRICS, name="Cardiology", scheduled_duration=10))

    @pytest.mark.asyncio
    async def test_specialty_get_by_ids_skips_unknown(self, store):
        found = await InMemorySpecialtyRepository(store).get_by_ids([PEDIATRICS, 90, CARDIOLOGY])

        assert [s.id for s in found] == [CARDIOLOGY, PEDIATRICS]


class TestPatients:

    @pytest.mark.asyncio
    async def test_list_and_lookup(self, store):
        repo = InMemoryPatientRepository(store)
        patient_id = await repo.insert_patient(PatientInsertDTO(
            name="Maria Lima",
            phone_number="555-0101",
            document_number="123",
            status_id=ACTIVE,
            birth_date="1990-05-17",
        ))

        total, items = await repo.get_patients(name="maria")
        patient = await repo.get_by_id(patient_id)

        assert total == 1
        assert items[0] == patient
        assert patient.status_name == "Active"
        assert patient.birth_date == "1990-05-17"

    @pytest.mark.asyncio
    async def test_document_number_unique(self, store):
        repo = InMemoryPatientRepository(store)
        dto = PatientInsertDTO(
            name="Maria Lima",
            phone_number="555-0101",
            document_number="123",
            status_id=ACTIVE,
            birth_date="1990-05-17",
        )
        await repo.insert_patient(dto)

        with pytest.raises(errors.UniqueViolation):
            await repo.insert_patient(dto)

    @pytest.mark.asyncio
    async def test_delete_missing_is_zero(self, store):
        assert await InMemoryPatientRepository(store).delete_by_patient_id(12) == 0
