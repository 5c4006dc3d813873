"""
models/doctor.py
----------------
DTOs for doctors and their specialty associations.
"""

from dataclasses import dataclass

from models.base import require_ids, require_int, require_text
from models.specialty import SpecialtyDTO


@dataclass(frozen=True)
class DoctorListDTO:
    """
    A doctor row joined with its status.

    `status_name` always comes from the same query that read `status_id`.
    """
    id: int
    name: str
    status_id: int
    status_name: str

    def __post_init__(self):
        require_int("id", self.id)
        require_text("name", self.name)
        require_int("status_id", self.status_id)
        require_text("status_name", self.status_name)


@dataclass(frozen=True)
class DoctorInsertDTO:
    """
    Payload for a new doctor.

    Attributes:
        name: Full name.
        status_id: Must reference an existing status.
        specialty_ids: Specialties to associate on creation (may be empty).
    """
    name: str
    status_id: int
    specialty_ids: tuple[int, ...] = ()

    def __post_init__(self):
        require_text("name", self.name)
        require_int("status_id", self.status_id)
        object.__setattr__(self, "specialty_ids", tuple(self.specialty_ids))
        require_ids("specialty_ids", self.specialty_ids)


@dataclass(frozen=True)
class DoctorDTO:
    """Whole-record update payload for an existing doctor."""
    id: int
    name: str
    status_id: int
    specialty_ids: tuple[int, ...] = ()

    def __post_init__(self):
        require_int("id", self.id)
        require_text("name", self.name)
        require_int("status_id", self.status_id)
        object.__setattr__(self, "specialty_ids", tuple(self.specialty_ids))
        require_ids("specialty_ids", self.specialty_ids)


@dataclass(frozen=True)
class DoctorSpecialtyDTO:
    """One doctor and the set of specialties to associate with it."""
    doctor_id: int
    specialty_ids: tuple[int, ...]

    def __post_init__(self):
        require_int("doctor_id", self.doctor_id)
        # Keep first-seen order, drop repeats
        object.__setattr__(self, "specialty_ids", tuple(dict.fromkeys(self.specialty_ids)))
        require_ids("specialty_ids", self.specialty_ids)


@dataclass(frozen=True)
class SpecialtyDoctorDTO:
    """Flattened association row: one per (doctor, specialty) pair."""
    doctor_id: int
    specialty_id: int
    specialty_name: str
    scheduled_duration: int

    def __post_init__(self):
        require_int("doctor_id", self.doctor_id)
        require_int("specialty_id", self.specialty_id)
        require_text("specialty_name", self.specialty_name)
        require_int("scheduled_duration", self.scheduled_duration)

    def to_specialty(self) -> SpecialtyDTO:
        return SpecialtyDTO(
            id=self.specialty_id,
            name=self.specialty_name,
            scheduled_duration=self.scheduled_duration,
        )


@dataclass(frozen=True)
class DoctorDetailDTO:
    """A doctor hydrated with its specialties."""
    id: int
    name: str
    status_id: int
    status_name: str
    specialties: tuple[SpecialtyDTO, ...] = ()

    def __post_init__(self):
        require_int("id", self.id)
        require_text("name", self.name)
        require_int("status_id", self.status_id)
        require_text("status_name", self.status_name)
        object.__setattr__(self, "specialties", tuple(self.specialties))

    @classmethod
    def from_rows(cls, doctor: DoctorListDTO, rows: list[SpecialtyDoctorDTO]) -> "DoctorDetailDTO":
        return cls(
            id=doctor.id,
            name=doctor.name,
            status_id=doctor.status_id,
            status_name=doctor.status_name,
            specialties=tuple(r.to_specialty() for r in rows),
        )
