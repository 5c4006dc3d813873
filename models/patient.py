"""
models/patient.py
-----------------
DTOs for patients.
"""

from dataclasses import dataclass
from datetime import date

from models.base import require_int, require_text


def _require_iso_date(value) -> None:
    require_text("birth_date", value)
    try:
        date.fromisoformat(value)
    except ValueError:
        raise ValueError(f"'birth_date' must be YYYY-MM-DD, got {value!r}") from None


@dataclass(frozen=True)
class PatientListDTO:
    """
    A patient row joined with its status.

    Attributes:
        id: Database primary key.
        name: Full name.
        phone_number: Contact phone.
        document_number: National document number, unique.
        status_id: Referenced status.
        status_name: Name of the referenced status at query time.
        birth_date: ISO date string (YYYY-MM-DD).
    """
    id: int
    name: str
    phone_number: str
    document_number: str
    status_id: int
    status_name: str
    birth_date: str

    def __post_init__(self):
        require_int("id", self.id)
        require_text("name", self.name)
        require_text("phone_number", self.phone_number)
        require_text("document_number", self.document_number)
        require_int("status_id", self.status_id)
        require_text("status_name", self.status_name)
        _require_iso_date(self.birth_date)


@dataclass(frozen=True)
class PatientInsertDTO:
    name: str
    phone_number: str
    document_number: str
    status_id: int
    birth_date: str

    def __post_init__(self):
        require_text("name", self.name)
        require_text("phone_number", self.phone_number)
        require_text("document_number", self.document_number)
        require_int("status_id", self.status_id)
        _require_iso_date(self.birth_date)


@dataclass(frozen=True)
class PatientDTO:
    """Whole-record update payload for an existing patient."""
    id: int
    name: str
    phone_number: str
    document_number: str
    status_id: int
    birth_date: str

    def __post_init__(self):
        require_int("id", self.id)
        require_text("name", self.name)
        require_text("phone_number", self.phone_number)
        require_text("document_number", self.document_number)
        require_int("status_id", self.status_id)
        _require_iso_date(self.birth_date)
