"""
models/specialty.py
-------------------
DTOs for medical specialties.
"""

from dataclasses import dataclass

from models.base import require_int, require_text


def _require_duration(value) -> None:
    require_int("scheduled_duration", value)
    if value <= 0:
        raise ValueError("'scheduled_duration' must be positive")


@dataclass(frozen=True)
class SpecialtyDTO:
    """
    A specialty row as stored.

    Attributes:
        id: Database primary key.
        name: Display name, unique.
        scheduled_duration: Default appointment length in minutes.
    """
    id: int
    name: str
    scheduled_duration: int

    def __post_init__(self):
        require_int("id", self.id)
        require_text("name", self.name)
        _require_duration(self.scheduled_duration)


@dataclass(frozen=True)
class SpecialtyInsertDTO:
    name: str
    scheduled_duration: int

    def __post_init__(self):
        require_text("name", self.name)
        _require_duration(self.scheduled_duration)
