"""
models/status.py
----------------
DTOs for lifecycle statuses (e.g. Active / Inactive).
"""

from dataclasses import dataclass

from models.base import require_int, require_text


@dataclass(frozen=True)
class StatusDTO:
    """A status row as stored."""
    id: int
    name: str

    def __post_init__(self):
        require_int("id", self.id)
        require_text("name", self.name)


@dataclass(frozen=True)
class StatusInsertDTO:
    """Payload for a new status. The store assigns the id."""
    name: str

    def __post_init__(self):
        require_text("name", self.name)
