"""
models/base.py
--------------
Field checks shared by the DTO dataclasses.
"""

from typing import Any


def require_text(field_name: str, value: Any) -> None:
    """Raise ValueError unless `value` is a non-blank string."""
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"'{field_name}' is required")


def require_int(field_name: str, value: Any) -> None:
    """Raise ValueError unless `value` is an int (bool excluded)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"'{field_name}' must be an integer")


def require_ids(field_name: str, values: Any) -> None:
    for value in values:
        require_int(field_name, value)
