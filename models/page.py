"""
models/page.py
--------------
Result shape shared by every paginated listing.
"""

from typing import Generic, NamedTuple, TypeVar

T = TypeVar("T")


class ListResult(NamedTuple, Generic[T]):
    """
    One page of a listing.

    Attributes:
        total: Number of rows matching the filters, regardless of the page window.
        items: The rows inside the requested window.
    """
    total: int
    items: list[T]
