"""Data models for the store module."""

from dataclasses import dataclass
from typing import Optional

__all__ = ["ITEMS_PER_PAGE", "Person", "PaginationState"]

# Fixed page size for the people listing
ITEMS_PER_PAGE = 5


@dataclass
class Person:
    """
    One row of the ``people`` table.

    Fields
    ──────
    id    — SQLite row id (None until saved; never reused after deletion)
    name  — free text, no uniqueness constraint
    age   — integer, no range constraint
    """
    name: str
    age:  int
    id:   Optional[int] = None

    def __str__(self) -> str:
        return f"Person(id={self.id}, name={self.name!r}, age={self.age})"


@dataclass
class PaginationState:
    """
    Derived paging window over the id-descending people listing.

    Not persisted; total_pages is recomputed from the live row count by
    PersonRegistry.refresh() after every mutation.
    """
    current_page:   int = 1
    total_pages:    int = 1
    items_per_page: int = ITEMS_PER_PAGE

    @property
    def offset(self) -> int:
        return (self.current_page - 1) * self.items_per_page

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages
