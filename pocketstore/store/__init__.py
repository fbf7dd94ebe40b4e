"""
store — SQLite-backed persistence layer for the people listing.

Public API
──────────
Person           — dataclass representing one row
PaginationState  — derived paging window (current / total pages)
PersonRegistry   — CRUD + pagination interface
"""

from pocketstore.store.models import ITEMS_PER_PAGE, PaginationState, Person
from pocketstore.store.db import PersonRegistry, parse_person_input

__all__ = [
    "ITEMS_PER_PAGE",
    "PaginationState",
    "Person",
    "PersonRegistry",
    "parse_person_input",
]
