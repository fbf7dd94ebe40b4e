"""
Project-wide custom exception hierarchy.
All modules raise subclasses of PocketStoreError — never bare Exception.
"""

__all__ = [
    "PocketStoreError",
    "ValidationError",
    "StoreError",
    "StorageError",
    "NotFoundError",
    "SecureStoreError",
    "ViewModelError",
    "EditStateError",
    "BusyError",
    "ConfirmationError",
]


class PocketStoreError(Exception):
    """Root exception for all pocketstore errors."""


class ValidationError(PocketStoreError):
    """Raised when user input is rejected before any storage access."""


# ── People registry ───────────────────────────────────────────────────────────

class StoreError(PocketStoreError):
    """Base class for people registry errors."""


class StorageError(StoreError):
    """Raised on SQLite I/O, statement or bootstrap errors."""


class NotFoundError(StoreError):
    """Raised when an update or delete matched no row."""

    def __init__(self, person_id: int) -> None:
        super().__init__(f"No person with id={person_id}")
        self.person_id = person_id


# ── Secure value store ────────────────────────────────────────────────────────

class SecureStoreError(PocketStoreError):
    """Raised when the encrypted key-value file cannot be read or written."""


# ── View models ───────────────────────────────────────────────────────────────

class ViewModelError(PocketStoreError):
    """Base class for presentation-state errors (UI gating violations)."""


class EditStateError(ViewModelError):
    """Raised on an operation not allowed in the current edit state."""


class BusyError(ViewModelError):
    """Raised when an operation is issued while another is outstanding."""


class ConfirmationError(ViewModelError):
    """Raised when a confirmation token is unknown or already spent."""
