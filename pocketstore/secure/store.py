"""SecureValueStore — one sensitive string in one fixed slot."""

import logging
from typing import Optional

from pocketstore.exceptions import ValidationError
from pocketstore.secure.backend import EncryptedFileBackend

__all__ = ["SECURE_VALUE_KEY", "SecureValueStore"]

logger = logging.getLogger(__name__)

# The only slot this store ever touches
SECURE_VALUE_KEY = "secureUserData"


class SecureValueStore:
    """
    save / load / clear facade over an encrypted key-value backend.

    Backend failures propagate as SecureStoreError; a failed save leaves the
    previously stored value in place.
    """

    def __init__(self, backend: EncryptedFileBackend, key: str = SECURE_VALUE_KEY) -> None:
        self._backend = backend
        self._key = key

    def save(self, value: str) -> None:
        """
        Store *value*, overwriting any previous one.

        Raises:
            ValidationError: value is empty or whitespace-only.
        """
        if not value or not value.strip():
            raise ValidationError("Please enter a value before saving.")
        self._backend.set_item(self._key, value)
        logger.info("Secure value saved")

    def load(self) -> Optional[str]:
        """Return the stored value, or None if nothing is stored."""
        return self._backend.get_item(self._key)

    def clear(self) -> bool:
        """
        Remove the stored value.

        Returns:
            False when nothing was stored (no-op), True otherwise.
        """
        removed = self._backend.delete_item(self._key)
        if removed:
            logger.info("Secure value deleted")
        else:
            logger.debug("Secure value clear requested but nothing stored")
        return removed
