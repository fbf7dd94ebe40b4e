"""
secure — encrypted single-slot storage for one sensitive string.

Public API
──────────
EncryptedFileBackend — Fernet-encrypted key-value file
SecureValueStore     — save / load / clear under the fixed key
"""

from pocketstore.secure.backend import EncryptedFileBackend
from pocketstore.secure.store import SECURE_VALUE_KEY, SecureValueStore

__all__ = ["EncryptedFileBackend", "SECURE_VALUE_KEY", "SecureValueStore"]
