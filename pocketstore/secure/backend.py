"""
EncryptedFileBackend — encrypted key-value file used by SecureValueStore.

The whole mapping is serialised as JSON and encrypted with Fernet
(AES-128-CBC + HMAC-SHA256).  The Fernet key lives in its own file next to
the data file and is generated from secure random bytes on first use.

Writes go to a temp file in the same directory and are moved into place
with os.replace(), so a crash mid-write leaves the previous contents.
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Optional

from cryptography.fernet import Fernet, InvalidToken

from pocketstore.exceptions import SecureStoreError

__all__ = ["EncryptedFileBackend"]

logger = logging.getLogger(__name__)

# Serialises read-modify-write cycles: concurrent saves are last-caller-wins
_WRITE_LOCK = threading.Lock()


def _load_or_create_key(path: Path) -> bytes:
    """Read the Fernet key at *path*, generating it if the file is missing."""
    if path.exists():
        return path.read_bytes().strip()
    key = Fernet.generate_key()
    path.parent.mkdir(parents=True, exist_ok=True)
    fd = os.open(str(path), os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
    with os.fdopen(fd, "wb") as f:
        f.write(key)
    logger.info("Generated new secure store key at %s", path)
    return key


class EncryptedFileBackend:
    """
    setItem / getItem / deleteItem over one Fernet-encrypted JSON file.

    All failures (I/O, wrong key, corrupted data) surface as SecureStoreError.
    """

    def __init__(self, data_path: str, key_path: str) -> None:
        self._data_path = Path(data_path).expanduser()
        self._key_path  = Path(key_path).expanduser()
        self._fernet: Optional[Fernet] = None

    # ── Internal helpers ──────────────────────────────────────────────────

    def _cipher(self) -> Fernet:
        if self._fernet is None:
            try:
                self._fernet = Fernet(_load_or_create_key(self._key_path))
            except (OSError, ValueError) as exc:
                raise SecureStoreError(f"Cannot load encryption key: {exc}") from exc
        return self._fernet

    def _read_all(self) -> dict:
        if not self._data_path.exists():
            return {}
        try:
            token = self._data_path.read_bytes()
            items = json.loads(self._cipher().decrypt(token).decode("utf-8"))
        except InvalidToken as exc:
            raise SecureStoreError("Secure store could not be decrypted") from exc
        except (OSError, ValueError) as exc:
            raise SecureStoreError(f"Cannot read secure store: {exc}") from exc
        if not isinstance(items, dict):
            raise SecureStoreError("Secure store is corrupted")
        return items

    def _write_all(self, items: dict) -> None:
        token = self._cipher().encrypt(json.dumps(items).encode("utf-8"))
        try:
            self._data_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(
                prefix=self._data_path.name, suffix=".tmp",
                dir=str(self._data_path.parent),
            )
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(token)
                os.replace(tmp, self._data_path)
            except BaseException:
                if os.path.exists(tmp):
                    os.unlink(tmp)
                raise
        except OSError as exc:
            raise SecureStoreError(f"Cannot write secure store: {exc}") from exc

    # ── Public API ────────────────────────────────────────────────────────

    def set_item(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value."""
        with _WRITE_LOCK:
            items = self._read_all()
            items[key] = value
            self._write_all(items)

    def get_item(self, key: str) -> Optional[str]:
        """Return the value under *key*, or None if absent."""
        return self._read_all().get(key)

    def delete_item(self, key: str) -> bool:
        """
        Remove *key*.

        Returns:
            True if a value was removed, False if nothing was stored.
        """
        with _WRITE_LOCK:
            items = self._read_all()
            if key not in items:
                return False
            del items[key]
            self._write_all(items)
            return True
