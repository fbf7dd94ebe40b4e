"""
Runtime configuration for pocketstore.

Resolution order (highest first):
  1) explicit CLI flags (--home, --debug)
  2) environment variables POCKETSTORE_HOME / POCKETSTORE_DEBUG
  3) defaults below (~/.pocketstore)
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

__all__ = ["AppConfig", "DEFAULT_HOME"]

DEFAULT_HOME = "~/.pocketstore"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class AppConfig:
    """File locations and logging switches shared by the CLI and the GUI."""
    home:            str  = DEFAULT_HOME
    db_filename:     str  = "peopledb.db"
    secure_filename: str  = "secure.bin"
    key_filename:    str  = "secure.key"
    debug:           bool = False

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Build a config from POCKETSTORE_* environment variables."""
        home = os.environ.get("POCKETSTORE_HOME", "").strip() or DEFAULT_HOME
        debug = os.environ.get("POCKETSTORE_DEBUG", "").strip().lower() in _TRUTHY
        return cls(home=home, debug=debug)

    def with_overrides(self, home: Optional[str] = None, debug: bool = False) -> "AppConfig":
        """Apply CLI flags on top of this config; unset flags keep current values."""
        return replace(
            self,
            home=home or self.home,
            debug=self.debug or debug,
        )

    @property
    def home_dir(self) -> Path:
        return Path(self.home).expanduser()

    @property
    def db_path(self) -> Path:
        return self.home_dir / self.db_filename

    @property
    def secure_path(self) -> Path:
        return self.home_dir / self.secure_filename

    @property
    def key_path(self) -> Path:
        return self.home_dir / self.key_filename
