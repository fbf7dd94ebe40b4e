"""
MainWindow — top-level application window for the pocketstore GUI.

Uses a QTabWidget to host the two independent screens:
  0  SecureValuePage  — encrypted single-value storage
  1  PeoplePage       — paginated people table in SQLite

Each screen owns its own resource; nothing is shared between them.
"""

import logging
import sys
from typing import Optional

from PyQt6.QtWidgets import QApplication, QMainWindow, QTabWidget, QWidget

from pocketstore.config import AppConfig
from pocketstore.gui.pages.people import PeoplePage
from pocketstore.gui.pages.secure_value import SecureValuePage
from pocketstore.secure.backend import EncryptedFileBackend
from pocketstore.secure.store import SecureValueStore
from pocketstore.store.db import PersonRegistry

__all__ = ["MainWindow", "run"]

logger = logging.getLogger(__name__)

# Tab indices — keep in sync with the order they are added
TAB_SECURE = 0
TAB_PEOPLE = 1


class MainWindow(QMainWindow):
    """Root window: opens both stores and hosts one tab per screen."""

    def __init__(self, config: Optional[AppConfig] = None, parent: QWidget = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("pocketstore")
        self.resize(480, 640)

        self._config = config or AppConfig.from_env()
        self._registry = PersonRegistry(str(self._config.db_path))
        self._secure = SecureValueStore(
            EncryptedFileBackend(
                str(self._config.secure_path), str(self._config.key_path)
            )
        )
        self._build_ui()

    def _build_ui(self) -> None:
        self._tabs = QTabWidget()
        self.setCentralWidget(self._tabs)

        self._page_secure = SecureValuePage(self._secure)
        self._page_people = PeoplePage(self._registry)

        self._tabs.addTab(self._page_secure, "SecureStore")  # 0
        self._tabs.addTab(self._page_people, "SQLite")       # 1

    def go_to(self, tab_index: int) -> None:
        """Switch the visible tab to *tab_index*."""
        self._tabs.setCurrentIndex(tab_index)


def run(config: AppConfig) -> int:
    """Start the Qt event loop with a MainWindow; returns the exit code."""
    app = QApplication.instance() or QApplication(sys.argv)
    window = MainWindow(config)
    window.show()
    logger.info("GUI started (data in %s)", config.home_dir)
    return app.exec()
