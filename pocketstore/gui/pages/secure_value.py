"""
SecureValuePage — the "SecureStore" tab.

Saves, loads and deletes one sensitive string in the encrypted store.
The stored value is shown masked until the eye button is toggled.

Layout
──────
  ┌─────────────────────────────────────────┐
  │ Enter a sensitive value:                │
  │ [•••••••••••••••••••••••••••••••] [👁]  │
  │ [Save] [Load] [Delete]                  │
  │ Stored secure value:                    │
  │   ••••••••                              │
  └─────────────────────────────────────────┘
"""

import logging

from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from pocketstore.gui.dialogs import show_notice
from pocketstore.gui.viewmodels import Outcome, SecureValueViewModel
from pocketstore.secure.store import SecureValueStore

__all__ = ["SecureValuePage"]

logger = logging.getLogger(__name__)


class SecureValuePage(QWidget):
    """First tab: encrypted single-value storage."""

    def __init__(self, store: SecureValueStore, parent: QWidget = None) -> None:
        super().__init__(parent)
        self._vm = SecureValueViewModel(store)
        self._build_ui()
        # An empty store is the normal first-run state; only failures are shown
        notice = self._vm.load()
        self._render()
        if notice is not None and notice.outcome is Outcome.STORAGE_ERROR:
            show_notice(self, notice)

    # ── UI construction ────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(8)

        layout.addWidget(QLabel("<b>SecureStore Example</b>"))
        layout.addWidget(QLabel("Secure storage of sensitive data"))
        layout.addWidget(QLabel("Enter a sensitive value:"))

        input_row = QHBoxLayout()
        self._input_edit = QLineEdit()
        self._input_edit.setPlaceholderText("e.g. password, token…")
        self._input_edit.setEchoMode(QLineEdit.EchoMode.Password)
        self._input_edit.textChanged.connect(self._on_text_changed)
        input_row.addWidget(self._input_edit)
        self._eye_btn = QPushButton("👁")
        self._eye_btn.setCheckable(True)
        self._eye_btn.clicked.connect(self._on_toggle_visibility)
        input_row.addWidget(self._eye_btn)
        layout.addLayout(input_row)

        btn_row = QHBoxLayout()
        self._save_btn  = QPushButton("Save Secure Value")
        self._load_btn  = QPushButton("Load Secure Value")
        self._clear_btn = QPushButton("Delete Secure Value")
        self._save_btn.clicked.connect(self._on_save)
        self._load_btn.clicked.connect(self._on_load)
        self._clear_btn.clicked.connect(self._on_clear)
        for btn in (self._save_btn, self._load_btn, self._clear_btn):
            btn_row.addWidget(btn)
        layout.addLayout(btn_row)

        self._stored_title = QLabel("Stored secure value:")
        self._stored_label = QLabel("")
        self._saved_label  = QLabel("")
        layout.addWidget(self._stored_title)
        layout.addWidget(self._stored_label)
        layout.addWidget(self._saved_label)
        layout.addStretch()

    # ── Slots ──────────────────────────────────────────────────────────────

    def _on_text_changed(self, text: str) -> None:
        self._vm.input_text = text

    def _on_toggle_visibility(self) -> None:
        self._vm.toggle_visibility()
        self._render()

    def _on_save(self) -> None:
        self._run(self._vm.save)

    def _on_load(self) -> None:
        self._run(self._vm.load)

    def _on_clear(self) -> None:
        self._run(self._vm.clear)

    # ── Internal helpers ───────────────────────────────────────────────────

    def _run(self, action) -> None:
        notice = action()
        self._render()
        show_notice(self, notice)

    def _render(self) -> None:
        vm = self._vm
        self._input_edit.setEchoMode(
            QLineEdit.EchoMode.Normal if vm.show_secret else QLineEdit.EchoMode.Password
        )
        self._eye_btn.setChecked(vm.show_secret)
        has_value = bool(vm.stored_display)
        self._stored_title.setVisible(has_value)
        self._stored_label.setVisible(has_value)
        self._stored_label.setText(vm.display_text)
        self._saved_label.setText(
            f"Last saved this session: {vm.saved_display_text}"
            if vm.last_saved else ""
        )
        for btn in (self._save_btn, self._load_btn, self._clear_btn):
            btn.setEnabled(not vm.is_loading)
