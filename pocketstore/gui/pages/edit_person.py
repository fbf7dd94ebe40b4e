"""EditPersonDialog — window-modal form for editing one person."""

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

__all__ = ["EditPersonDialog"]


class EditPersonDialog(QDialog):
    """
    Name / age form with Cancel and Save.

    Save does not close the dialog by itself: the owner handles
    save_requested and calls accept() once the update succeeded, so a
    failed update leaves the form open for correction.
    """

    save_requested = pyqtSignal(str, str)  # name, age text

    def __init__(self, name: str, age: str, parent: QWidget = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Edit Person")

        layout = QVBoxLayout(self)
        layout.addWidget(QLabel("<b>Edit Person</b>"))
        layout.addWidget(QLabel("Name:"))
        self._name_edit = QLineEdit(name)
        layout.addWidget(self._name_edit)
        layout.addWidget(QLabel("Age:"))
        self._age_edit = QLineEdit(age)
        layout.addWidget(self._age_edit)

        btn_row = QHBoxLayout()
        self._cancel_btn = QPushButton("Cancel")
        self._save_btn   = QPushButton("Save")
        self._cancel_btn.clicked.connect(self.reject)
        self._save_btn.clicked.connect(self._on_save)
        btn_row.addWidget(self._cancel_btn)
        btn_row.addWidget(self._save_btn)
        layout.addLayout(btn_row)

    def _on_save(self) -> None:
        self.save_requested.emit(self._name_edit.text(), self._age_edit.text())
