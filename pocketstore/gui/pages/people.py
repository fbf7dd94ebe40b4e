"""
PeoplePage — the "SQLite" tab.

Adds, edits and deletes people in the local SQLite database and pages
through them five at a time, newest first.

Layout
──────
  ┌─────────────────────────────────────────┐
  │ Name: [______________________________]  │
  │ Age:  [______________________________]  │
  │ [Add Person] [Refresh List] [Clear Table]│
  │ People (5)                              │
  │ ┌──────────────────────────────────────┐│
  │ │ ID │ Name          │ Age             ││
  │ │  6 │ Ana           │ 30              ││
  │ └──────────────────────────────────────┘│
  │                     [Edit] [Delete]     │
  │ [Previous]   Page 1 of 2   [Next]       │
  └─────────────────────────────────────────┘
"""

import logging
from typing import Optional

from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from pocketstore.gui.dialogs import ask_confirmation, show_notice
from pocketstore.gui.pages.edit_person import EditPersonDialog
from pocketstore.gui.viewmodels import Outcome, PeopleViewModel
from pocketstore.store.db import PersonRegistry
from pocketstore.store.models import Person

__all__ = ["PeoplePage"]

logger = logging.getLogger(__name__)

# Column indices
_COL_ID   = 0
_COL_NAME = 1
_COL_AGE  = 2
_HEADERS = ["ID", "Name", "Age"]


class PeoplePage(QWidget):
    """Second tab: paginated CRUD over the people table."""

    def __init__(self, registry: PersonRegistry, parent: QWidget = None) -> None:
        super().__init__(parent)
        self._vm = PeopleViewModel(registry)
        self._edit_dialog: Optional[EditPersonDialog] = None
        self._build_ui()
        notice = self._vm.refresh()
        self._render()
        if notice is not None and notice.outcome is Outcome.STORAGE_ERROR:
            show_notice(self, notice)

    # ── UI construction ────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(8)

        layout.addWidget(QLabel("<b>SQLite Example</b>"))
        layout.addWidget(QLabel("Local database with SQLite"))

        # Add form
        layout.addWidget(QLabel("Name:"))
        self._name_edit = QLineEdit()
        self._name_edit.setPlaceholderText("Enter a name")
        layout.addWidget(self._name_edit)
        layout.addWidget(QLabel("Age:"))
        self._age_edit = QLineEdit()
        self._age_edit.setPlaceholderText("Enter the age")
        layout.addWidget(self._age_edit)

        btn_row = QHBoxLayout()
        self._add_btn     = QPushButton("Add Person")
        self._refresh_btn = QPushButton("Refresh List")
        self._clear_btn   = QPushButton("Clear Table")
        self._add_btn.clicked.connect(self._on_add)
        self._refresh_btn.clicked.connect(self._on_refresh)
        self._clear_btn.clicked.connect(self._on_clear)
        for btn in (self._add_btn, self._refresh_btn, self._clear_btn):
            btn_row.addWidget(btn)
        layout.addLayout(btn_row)

        # Listing
        self._list_title = QLabel()
        layout.addWidget(self._list_title)

        self._table = QTableWidget(0, len(_HEADERS))
        self._table.setHorizontalHeaderLabels(_HEADERS)
        self._table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self._table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        self._table.setSelectionMode(QTableWidget.SelectionMode.SingleSelection)
        self._table.horizontalHeader().setStretchLastSection(True)
        self._table.itemSelectionChanged.connect(self._render_row_actions)
        layout.addWidget(self._table)

        self._empty_label = QLabel("<i>No people registered</i>")
        layout.addWidget(self._empty_label)

        row_actions = QHBoxLayout()
        row_actions.addStretch()
        self._edit_btn   = QPushButton("Edit")
        self._delete_btn = QPushButton("Delete")
        self._edit_btn.clicked.connect(self._on_edit)
        self._delete_btn.clicked.connect(self._on_delete)
        row_actions.addWidget(self._edit_btn)
        row_actions.addWidget(self._delete_btn)
        layout.addLayout(row_actions)

        # Pagination
        self._pagination = QWidget()
        pager = QHBoxLayout(self._pagination)
        pager.setContentsMargins(0, 0, 0, 0)
        self._prev_btn = QPushButton("Previous")
        self._page_label = QLabel()
        self._next_btn = QPushButton("Next")
        self._prev_btn.clicked.connect(self._on_previous)
        self._next_btn.clicked.connect(self._on_next)
        pager.addWidget(self._prev_btn)
        pager.addStretch()
        pager.addWidget(self._page_label)
        pager.addStretch()
        pager.addWidget(self._next_btn)
        layout.addWidget(self._pagination)

    # ── Slots ──────────────────────────────────────────────────────────────

    def _on_add(self) -> None:
        self._vm.name_input = self._name_edit.text()
        self._vm.age_input = self._age_edit.text()
        notice = self._vm.add_person()
        self._sync_form()
        self._render()
        show_notice(self, notice)

    def _on_refresh(self) -> None:
        notice = self._vm.refresh()
        self._render()
        show_notice(self, notice)

    def _on_clear(self) -> None:
        self._confirm_and_run(self._vm.request_clear())

    def _on_delete(self) -> None:
        person = self.selected_person()
        if person is not None:
            self._confirm_and_run(self._vm.request_delete(person.id))

    def _on_edit(self) -> None:
        person = self.selected_person()
        if person is not None:
            self.open_edit_dialog(person)

    def _on_previous(self) -> None:
        self._step_page(self._vm.previous_page)

    def _on_next(self) -> None:
        self._step_page(self._vm.next_page)

    def _on_save_edit(self, name: str, age: str) -> None:
        self._vm.name_input = name
        self._vm.age_input = age
        notice = self._vm.save_edit()
        if notice.ok and self._edit_dialog is not None:
            self._edit_dialog.accept()
        self._render()
        show_notice(self._edit_dialog or self, notice)

    def _on_edit_finished(self, _result: int) -> None:
        # Dialog dismissed without a successful save
        if self._vm.editing is not None:
            self._vm.cancel_edit()
        self._edit_dialog = None
        self._sync_form()
        self._render()

    # ── Internal helpers ───────────────────────────────────────────────────

    def _step_page(self, step) -> None:
        before = self._vm.last_notice
        moved = step()
        self._render()
        # A failed page load leaves a fresh notice behind
        if not moved and self._vm.last_notice is not before:
            show_notice(self, self._vm.last_notice)

    def _confirm_and_run(self, token) -> None:
        if ask_confirmation(self, token):
            notice = self._vm.confirm(token)
        else:
            notice = self._vm.dismiss(token)
        self._render()
        show_notice(self, notice)

    def _sync_form(self) -> None:
        """Mirror the view model's scratch fields into the add form."""
        self._name_edit.setText(self._vm.name_input)
        self._age_edit.setText(self._vm.age_input)

    def _render(self) -> None:
        vm = self._vm
        self._list_title.setText(f"<b>{vm.list_title}</b>")

        self._table.setRowCount(len(vm.people))
        for row, person in enumerate(vm.people):
            self._table.setItem(row, _COL_ID,   QTableWidgetItem(str(person.id)))
            self._table.setItem(row, _COL_NAME, QTableWidgetItem(person.name))
            self._table.setItem(row, _COL_AGE,  QTableWidgetItem(str(person.age)))

        has_rows = bool(vm.people)
        self._table.setVisible(has_rows)
        self._empty_label.setVisible(not has_rows)
        self._pagination.setVisible(has_rows)
        self._page_label.setText(vm.page_label)
        self._prev_btn.setEnabled(vm.can_go_previous)
        self._next_btn.setEnabled(vm.can_go_next)

        self._add_btn.setEnabled(vm.can_add)
        self._refresh_btn.setEnabled(not vm.is_loading)
        self._clear_btn.setEnabled(not vm.is_loading)
        self._render_row_actions()

    def _render_row_actions(self) -> None:
        enabled = self.selected_person() is not None and self._edit_dialog is None
        self._edit_btn.setEnabled(enabled)
        self._delete_btn.setEnabled(enabled)

    # ── Public API ─────────────────────────────────────────────────────────

    def selected_person(self) -> Optional[Person]:
        """Return the Person of the highlighted table row, or None."""
        row = self._table.currentRow()
        if not self._table.selectedItems() or not 0 <= row < len(self._vm.people):
            return None
        return self._vm.people[row]

    def open_edit_dialog(self, person: Person) -> EditPersonDialog:
        """Enter the edit workflow for *person* and show the edit dialog."""
        self._vm.begin_edit(person)
        dialog = EditPersonDialog(self._vm.name_input, self._vm.age_input, self)
        dialog.save_requested.connect(self._on_save_edit)
        dialog.finished.connect(self._on_edit_finished)
        self._edit_dialog = dialog
        self._render()
        dialog.open()
        return dialog
