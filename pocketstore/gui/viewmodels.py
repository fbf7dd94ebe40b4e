"""
GUI ViewModels — pure-Python state containers for the two screens.

No Qt imports here; every class is testable without a display.
Qt pages own one view model each, forward user actions to it and re-render
from its attributes afterwards.  Every action returns a Notice (or None when
there is nothing to tell the user); the page decides how to show it.

Public API
──────────
Outcome               — result category of a user action
Notice                — user-facing result (outcome + title + message)
EditState             — IDLE / EDITING for the people edit workflow
ConfirmationToken     — pending destructive action awaiting confirm/dismiss
PeopleViewModel       — pagination session, CRUD actions, edit state machine
SecureValueViewModel  — input / stored / last-saved copies of the secret
"""

import logging
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

from pocketstore.exceptions import (
    BusyError,
    ConfirmationError,
    EditStateError,
    NotFoundError,
    SecureStoreError,
    StorageError,
    ValidationError,
)
from pocketstore.secure.store import SecureValueStore
from pocketstore.store.db import PersonRegistry
from pocketstore.store.models import PaginationState, Person

__all__ = [
    "Outcome",
    "Notice",
    "EditState",
    "ConfirmAction",
    "ConfirmationToken",
    "PeopleViewModel",
    "SecureValueViewModel",
]

logger = logging.getLogger(__name__)


# ── Results ────────────────────────────────────────────────────────────────────

class Outcome(str, Enum):
    SUCCESS          = "success"
    VALIDATION_ERROR = "validation_error"
    NOT_FOUND        = "not_found"
    STORAGE_ERROR    = "storage_error"
    NO_DATA          = "no_data"
    CANCELLED        = "cancelled"


@dataclass(frozen=True)
class Notice:
    """Blocking notification shown to the user after an action."""
    outcome: Outcome
    title:   str
    message: str

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.SUCCESS


@contextmanager
def _loading(vm) -> Iterator[None]:
    """Hold vm.is_loading for the duration of one storage operation."""
    if vm.is_loading:
        raise BusyError("Another operation is still in progress")
    vm.is_loading = True
    try:
        yield
    finally:
        vm.is_loading = False


# ── PeopleViewModel ────────────────────────────────────────────────────────────

class EditState(str, Enum):
    IDLE    = "idle"
    EDITING = "editing"


class ConfirmAction(str, Enum):
    DELETE_ONE = "delete_one"
    DELETE_ALL = "delete_all"


@dataclass(frozen=True)
class ConfirmationToken:
    """
    A destructive action waiting for the user's answer.

    Dropping the token (dismiss) performs no storage access.
    """
    action:    ConfirmAction
    person_id: Optional[int] = None
    nonce:     str = field(default_factory=lambda: uuid.uuid4().hex)

    @property
    def prompt(self) -> str:
        if self.action is ConfirmAction.DELETE_ALL:
            return "Are you sure you want to delete all records?"
        return "Are you sure you want to delete this record?"


class PeopleViewModel:
    """
    Session state of the people screen.

    Attributes
    ──────────
    pagination   — PaginationState (current / total pages)
    people       — rows of the current page, newest first
    name_input   — scratch name shared by the add form and the edit dialog
    age_input    — scratch age text, same sharing as name_input
    edit_state   — EditState.IDLE or EditState.EDITING
    editing      — the Person being edited, or None
    is_loading   — True while a storage call is outstanding
    last_notice  — the most recent Notice returned by an action
    """

    def __init__(self, registry: PersonRegistry) -> None:
        self._registry = registry
        self.pagination:  PaginationState   = PaginationState()
        self.people:      list[Person]      = []
        self.name_input:  str               = ""
        self.age_input:   str               = ""
        self.edit_state:  EditState         = EditState.IDLE
        self.editing:     Optional[Person]  = None
        self.is_loading:  bool              = False
        self.last_notice: Optional[Notice]  = None
        self._pending: dict[str, ConfirmationToken] = {}

    # ── Derived state ──────────────────────────────────────────────────────

    @property
    def can_add(self) -> bool:
        return not self.is_loading and self.edit_state is EditState.IDLE

    @property
    def can_go_previous(self) -> bool:
        return not self.is_loading and self.pagination.has_previous

    @property
    def can_go_next(self) -> bool:
        return not self.is_loading and self.pagination.has_next

    @property
    def page_label(self) -> str:
        return f"Page {self.pagination.current_page} of {self.pagination.total_pages}"

    @property
    def list_title(self) -> str:
        return f"People ({len(self.people)})"

    # ── Internal helpers ───────────────────────────────────────────────────

    def _notify(self, outcome: Outcome, title: str, message: str) -> Notice:
        self.last_notice = Notice(outcome, title, message)
        return self.last_notice

    def _storage_failure(self, what: str, exc: Exception) -> Notice:
        logger.error("%s: %s", what, exc, exc_info=True)
        return self._notify(Outcome.STORAGE_ERROR, "Error", what)

    def _reload(self) -> Optional[Notice]:
        try:
            self.people = self._registry.refresh(self.pagination)
        except StorageError as exc:
            return self._storage_failure("Could not load people", exc)
        return None

    def _clear_scratch(self) -> None:
        self.name_input = ""
        self.age_input = ""

    # ── Listing & paging ───────────────────────────────────────────────────

    def refresh(self) -> Optional[Notice]:
        """Re-list the current page and recompute the page count."""
        with _loading(self):
            return self._reload()

    def change_page(self, page: int) -> bool:
        """
        Switch to *page* if it lies within [1, total_pages].

        Returns:
            False (and does nothing) when *page* is out of range. Also False
            when the page could not be loaded: the previous page number is
            restored and the failure is left in last_notice.
        """
        if not 1 <= page <= self.pagination.total_pages:
            return False
        with _loading(self):
            previous = self.pagination.current_page
            self.pagination.current_page = page
            if self._reload() is not None:
                self.pagination.current_page = previous
                return False
        return True

    def next_page(self) -> bool:
        return self.change_page(self.pagination.current_page + 1)

    def previous_page(self) -> bool:
        return self.change_page(self.pagination.current_page - 1)

    # ── Insert ─────────────────────────────────────────────────────────────

    def add_person(self) -> Notice:
        """
        Insert a person from the scratch fields.

        On success the view jumps back to page 1, where the new row is first.
        """
        if self.edit_state is EditState.EDITING:
            raise EditStateError("Finish or cancel the current edit before adding")
        with _loading(self):
            try:
                person = self._registry.insert(self.name_input, self.age_input)
            except ValidationError as exc:
                return self._notify(Outcome.VALIDATION_ERROR, "Error", str(exc))
            except StorageError as exc:
                return self._storage_failure("Could not add the person", exc)
            logger.debug("Added %s", person)
            self._clear_scratch()
            self.pagination.current_page = 1
            return self._reload() or self._notify(
                Outcome.SUCCESS, "Success", "Person added successfully"
            )

    # ── Edit workflow ──────────────────────────────────────────────────────

    def begin_edit(self, person: Person) -> None:
        """IDLE -> EDITING; load *person* into the scratch fields."""
        if self.edit_state is EditState.EDITING:
            raise EditStateError("Already editing another person")
        self.editing = person
        self.name_input = person.name
        self.age_input = str(person.age)
        self.edit_state = EditState.EDITING

    def cancel_edit(self) -> None:
        """EDITING -> IDLE without touching storage."""
        if self.edit_state is not EditState.EDITING:
            raise EditStateError("No edit in progress")
        self.editing = None
        self._clear_scratch()
        self.edit_state = EditState.IDLE

    def save_edit(self) -> Notice:
        """
        Write the scratch fields to the row being edited.

        The page number is kept. On validation or not-found failure the
        workflow stays in EDITING so the user can fix or cancel.
        """
        if self.edit_state is not EditState.EDITING or self.editing is None:
            raise EditStateError("No edit in progress")
        with _loading(self):
            try:
                self._registry.update(self.editing.id, self.name_input, self.age_input)
            except ValidationError as exc:
                return self._notify(Outcome.VALIDATION_ERROR, "Error", str(exc))
            except NotFoundError:
                return self._notify(
                    Outcome.NOT_FOUND, "Error", "Could not update the record"
                )
            except StorageError as exc:
                return self._storage_failure("Could not update the record", exc)
            self.editing = None
            self._clear_scratch()
            self.edit_state = EditState.IDLE
            return self._reload() or self._notify(
                Outcome.SUCCESS, "Success", "Record updated successfully"
            )

    # ── Destructive actions (two-phase) ────────────────────────────────────

    def request_delete(self, person_id: int) -> ConfirmationToken:
        """First phase of deleting one row; nothing is touched yet."""
        token = ConfirmationToken(ConfirmAction.DELETE_ONE, person_id)
        self._pending[token.nonce] = token
        return token

    def request_clear(self) -> ConfirmationToken:
        """First phase of deleting every row."""
        token = ConfirmationToken(ConfirmAction.DELETE_ALL)
        self._pending[token.nonce] = token
        return token

    def dismiss(self, token: ConfirmationToken) -> Notice:
        """Drop *token*; no storage access."""
        self._pending.pop(token.nonce, None)
        return self._notify(Outcome.CANCELLED, "Cancelled", "Nothing was deleted")

    def confirm(self, token: ConfirmationToken) -> Notice:
        """
        Second phase: run the action *token* stands for.

        Deleting one row re-lists the current page without clamping it, so
        the page may come back empty. Deleting all rows returns to page 1.

        Raises:
            ConfirmationError: token unknown or already used.
        """
        if self._pending.pop(token.nonce, None) is None:
            raise ConfirmationError("Confirmation token is unknown or already used")
        if token.action is ConfirmAction.DELETE_ALL:
            return self._delete_all()
        return self._delete_one(token.person_id)

    def _delete_one(self, person_id: int) -> Notice:
        with _loading(self):
            try:
                self._registry.delete(person_id)
            except NotFoundError:
                return self._notify(
                    Outcome.NOT_FOUND, "Error", "Could not delete the record"
                )
            except StorageError as exc:
                return self._storage_failure("Could not delete the record", exc)
            return self._reload() or self._notify(
                Outcome.SUCCESS, "Success", "Record deleted successfully"
            )

    def _delete_all(self) -> Notice:
        with _loading(self):
            try:
                removed = self._registry.delete_all()
            except StorageError as exc:
                return self._storage_failure("Could not delete the records", exc)
            logger.debug("Cleared %d rows", removed)
            self.pagination.current_page = 1
            return self._reload() or self._notify(
                Outcome.SUCCESS, "Success", "All records have been deleted"
            )


# ── SecureValueViewModel ───────────────────────────────────────────────────────

class SecureValueViewModel:
    """
    State of the secure value screen.

    Attributes
    ──────────
    input_text      — what the user is typing
    stored_display  — the value last loaded from the store ("" if none)
    last_saved      — the value last saved successfully in this session
    show_secret     — False masks stored_display and last_saved on screen
    """

    def __init__(self, store: SecureValueStore) -> None:
        self._store = store
        self.input_text:     str              = ""
        self.stored_display: str              = ""
        self.last_saved:     str              = ""
        self.show_secret:    bool             = False
        self.is_loading:     bool             = False
        self.last_notice:    Optional[Notice] = None

    @property
    def display_text(self) -> str:
        if self.show_secret:
            return self.stored_display
        return "•" * len(self.stored_display)

    @property
    def saved_display_text(self) -> str:
        if self.show_secret:
            return self.last_saved
        return "•" * len(self.last_saved)

    def toggle_visibility(self) -> None:
        self.show_secret = not self.show_secret

    def _notify(self, outcome: Outcome, title: str, message: str) -> Notice:
        self.last_notice = Notice(outcome, title, message)
        return self.last_notice

    def save(self) -> Notice:
        with _loading(self):
            try:
                self._store.save(self.input_text)
            except ValidationError:
                return self._notify(
                    Outcome.VALIDATION_ERROR, "Error",
                    "Please enter a value before saving.",
                )
            except SecureStoreError as exc:
                logger.error("Secure save failed: %s", exc, exc_info=True)
                return self._notify(
                    Outcome.STORAGE_ERROR, "Error", "Could not save the value securely."
                )
            self.last_saved = self.input_text
            return self._notify(Outcome.SUCCESS, "Saved", "Value saved securely.")

    def load(self) -> Optional[Notice]:
        """Load the stored value into stored_display; NO_DATA if absent."""
        with _loading(self):
            try:
                value = self._store.load()
            except SecureStoreError as exc:
                logger.error("Secure load failed: %s", exc, exc_info=True)
                return self._notify(
                    Outcome.STORAGE_ERROR, "Error", "Could not load the secure value."
                )
            if value is None:
                return self._notify(Outcome.NO_DATA, "Information", "No data stored.")
            self.stored_display = value
            return None

    def clear(self) -> Notice:
        with _loading(self):
            try:
                removed = self._store.clear()
            except SecureStoreError as exc:
                logger.error("Secure delete failed: %s", exc, exc_info=True)
                return self._notify(
                    Outcome.STORAGE_ERROR, "Error", "Could not delete the secure value."
                )
            if not removed:
                return self._notify(
                    Outcome.NO_DATA, "Information", "No data to delete."
                )
            self.stored_display = ""
            return self._notify(Outcome.SUCCESS, "Deleted", "Secure value deleted.")
