"""
Unit tests for pocketstore/gui/viewmodels.py — no Qt dependency.

ViewModels are pure-Python state containers.
All tests run on every platform without a display.

Coverage plan
─────────────
PeopleViewModel       → insert resets page, update keeps page, edit state
                        machine, two-phase delete / clear, paging bounds,
                        stale page, loading gate, storage failures
SecureValueViewModel  → save / load / clear notices, masking
"""

from unittest.mock import patch

import pytest


# ─────────────────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────────────────

@pytest.fixture
def registry(tmp_path):
    from pocketstore.store.db import PersonRegistry
    return PersonRegistry(db_path=str(tmp_path / "people.db"))


@pytest.fixture
def vm(registry):
    from pocketstore.gui.viewmodels import PeopleViewModel
    model = PeopleViewModel(registry)
    model.refresh()
    return model


def _add(vm, name="Ana", age="30"):
    vm.name_input = name
    vm.age_input = age
    return vm.add_person()


def _add_many(vm, n):
    for i in range(n):
        _add(vm, f"Person {i}", str(20 + i))


# ─────────────────────────────────────────────────────────────────────────────
# 1. PeopleViewModel — insert
# ─────────────────────────────────────────────────────────────────────────────

class TestPeopleInsert:

    def test_initial_state(self, vm):
        from pocketstore.gui.viewmodels import EditState
        assert vm.people == []
        assert vm.page_label == "Page 1 of 1"
        assert vm.edit_state is EditState.IDLE
        assert vm.can_add

    def test_add_person_success_clears_scratch(self, vm):
        notice = _add(vm)
        assert notice.ok
        assert vm.name_input == ""
        assert vm.age_input == ""
        assert [p.name for p in vm.people] == ["Ana"]
        assert vm.last_notice is notice

    def test_add_person_resets_to_page_one_with_new_row_first(self, vm):
        _add_many(vm, 7)
        assert vm.next_page()
        assert vm.pagination.current_page == 2

        _add(vm, "Newest", "99")
        assert vm.pagination.current_page == 1
        assert vm.people[0].name == "Newest"
        assert vm.pagination.total_pages == 2

    @pytest.mark.parametrize("name,age", [("", "30"), ("Ana", "abc")])
    def test_validation_error_touches_no_storage(self, vm, registry, name, age):
        from pocketstore.gui.viewmodels import Outcome
        with patch.object(registry, "_connect", side_effect=AssertionError("storage touched")):
            notice = _add(vm, name, age)
        assert notice.outcome is Outcome.VALIDATION_ERROR
        # Scratch is kept so the user can fix it
        assert vm.name_input == name

    def test_storage_error_is_reported(self, vm, registry):
        from pocketstore.exceptions import StorageError
        from pocketstore.gui.viewmodels import Outcome
        with patch.object(registry, "insert", side_effect=StorageError("disk I/O error")):
            notice = _add(vm)
        assert notice.outcome is Outcome.STORAGE_ERROR
        assert not vm.is_loading


# ─────────────────────────────────────────────────────────────────────────────
# 2. PeopleViewModel — edit workflow
# ─────────────────────────────────────────────────────────────────────────────

class TestPeopleEdit:

    def test_begin_edit_populates_scratch_and_disables_add(self, vm):
        from pocketstore.gui.viewmodels import EditState
        _add(vm, "Ana", "30")
        vm.begin_edit(vm.people[0])
        assert vm.edit_state is EditState.EDITING
        assert (vm.name_input, vm.age_input) == ("Ana", "30")
        assert not vm.can_add

    def test_add_while_editing_is_rejected(self, vm):
        from pocketstore.exceptions import EditStateError
        _add(vm)
        vm.begin_edit(vm.people[0])
        with pytest.raises(EditStateError):
            vm.add_person()

    def test_cancel_edit_discards_scratch(self, vm, registry):
        from pocketstore.gui.viewmodels import EditState
        _add(vm, "Ana", "30")
        vm.begin_edit(vm.people[0])
        vm.name_input = "Changed"
        vm.cancel_edit()
        assert vm.edit_state is EditState.IDLE
        assert vm.name_input == ""
        assert registry.list(1)[0].name == "Ana"

    def test_save_edit_updates_row_and_keeps_page(self, vm):
        from pocketstore.gui.viewmodels import EditState
        _add_many(vm, 7)
        vm.next_page()
        target = vm.people[0]
        vm.begin_edit(target)
        vm.name_input = "Renamed"
        notice = vm.save_edit()
        assert notice.ok
        assert vm.pagination.current_page == 2
        assert vm.edit_state is EditState.IDLE
        assert vm.editing is None
        assert any(p.id == target.id and p.name == "Renamed" for p in vm.people)

    def test_save_edit_validation_error_stays_editing(self, vm):
        from pocketstore.gui.viewmodels import EditState, Outcome
        _add(vm)
        vm.begin_edit(vm.people[0])
        vm.age_input = "abc"
        notice = vm.save_edit()
        assert notice.outcome is Outcome.VALIDATION_ERROR
        assert vm.edit_state is EditState.EDITING

    def test_save_edit_of_deleted_row_reports_not_found(self, vm, registry):
        from pocketstore.gui.viewmodels import EditState, Outcome
        _add(vm)
        person = vm.people[0]
        vm.begin_edit(person)
        registry.delete(person.id)  # removed behind the view's back
        notice = vm.save_edit()
        assert notice.outcome is Outcome.NOT_FOUND
        assert vm.edit_state is EditState.EDITING

    def test_edit_transitions_are_guarded(self, vm):
        from pocketstore.exceptions import EditStateError
        with pytest.raises(EditStateError):
            vm.save_edit()
        with pytest.raises(EditStateError):
            vm.cancel_edit()
        _add(vm)
        vm.begin_edit(vm.people[0])
        with pytest.raises(EditStateError):
            vm.begin_edit(vm.people[0])


# ─────────────────────────────────────────────────────────────────────────────
# 3. PeopleViewModel — two-phase deletes
# ─────────────────────────────────────────────────────────────────────────────

class TestPeopleDelete:

    def test_dismiss_performs_no_storage_access(self, vm, registry):
        from pocketstore.gui.viewmodels import Outcome
        _add(vm)
        token = vm.request_delete(vm.people[0].id)
        with patch.object(registry, "delete") as delete:
            notice = vm.dismiss(token)
        delete.assert_not_called()
        assert notice.outcome is Outcome.CANCELLED
        assert registry.count() == 1

    def test_confirm_delete_removes_row(self, vm, registry):
        _add(vm)
        token = vm.request_delete(vm.people[0].id)
        assert "this record" in token.prompt
        assert vm.confirm(token).ok
        assert vm.people == []
        assert registry.count() == 0

    def test_token_is_single_use(self, vm):
        from pocketstore.exceptions import ConfirmationError
        _add(vm)
        token = vm.request_delete(vm.people[0].id)
        vm.confirm(token)
        with pytest.raises(ConfirmationError):
            vm.confirm(token)

    def test_dismissed_token_cannot_be_confirmed(self, vm):
        from pocketstore.exceptions import ConfirmationError
        _add(vm)
        token = vm.request_delete(vm.people[0].id)
        vm.dismiss(token)
        with pytest.raises(ConfirmationError):
            vm.confirm(token)

    def test_confirm_delete_of_missing_row_reports_not_found(self, vm, registry):
        from pocketstore.gui.viewmodels import Outcome
        _add(vm)
        person_id = vm.people[0].id
        token = vm.request_delete(person_id)
        registry.delete(person_id)
        assert vm.confirm(token).outcome is Outcome.NOT_FOUND

    def test_delete_last_row_of_last_page_leaves_stale_page(self, vm):
        _add_many(vm, 6)
        assert vm.next_page()
        assert len(vm.people) == 1

        notice = vm.confirm(vm.request_delete(vm.people[0].id))
        assert notice.ok
        assert vm.pagination.total_pages == 1
        assert vm.pagination.current_page == 2
        assert vm.people == []
        assert vm.page_label == "Page 2 of 1"
        # Going back is still possible from the stale page
        assert vm.previous_page()
        assert len(vm.people) == 5

    def test_clear_resets_to_page_one(self, vm, registry):
        _add_many(vm, 8)
        vm.next_page()
        token = vm.request_clear()
        assert "all records" in token.prompt
        assert vm.confirm(token).ok
        assert vm.pagination.current_page == 1
        assert vm.pagination.total_pages == 1
        assert vm.people == []
        assert registry.count() == 0


# ─────────────────────────────────────────────────────────────────────────────
# 4. PeopleViewModel — paging & gates
# ─────────────────────────────────────────────────────────────────────────────

class TestPeoplePaging:

    def test_change_page_out_of_range_is_ignored(self, vm):
        _add_many(vm, 6)
        assert not vm.change_page(0)
        assert not vm.change_page(3)
        assert vm.pagination.current_page == 1

    def test_next_and_previous(self, vm):
        _add_many(vm, 11)
        assert vm.pagination.total_pages == 3
        assert vm.next_page()
        assert vm.next_page()
        assert not vm.next_page()
        assert vm.pagination.current_page == 3
        assert len(vm.people) == 1
        assert vm.previous_page()
        assert vm.pagination.current_page == 2

    def test_can_go_flags(self, vm):
        _add_many(vm, 6)
        assert not vm.can_go_previous
        assert vm.can_go_next
        vm.next_page()
        assert vm.can_go_previous
        assert not vm.can_go_next

    def test_operations_while_loading_raise_busy(self, vm):
        from pocketstore.exceptions import BusyError
        vm.is_loading = True
        assert not vm.can_add
        with pytest.raises(BusyError):
            vm.refresh()
        with pytest.raises(BusyError):
            _add(vm)

    def test_refresh_storage_error_is_reported(self, vm, registry):
        from pocketstore.exceptions import StorageError
        from pocketstore.gui.viewmodels import Outcome
        with patch.object(registry, "refresh", side_effect=StorageError("locked")):
            notice = vm.refresh()
        assert notice.outcome is Outcome.STORAGE_ERROR

    def test_failed_page_load_keeps_current_page(self, vm, registry):
        from pocketstore.exceptions import StorageError
        from pocketstore.gui.viewmodels import Outcome
        _add_many(vm, 6)
        shown = list(vm.people)
        with patch.object(registry, "refresh", side_effect=StorageError("locked")):
            assert vm.next_page() is False
        assert vm.pagination.current_page == 1
        assert vm.people == shown
        assert vm.last_notice.outcome is Outcome.STORAGE_ERROR
        assert not vm.is_loading
        # Paging works again once storage recovers
        assert vm.next_page()
        assert vm.pagination.current_page == 2

    def test_list_title_counts_rows_on_page(self, vm):
        _add_many(vm, 7)
        assert vm.list_title == "People (5)"


# ─────────────────────────────────────────────────────────────────────────────
# 5. SecureValueViewModel
# ─────────────────────────────────────────────────────────────────────────────

@pytest.fixture
def secure_vm(tmp_path):
    from pocketstore.gui.viewmodels import SecureValueViewModel
    from pocketstore.secure.backend import EncryptedFileBackend
    from pocketstore.secure.store import SecureValueStore
    backend = EncryptedFileBackend(str(tmp_path / "s.bin"), str(tmp_path / "s.key"))
    return SecureValueViewModel(SecureValueStore(backend))


class TestSecureValueViewModel:

    def test_save_blank_input_is_validation_error(self, secure_vm):
        from pocketstore.gui.viewmodels import Outcome
        secure_vm.input_text = "   "
        assert secure_vm.save().outcome is Outcome.VALIDATION_ERROR
        assert secure_vm.last_saved == ""

    def test_save_then_load(self, secure_vm):
        secure_vm.input_text = "token-123"
        assert secure_vm.save().ok
        assert secure_vm.last_saved == "token-123"
        assert secure_vm.load() is None
        assert secure_vm.stored_display == "token-123"

    def test_load_when_absent_reports_no_data(self, secure_vm):
        from pocketstore.gui.viewmodels import Outcome
        assert secure_vm.load().outcome is Outcome.NO_DATA
        assert secure_vm.stored_display == ""

    def test_clear_when_absent_reports_no_data(self, secure_vm):
        from pocketstore.gui.viewmodels import Outcome
        assert secure_vm.clear().outcome is Outcome.NO_DATA

    def test_clear_removes_displayed_value(self, secure_vm):
        secure_vm.input_text = "token"
        secure_vm.save()
        secure_vm.load()
        assert secure_vm.clear().ok
        assert secure_vm.stored_display == ""

    def test_display_text_is_masked_until_toggled(self, secure_vm):
        secure_vm.input_text = "abc"
        secure_vm.save()
        secure_vm.load()
        assert secure_vm.display_text == "•••"
        secure_vm.toggle_visibility()
        assert secure_vm.display_text == "abc"

    def test_last_saved_is_masked_until_toggled(self, secure_vm):
        secure_vm.input_text = "abc"
        secure_vm.save()
        assert secure_vm.saved_display_text == "•••"
        secure_vm.toggle_visibility()
        assert secure_vm.saved_display_text == "abc"

    def test_backend_failure_is_storage_error(self, secure_vm):
        from pocketstore.exceptions import SecureStoreError
        from pocketstore.gui.viewmodels import Outcome
        secure_vm.input_text = "token"
        with patch.object(secure_vm._store, "save", side_effect=SecureStoreError("disk")):
            assert secure_vm.save().outcome is Outcome.STORAGE_ERROR
        assert not secure_vm.is_loading
