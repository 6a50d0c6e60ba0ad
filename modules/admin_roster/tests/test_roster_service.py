"""
Unit Tests for RosterService.

Covers the view state machine, page correction, selection scoping and
form submission over the bundled seed roster.
"""

import pytest

from modules.admin_roster.core.exceptions import (
    AdminNotFoundError,
    AdminValidationError,
    SelectionScopeError,
)
from modules.admin_roster.models import AdminPatch, AdminStatus
from modules.admin_roster.services import (
    RecordStore,
    RosterService,
    SelectAllState,
    SortField,
    SortOrder,
    StatusFilter,
)


def _ids(admins):
    return [admin.id for admin in admins]


class TestConstruction:
    """Tests for building a service."""

    def test_initial_state(self, service):
        state = service.state
        assert state.search_term == ""
        assert state.status_filter is StatusFilter.ALL
        assert state.sort_field is None
        assert state.sort_order is SortOrder.ASC
        assert state.page == 1

    def test_rejects_non_positive_page_size(self):
        with pytest.raises(ValueError):
            RosterService(RecordStore(), page_size=0)

    def test_from_seed_without_admins(self, seed):
        service = RosterService.from_seed(seed, include_admins=False)
        assert service.admins == ()
        assert len(service.societies) == 15

    def test_custom_page_size(self, seed):
        service = RosterService.from_seed(seed, page_size=5)
        assert service.page.total_pages == 4


class TestViewInputs:
    """Tests for search, filter, sort and page changes."""

    def test_search(self, service):
        service.set_search_term("chen")
        assert _ids(service.page.items) == [2]

    def test_status_filter(self, service):
        service.set_status_filter("pending")
        assert _ids(service.results) == [4, 10, 15, 20]

    def test_sort_state_machine(self, service):
        service.set_sort_field(SortField.NAME)
        assert (service.state.sort_field, service.state.sort_order) == (SortField.NAME, SortOrder.ASC)

        service.set_sort_field(SortField.NAME)
        assert service.state.sort_order is SortOrder.DESC

        service.set_sort_field(SortField.SOCIETY_COUNT)
        assert (service.state.sort_field, service.state.sort_order) == (
            SortField.SOCIETY_COUNT, SortOrder.ASC,
        )

        service.set_sort_field(None)
        assert service.state.sort_field is None

    def test_society_count_desc_first_row(self, service):
        service.set_sort_field("societyCount")
        service.set_sort_order("desc")
        assert service.page.items[0].name == "Sarah Johnson"

    def test_input_change_returns_to_page_one(self, service):
        service.set_page(2)
        service.set_sort_field(SortField.NAME)
        assert service.state.page == 1

    def test_unchanged_input_keeps_page(self, service):
        service.set_page(2)
        service.set_search_term("")
        assert service.state.page == 2

    def test_set_page_clamps(self, service):
        assert service.set_page(99).page == 2
        assert service.state.page == 2
        assert service.set_page(0).page == 1

    def test_narrowing_filter_corrects_page(self, service):
        service.set_page(2)
        service.set_status_filter(StatusFilter.PENDING)
        assert service.page.page == 1
        assert service.page.total_pages == 1

    def test_no_matches(self, service):
        service.set_search_term("zzz")
        page = service.page
        assert page.items == ()
        assert page.total_pages == 0
        assert service.select_all_state is SelectAllState.NONE

    def test_results_memoized_until_mutation(self, service):
        first = service.results
        assert service.results is first

        service.toggle_status(1)
        assert service.results is not first


class TestRecordCommands:
    """Tests for create, update, delete and status toggle."""

    def test_create_then_listed(self, service, valid_form):
        admin = service.create_admin(valid_form)

        assert admin.id == 21
        assert service.stats.total == 21
        assert service.stats.pending == 5

    def test_delete_updates_stats(self, service):
        service.delete_admin(4)
        assert service.stats.total == 19
        assert service.stats.pending == 3

    def test_delete_missing(self, service):
        with pytest.raises(AdminNotFoundError):
            service.delete_admin(999)
        assert service.stats.total == 20

    def test_update(self, service):
        updated = service.update_admin(5, AdminPatch(status=AdminStatus.INACTIVE))
        assert updated.status is AdminStatus.INACTIVE
        assert service.stats.inactive == 5

    def test_update_rejects_invalid_contact_fields(self, service):
        before = service.get_admin(1)

        with pytest.raises(AdminValidationError) as exc_info:
            service.update_admin(1, {"email": "foo", "name": "  "})

        assert exc_info.value.field_errors == {
            "name": "Name is required",
            "email": "Invalid email format",
        }
        assert service.get_admin(1) == before

    def test_update_without_contact_fields_skips_form_rules(self, service):
        updated = service.update_admin(1, {"login_count": 500})
        assert updated.login_count == 500

    def test_update_missing_admin_with_contact_fields(self, service):
        with pytest.raises(AdminNotFoundError):
            service.update_admin(999, {"email": "foo"})

    @pytest.mark.parametrize(
        "admin_id, expected",
        [(1, AdminStatus.INACTIVE), (3, AdminStatus.ACTIVE), (4, AdminStatus.ACTIVE)],
    )
    def test_toggle_status(self, service, admin_id, expected):
        assert service.toggle_status(admin_id).status is expected

    def test_deleting_last_row_on_page_two_moves_back(self, service):
        service.set_page(2)
        for admin_id in range(13, 21):
            service.delete_admin(admin_id)
        assert service.page.page == 1
        assert service.state.page == 1

    def test_delete_clears_detail(self, service):
        service.select_detail(5)
        service.delete_admin(5)
        assert service.detail is None


class TestFormSubmission:
    """Tests for submit_form."""

    def test_invalid_form_is_not_persisted(self, service):
        submission = service.submit_form({"name": "X", "email": "foo", "phone": "1"})

        assert submission.accepted is False
        assert submission.validation.field_errors == {"email": "Invalid email format"}
        assert service.stats.total == 20

    def test_create_via_form(self, service):
        submission = service.submit_form({"name": "X", "email": "a@b.co", "phone": "1"})

        assert submission.accepted
        assert submission.admin.id == 21
        assert submission.admin.login_count == 0

    def test_edit_keeps_counters(self, service):
        before = service.get_admin(5)
        submission = service.submit_form(
            {"name": "Lisa T.", "email": before.email, "phone": before.phone, "status": "active"},
            admin_id=5,
        )

        after = submission.admin
        assert after.name == "Lisa T."
        assert after.login_count == before.login_count
        assert after.tickets_resolved == before.tickets_resolved
        assert after.last_activity == before.last_activity
        assert after.created_at == before.created_at

    def test_form_cannot_overwrite_counters(self, service):
        submission = service.submit_form(
            {"name": "X", "email": "a@b.co", "phone": "1", "loginCount": 500},
            admin_id=1,
        )
        assert submission.admin.login_count == 156

    def test_edit_unknown_admin(self, service):
        with pytest.raises(AdminNotFoundError):
            service.submit_form({"name": "X", "email": "a@b.co", "phone": "1"}, admin_id=99)


class TestSelections:
    """Tests for detail and bulk selection through the service."""

    def test_select_all_then_filter_clears(self, service):
        service.select_all_on_page()
        assert len(service.bulk_selection) == 12

        service.set_status_filter(StatusFilter.ACTIVE)
        assert service.bulk_selection == ()

    @pytest.mark.parametrize(
        "change",
        [
            lambda service: service.set_search_term("a"),
            lambda service: service.set_status_filter(StatusFilter.ACTIVE),
            lambda service: service.set_sort_field(SortField.NAME),
            lambda service: service.set_sort_order(SortOrder.DESC),
        ],
        ids=["search", "status", "sort_field", "sort_order"],
    )
    def test_input_change_clears_selection(self, service, change):
        service.select_all_on_page()
        assert len(service.bulk_selection) == 12

        change(service)

        assert service.bulk_selection == ()
        assert service.state.page == 1

    def test_page_change_clears_selection(self, service):
        service.toggle_bulk_select(1)
        service.set_page(2)
        assert service.bulk_selection == ()

    @pytest.mark.parametrize("requested", [1, 5])
    def test_set_page_resolving_to_current_page_keeps_selection(self, service, requested):
        service.set_status_filter(StatusFilter.PENDING)
        service.select_all_on_page()

        page = service.set_page(requested)

        assert page.page == 1
        assert service.bulk_selection == (4, 10, 15, 20)

    def test_toggle_off_page(self, service):
        with pytest.raises(SelectionScopeError):
            service.toggle_bulk_select(15)

    def test_toggle_select_all(self, service):
        assert service.toggle_select_all() is SelectAllState.ALL
        assert service.toggle_select_all() is SelectAllState.NONE

    def test_bulk_status_change_drops_rows_from_filtered_page(self, service):
        service.set_status_filter(StatusFilter.PENDING)
        service.select_all_on_page()

        assert service.bulk_set_status(AdminStatus.ACTIVE) == 4
        assert service.page.items == ()
        assert service.stats.pending == 0

    def test_bulk_delete_confirmed(self, service):
        service.toggle_bulk_select(4)
        service.toggle_bulk_select(5)

        assert service.bulk_delete(lambda count: True) == 2
        assert service.stats.total == 18
        assert service.bulk_selection == ()

    def test_bulk_delete_declined(self, service):
        service.toggle_bulk_select(4)

        assert service.bulk_delete(lambda count: False) == 0
        assert service.stats.total == 20
        assert service.bulk_selection == (4,)

    def test_selection_survives_unrelated_update(self, service):
        service.toggle_bulk_select(2)
        service.update_admin(3, {"phone": "+1 (555) 000-1111"})
        assert service.bulk_selection == (2,)

    def test_detail_independent_of_bulk(self, service):
        service.select_detail(15)
        service.select_all_on_page()
        service.clear_bulk_selection()
        assert service.detail.id == 15

    def test_view_snapshot(self, service):
        service.toggle_bulk_select(1)
        view = service.view

        assert view.page.page == 1
        assert view.selected == (1,)
        assert view.select_all_state is SelectAllState.SOME
        assert view.stats.total == 20
