"""
Roster Service.

Facade over the record store and the derived list view. Holds the view
inputs (search term, status filter, sort state, page), derives the
current page on demand and keeps the selections consistent with it.

Derivation:
    store snapshot -> apply_query (memoized on store version + inputs)
    -> paginate (page clamped, stored page corrected)
    -> SelectionManager (bulk selection reconciled to the page)

Changing the search term, status filter, sort field or sort order
returns to page 1 and clears the bulk selection; changing the page
clears it as well.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from pydantic import BaseModel

from modules.admin_roster.core.exceptions import AdminValidationError
from modules.admin_roster.models import (
    Admin,
    AdminDraft,
    AdminPatch,
    AdminStatus,
    Society,
)
from modules.admin_roster.services.directory import SocietyDirectory
from modules.admin_roster.services.pagination import (
    PAGE_SIZE,
    Page,
    RosterStats,
    clamp_page,
    compute_stats,
    count_pages,
    paginate,
)
from modules.admin_roster.services.query import (
    QueryCache,
    QueryKey,
    SortField,
    SortOrder,
    StatusFilter,
)
from modules.admin_roster.services.seed import SeedData
from modules.admin_roster.services.selection import (
    ConfirmPrompt,
    SelectAllState,
    SelectionManager,
)
from modules.admin_roster.services.store import Clock, PatchInput, RecordStore, utc_now
from modules.admin_roster.services.validation import FormValidator, ValidationResult

logger = logging.getLogger(__name__)

# Keys a form submission may carry into the store
FORM_KEYS = frozenset({
    "name",
    "email",
    "phone",
    "status",
    "assigned_societies",
    "assignedSocieties",
})

# Fields checked by the form rules on every write
CONTACT_FIELDS = frozenset({"name", "email", "phone"})


@dataclass(frozen=True)
class ViewState:
    """Inputs of the derived list view."""

    search_term: str = ""
    status_filter: StatusFilter = StatusFilter.ALL
    sort_field: Optional[SortField] = None
    sort_order: SortOrder = SortOrder.ASC
    page: int = 1


@dataclass(frozen=True)
class RosterView:
    """Everything the list screen renders."""

    state: ViewState
    page: Page
    selected: tuple[int, ...]
    select_all_state: SelectAllState
    stats: RosterStats


@dataclass(frozen=True)
class FormSubmission:
    """Result of submitting the admin form."""

    validation: ValidationResult
    admin: Optional[Admin] = None

    @property
    def accepted(self) -> bool:
        return self.validation.valid and self.admin is not None


class RosterService:
    """
    Single handle through which callers read and mutate the roster.

    Construct once per process and pass it to whichever component
    needs it.
    """

    def __init__(
        self,
        store: RecordStore,
        directory: SocietyDirectory | None = None,
        page_size: int = PAGE_SIZE,
    ) -> None:
        if page_size <= 0:
            raise ValueError("page_size must be positive")

        self._store = store
        self._directory = directory or SocietyDirectory()
        self._page_size = page_size
        self._selection = SelectionManager(store)
        self._cache = QueryCache()
        self._state = ViewState()

    @classmethod
    def from_seed(
        cls,
        seed: SeedData,
        page_size: int = PAGE_SIZE,
        clock: Clock = utc_now,
        include_admins: bool = True,
    ) -> "RosterService":
        """Build a service over the directory and admins of a seed file."""
        admins = seed.admins if include_admins else ()
        store = RecordStore(admins, clock=clock)
        return cls(store, seed.directory, page_size=page_size)

    # =========================================================================
    # Read accessors
    # =========================================================================

    @property
    def store(self) -> RecordStore:
        return self._store

    @property
    def directory(self) -> SocietyDirectory:
        return self._directory

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def admins(self) -> tuple[Admin, ...]:
        """Full, unfiltered roster in insertion order."""
        return self._store.list()

    @property
    def societies(self) -> tuple[Society, ...]:
        return self._directory.all()

    @property
    def results(self) -> tuple[Admin, ...]:
        """Every admin matching the current inputs, in display order."""
        key = QueryKey(
            store_version=self._store.version,
            search_term=self._state.search_term,
            status_filter=self._state.status_filter,
            sort_field=self._state.sort_field,
            sort_order=self._state.sort_order,
        )
        return self._cache.get_or_compute(key, self._store.list)

    @property
    def page(self) -> Page:
        """Current page of results."""
        return self.refresh()

    def refresh(self) -> Page:
        """
        Re-derive the current page from the store and the view inputs.

        A stored page beyond the last page (e.g. after a filter narrowed
        the results or a delete removed rows) is corrected here, and the
        bulk selection is narrowed to the ids still on the page.
        """
        page = paginate(self.results, self._state.page, self._page_size)
        if page.page != self._state.page:
            logger.debug(f"Page {self._state.page} out of range, corrected to {page.page}")
            self._state = replace(self._state, page=page.page)
            self._selection.clear()
        self._selection.reconcile(page.ids)
        return page

    @property
    def stats(self) -> RosterStats:
        return compute_stats(self._store.list())

    @property
    def view(self) -> RosterView:
        page = self.refresh()
        return RosterView(
            state=self._state,
            page=page,
            selected=self._selection.selected,
            select_all_state=self._selection.select_all_state,
            stats=self.stats,
        )

    @property
    def detail(self) -> Optional[Admin]:
        return self._selection.detail

    @property
    def bulk_selection(self) -> tuple[int, ...]:
        self.refresh()
        return self._selection.selected

    @property
    def select_all_state(self) -> SelectAllState:
        self.refresh()
        return self._selection.select_all_state

    def get_admin(self, admin_id: int) -> Admin:
        return self._store.require(admin_id)

    def search_societies(self, term: str) -> tuple[Society, ...]:
        return self._directory.search(term)

    # =========================================================================
    # View inputs
    # =========================================================================

    def _change_inputs(self, **changes: Any) -> ViewState:
        candidate = replace(self._state, **changes)
        if candidate == self._state:
            return self._state

        self._state = replace(candidate, page=1)
        self._selection.clear()
        self.refresh()
        return self._state

    def set_search_term(self, term: str) -> ViewState:
        return self._change_inputs(search_term=term or "")

    def set_status_filter(self, status_filter: StatusFilter | str) -> ViewState:
        return self._change_inputs(status_filter=StatusFilter(status_filter))

    def set_sort_field(self, field: Optional[SortField | str]) -> ViewState:
        """
        Sort state machine.

        Same field flips the order; a new field sorts ascending;
        None turns sorting off.
        """
        if field is None:
            return self._change_inputs(sort_field=None)

        field = SortField(field)
        if field == self._state.sort_field:
            return self._change_inputs(sort_order=self._state.sort_order.flipped())
        return self._change_inputs(sort_field=field, sort_order=SortOrder.ASC)

    def set_sort_order(self, order: SortOrder | str) -> ViewState:
        return self._change_inputs(sort_order=SortOrder(order))

    def set_page(self, page: int) -> Page:
        """Move to ``page`` (clamped). Clears the bulk selection if the page changes."""
        total_pages = count_pages(len(self.results), self._page_size)
        target = clamp_page(page, total_pages)
        if target != self._state.page:
            self._state = replace(self._state, page=target)
            self._selection.clear()
        return self.page

    # =========================================================================
    # Record commands
    # =========================================================================

    def create_admin(self, draft: AdminDraft | Mapping[str, Any]) -> Admin:
        admin = self._store.create(draft)
        self.refresh()
        return admin

    def update_admin(self, admin_id: int, patch: PatchInput) -> Admin:
        """
        Apply a partial update.

        A patch touching name, email or phone must leave the record
        passing the form rules.

        Raises:
            AdminNotFoundError: If no admin has this id.
            AdminValidationError: If the merged contact fields are invalid.
        """
        if not isinstance(patch, AdminPatch):
            patch = AdminPatch.model_validate(patch)

        changes = patch.changes()
        if CONTACT_FIELDS.intersection(changes):
            merged = {**self._store.require(admin_id).model_dump(), **changes}
            validation = FormValidator.validate(merged)
            if not validation.valid:
                logger.info(f"Patch for admin {admin_id} rejected: {sorted(validation.field_errors)}")
                raise AdminValidationError(validation.field_errors)

        admin = self._store.update(admin_id, patch)
        self.refresh()
        return admin

    def delete_admin(self, admin_id: int) -> Admin:
        removed = self._store.delete(admin_id)
        self._selection.forget(admin_id)
        self.refresh()
        return removed

    def toggle_status(self, admin_id: int) -> Admin:
        """Active admins become inactive; inactive and pending become active."""
        admin = self._store.require(admin_id)
        new_status = (
            AdminStatus.INACTIVE if admin.status is AdminStatus.ACTIVE else AdminStatus.ACTIVE
        )
        return self.update_admin(admin_id, AdminPatch(status=new_status))

    def submit_form(
        self,
        form: Mapping[str, Any] | BaseModel,
        admin_id: Optional[int] = None,
    ) -> FormSubmission:
        """
        Validate a form and, only if it passes, create or update.

        Editing keeps the admin's counters and last activity; creating
        starts them at zero / never.

        Raises:
            AdminNotFoundError: If ``admin_id`` is given but unknown.
        """
        validation = FormValidator.validate(form)
        if not validation.valid:
            logger.info(f"Form rejected: {sorted(validation.field_errors)}")
            return FormSubmission(validation=validation)

        data = form.model_dump() if isinstance(form, BaseModel) else dict(form)
        fields = {key: value for key, value in data.items() if key in FORM_KEYS}

        if admin_id is None:
            admin = self.create_admin(AdminDraft.model_validate(fields))
        else:
            admin = self.update_admin(admin_id, AdminPatch.model_validate(fields))
        return FormSubmission(validation=validation, admin=admin)

    # =========================================================================
    # Selection commands
    # =========================================================================

    def select_detail(self, admin_id: Optional[int]) -> Optional[Admin]:
        return self._selection.select_detail(admin_id)

    def toggle_bulk_select(self, admin_id: int) -> bool:
        self.refresh()
        return self._selection.toggle(admin_id)

    def select_all_on_page(self) -> tuple[int, ...]:
        self.refresh()
        self._selection.select_all_on_page()
        return self._selection.selected

    def toggle_select_all(self) -> SelectAllState:
        self.refresh()
        return self._selection.toggle_all()

    def clear_bulk_selection(self) -> None:
        self._selection.clear()

    def bulk_set_status(self, status: AdminStatus | str) -> int:
        self.refresh()
        count = self._selection.bulk_set_status(status)
        self.refresh()
        return count

    def bulk_delete(self, confirm: ConfirmPrompt) -> int:
        self.refresh()
        count = self._selection.bulk_delete(confirm)
        self.refresh()
        return count
