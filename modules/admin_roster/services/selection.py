"""
Selection Manager.

Tracks the two independent selection concepts of the admin list:

- Detail selection: zero or one admin shown in the expanded view.
- Bulk selection: admin ids on the visible page targeted by a group
  action (status change or delete).

Bulk selection is scoped to the current page. The owner of the view
state calls ``reset`` whenever the result set is re-derived from new
inputs and ``reconcile`` after a mutation changes the visible page.
"""

import logging
from enum import Enum
from typing import Callable, Iterable, Optional

from modules.admin_roster.core.exceptions import SelectionScopeError
from modules.admin_roster.models import Admin, AdminPatch, AdminStatus
from modules.admin_roster.services.store import RecordStore

logger = logging.getLogger(__name__)

ConfirmPrompt = Callable[[int], bool]
"""Blocking yes/no prompt; receives the number of admins about to be deleted."""


class SelectAllState(str, Enum):
    """State of the "select all on page" checkbox."""

    NONE = "none"
    SOME = "some"
    ALL = "all"

    def __str__(self) -> str:
        return self.value


class SelectionManager:
    """Detail and bulk selection over a record store."""

    def __init__(self, store: RecordStore) -> None:
        self._store = store
        self._detail_id: Optional[int] = None
        self._page_ids: tuple[int, ...] = ()
        # Ordered by selection time
        self._selected: list[int] = []

    # =========================================================================
    # Detail selection
    # =========================================================================

    @property
    def detail(self) -> Optional[Admin]:
        """
        Admin in the detail view.

        Resolved from the store on every access so updates are always
        reflected; a vanished admin clears the selection.
        """
        if self._detail_id is None:
            return None
        admin = self._store.get(self._detail_id)
        if admin is None:
            self._detail_id = None
        return admin

    @property
    def detail_id(self) -> Optional[int]:
        return self._detail_id

    def select_detail(self, admin_id: Optional[int]) -> Optional[Admin]:
        """
        Show ``admin_id`` in the detail view, or close it with None.

        Raises:
            AdminNotFoundError: If the id is not in the store.
        """
        if admin_id is None:
            self._detail_id = None
            return None
        admin = self._store.require(admin_id)
        self._detail_id = admin_id
        return admin

    def forget(self, admin_id: int) -> None:
        """Drop every reference to a deleted admin."""
        if self._detail_id == admin_id:
            logger.info(f"Detail selection cleared, admin {admin_id} deleted")
            self._detail_id = None
        if admin_id in self._selected:
            self._selected.remove(admin_id)

    # =========================================================================
    # Bulk selection
    # =========================================================================

    @property
    def page_ids(self) -> tuple[int, ...]:
        return self._page_ids

    @property
    def selected(self) -> tuple[int, ...]:
        return tuple(self._selected)

    def __len__(self) -> int:
        return len(self._selected)

    def is_selected(self, admin_id: int) -> bool:
        return admin_id in self._selected

    def reset(self, page_ids: Iterable[int]) -> None:
        """Move to a new result page, dropping the whole selection."""
        self._page_ids = tuple(page_ids)
        self._selected.clear()

    def reconcile(self, page_ids: Iterable[int]) -> None:
        """Track a recomputed page, keeping only ids still visible on it."""
        self._page_ids = tuple(page_ids)
        visible = set(self._page_ids)
        self._selected = [admin_id for admin_id in self._selected if admin_id in visible]

    def toggle(self, admin_id: int) -> bool:
        """
        Flip the selection of one admin on the current page.

        Returns:
            bool: True if the admin is selected afterwards.

        Raises:
            SelectionScopeError: If the id is not on the current page.
        """
        if admin_id not in self._page_ids:
            logger.warning(f"Ignored bulk toggle for admin {admin_id}: not on page")
            raise SelectionScopeError(admin_id)

        if admin_id in self._selected:
            self._selected.remove(admin_id)
            return False
        self._selected.append(admin_id)
        return True

    def select_all_on_page(self) -> None:
        self._selected = list(self._page_ids)

    def clear(self) -> None:
        self._selected.clear()

    def toggle_all(self) -> SelectAllState:
        """Header checkbox click: clear when everything is selected, else select all."""
        if self.select_all_state is SelectAllState.ALL:
            self.clear()
        else:
            self.select_all_on_page()
        return self.select_all_state

    @property
    def select_all_state(self) -> SelectAllState:
        if not self._page_ids:
            return SelectAllState.NONE
        count = len(set(self._selected) & set(self._page_ids))
        if count == 0:
            return SelectAllState.NONE
        if count == len(self._page_ids):
            return SelectAllState.ALL
        return SelectAllState.SOME

    # =========================================================================
    # Bulk actions
    # =========================================================================

    def bulk_set_status(self, status: AdminStatus | str) -> int:
        """
        Set ``status`` on every selected admin, then clear the selection.

        Returns:
            int: Number of admins updated.
        """
        patch = AdminPatch(status=AdminStatus(status))
        targets = list(self._selected)
        for admin_id in targets:
            self._store.update(admin_id, patch)

        self.clear()
        logger.info(f"Bulk status change to '{patch.status}' on {len(targets)} admin(s)")
        return len(targets)

    def bulk_delete(self, confirm: ConfirmPrompt) -> int:
        """
        Delete every selected admin once ``confirm`` agrees.

        A declined prompt aborts with no mutation and keeps the selection.

        Returns:
            int: Number of admins deleted.
        """
        targets = list(self._selected)
        if not targets:
            return 0

        if not confirm(len(targets)):
            logger.info(f"Bulk delete of {len(targets)} admin(s) cancelled")
            return 0

        for admin_id in targets:
            self._store.delete(admin_id)
            self.forget(admin_id)

        self.clear()
        logger.info(f"Bulk deleted {len(targets)} admin(s)")
        return len(targets)
