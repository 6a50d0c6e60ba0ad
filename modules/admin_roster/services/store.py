"""
Admin Record Store.

Authoritative, ordered, in-memory collection of admin records.
The store is volatile and lives for the lifetime of the process.

Concurrency:
    The store assumes a single logical writer. Id generation
    (max + 1) and list mutation are not atomic; a multi-writer
    deployment must serialize mutations and replace the id scheme
    with an atomic counter.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from modules.admin_roster.core.exceptions import (
    AdminNotFoundError,
    DuplicateAdminIdError,
)
from modules.admin_roster.models import (
    Admin,
    AdminDraft,
    AdminPatch,
    format_timestamp,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

DraftInput = Union[AdminDraft, Mapping[str, Any]]
PatchInput = Union[AdminPatch, Mapping[str, Any]]


def utc_now() -> datetime:
    """Default clock."""
    return datetime.now(timezone.utc)


class RecordStore:
    """
    Single source of truth for admin records.

    Records keep insertion order. Every mutation bumps ``version``,
    which derived views use to invalidate their caches.
    """

    def __init__(
        self,
        admins: Iterable[Admin] = (),
        clock: Clock = utc_now,
    ) -> None:
        self._admins: list[Admin] = []
        self._clock = clock
        self._version = 0
        # Highest id ever issued; keeps ids from being reused after
        # the current maximum is deleted.
        self._high_water = 0

        for admin in admins:
            self.add(admin)

    @property
    def version(self) -> int:
        return self._version

    def __len__(self) -> int:
        return len(self._admins)

    def __contains__(self, admin_id: object) -> bool:
        return self._index_of(admin_id) is not None

    def list(self) -> tuple[Admin, ...]:
        """Immutable snapshot of every admin in insertion order."""
        return tuple(self._admins)

    def ids(self) -> tuple[int, ...]:
        return tuple(admin.id for admin in self._admins)

    def get(self, admin_id: int) -> Optional[Admin]:
        index = self._index_of(admin_id)
        return None if index is None else self._admins[index]

    def require(self, admin_id: int) -> Admin:
        """Return the admin or raise AdminNotFoundError."""
        admin = self.get(admin_id)
        if admin is None:
            raise AdminNotFoundError(admin_id)
        return admin

    def next_id(self) -> int:
        """Id the next create() will assign."""
        current_max = max((admin.id for admin in self._admins), default=0)
        return max(current_max, self._high_water) + 1

    # =========================================================================
    # Mutations
    # =========================================================================

    def add(self, admin: Admin) -> Admin:
        """
        Insert a fully formed admin record (e.g. from seed data).

        Raises:
            DuplicateAdminIdError: If the id is already present.
        """
        if admin.id in self:
            raise DuplicateAdminIdError(admin.id)

        self._admins.append(admin)
        self._high_water = max(self._high_water, admin.id)
        self._version += 1
        return admin

    def create(self, draft: DraftInput) -> Admin:
        """
        Create an admin from a draft.

        Assigns the next id, stamps ``created_at`` from the clock and
        starts with an empty activity history.
        """
        if not isinstance(draft, AdminDraft):
            draft = AdminDraft.model_validate(draft)

        admin = Admin(
            **draft.model_dump(),
            id=self.next_id(),
            created_at=format_timestamp(self._clock()),
            recent_activities=(),
        )
        self.add(admin)
        logger.info(f"Created admin {admin.id}")
        return admin

    def update(self, admin_id: int, patch: PatchInput) -> Admin:
        """
        Merge a partial patch onto an existing admin.

        Raises:
            AdminNotFoundError: If no admin has this id.
        """
        if not isinstance(patch, AdminPatch):
            patch = AdminPatch.model_validate(patch)

        index = self._index_of(admin_id)
        if index is None:
            logger.warning(f"Update skipped, admin {admin_id} not found")
            raise AdminNotFoundError(admin_id)

        current = self._admins[index]
        merged = Admin.model_validate({**current.model_dump(), **patch.changes()})
        self._admins[index] = merged
        self._version += 1
        logger.info(f"Updated admin {admin_id}: {sorted(patch.changes())}")
        return merged

    def delete(self, admin_id: int) -> Admin:
        """
        Remove an admin permanently.

        Raises:
            AdminNotFoundError: If no admin has this id.
        """
        index = self._index_of(admin_id)
        if index is None:
            logger.warning(f"Delete skipped, admin {admin_id} not found")
            raise AdminNotFoundError(admin_id)

        removed = self._admins.pop(index)
        self._version += 1
        logger.info(f"Deleted admin {admin_id}")
        return removed

    def _index_of(self, admin_id: object) -> Optional[int]:
        for index, admin in enumerate(self._admins):
            if admin.id == admin_id:
                return index
        return None
