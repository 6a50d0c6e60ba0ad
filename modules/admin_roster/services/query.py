"""
Admin Query Engine.

Pure pipeline turning the store snapshot plus the view inputs into an
ordered sequence of matching admins:

    1. filter by search term (name or email, case-insensitive)
    2. filter by status
    3. sort (optional, stable)

Each stage is a standalone function so it can be exercised on its own.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Sequence

from modules.admin_roster.models import Admin

logger = logging.getLogger(__name__)


class StatusFilter(str, Enum):
    """Status filter values accepted by the list view."""

    ALL = "all"
    ACTIVE = "active"
    INACTIVE = "inactive"
    PENDING = "pending"

    def __str__(self) -> str:
        return self.value


class SortField(str, Enum):
    """Columns the list view can be sorted by."""

    NAME = "name"
    LAST_ACTIVITY = "lastActivity"
    SOCIETY_COUNT = "societyCount"

    def __str__(self) -> str:
        return self.value


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def __str__(self) -> str:
        return self.value

    def flipped(self) -> "SortOrder":
        return SortOrder.DESC if self is SortOrder.ASC else SortOrder.ASC


def filter_by_search(admins: Sequence[Admin], term: str) -> list[Admin]:
    """Keep admins whose name or email contains ``term``, ignoring case."""
    if not term:
        return list(admins)
    needle = term.lower()
    return [
        admin
        for admin in admins
        if needle in admin.name.lower() or needle in admin.email.lower()
    ]


def filter_by_status(
    admins: Sequence[Admin], status_filter: StatusFilter | str
) -> list[Admin]:
    status_filter = StatusFilter(status_filter)
    if status_filter is StatusFilter.ALL:
        return list(admins)
    return [admin for admin in admins if admin.status.value == status_filter.value]


def _last_activity_key(admin: Admin) -> float:
    moment = admin.last_activity_at
    # "Never" sorts below every real timestamp
    return float("-inf") if moment is None else moment.timestamp()


SORT_KEYS: dict[SortField, Callable[[Admin], Any]] = {
    SortField.NAME: lambda admin: admin.name.lower(),
    SortField.LAST_ACTIVITY: _last_activity_key,
    SortField.SOCIETY_COUNT: lambda admin: admin.society_count,
}


def sort_admins(
    admins: Sequence[Admin],
    field: Optional[SortField | str],
    order: SortOrder | str = SortOrder.ASC,
) -> list[Admin]:
    """
    Sort admins by ``field`` in ``order``.

    No field keeps the incoming order. Python's sort is stable in both
    directions, so ties keep their relative order from the previous stage.
    """
    if field is None:
        return list(admins)
    key = SORT_KEYS[SortField(field)]
    return sorted(admins, key=key, reverse=SortOrder(order) is SortOrder.DESC)


def apply_query(
    admins: Sequence[Admin],
    search_term: str = "",
    status_filter: StatusFilter | str = StatusFilter.ALL,
    sort_field: Optional[SortField | str] = None,
    sort_order: SortOrder | str = SortOrder.ASC,
) -> list[Admin]:
    """Run the full filter -> filter -> sort pipeline."""
    matches = filter_by_search(admins, search_term)
    matches = filter_by_status(matches, status_filter)
    return sort_admins(matches, sort_field, sort_order)


@dataclass(frozen=True)
class QueryKey:
    """Every input the query result depends on."""

    store_version: int
    search_term: str
    status_filter: StatusFilter
    sort_field: Optional[SortField]
    sort_order: SortOrder


class QueryCache:
    """
    Single-entry memo for query results.

    A result is reused only while every component of its key is
    unchanged; any store mutation or view input change recomputes.
    """

    def __init__(self) -> None:
        self._key: Optional[QueryKey] = None
        self._result: tuple[Admin, ...] = ()
        self.hits = 0
        self.misses = 0

    def get_or_compute(
        self, key: QueryKey, admins: Callable[[], Sequence[Admin]]
    ) -> tuple[Admin, ...]:
        if key == self._key:
            self.hits += 1
            return self._result

        self.misses += 1
        self._result = tuple(
            apply_query(
                admins(),
                key.search_term,
                key.status_filter,
                key.sort_field,
                key.sort_order,
            )
        )
        self._key = key
        logger.debug(f"Query recomputed: {key} -> {len(self._result)} match(es)")
        return self._result

    def invalidate(self) -> None:
        self._key = None
        self._result = ()
