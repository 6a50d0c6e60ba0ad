"""
Pagination Controller.

Slices query results into fixed-size pages and computes the dashboard
statistics shown above the admin list.
"""

import math
from dataclasses import dataclass
from typing import Sequence

from modules.admin_roster.models import Admin, AdminStatus


PAGE_SIZE = 12


@dataclass(frozen=True)
class Page:
    """One page of query results."""

    page: int
    total_pages: int
    total_items: int
    page_size: int
    items: tuple[Admin, ...]

    @property
    def ids(self) -> tuple[int, ...]:
        return tuple(admin.id for admin in self.items)

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def start_index(self) -> int:
        """1-based index of the first item on this page (0 when empty)."""
        if not self.items:
            return 0
        return (self.page - 1) * self.page_size + 1

    @property
    def end_index(self) -> int:
        if not self.items:
            return 0
        return self.start_index + len(self.items) - 1


@dataclass(frozen=True)
class RosterStats:
    """Aggregates over the whole, unfiltered store."""

    total: int
    active: int
    inactive: int
    pending: int
    total_assignments: int


def count_pages(total_items: int, page_size: int = PAGE_SIZE) -> int:
    """Number of pages needed; 0 when there is nothing to show."""
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    return math.ceil(total_items / page_size)


def clamp_page(requested_page: int, total_pages: int) -> int:
    """Clamp a requested page into ``[1, max(total_pages, 1)]``."""
    return min(max(requested_page, 1), max(total_pages, 1))


def paginate(
    admins: Sequence[Admin],
    requested_page: int = 1,
    page_size: int = PAGE_SIZE,
) -> Page:
    """
    Return the requested page of ``admins``.

    Out-of-range pages are clamped, so asking for a page past the end
    yields the last page rather than an empty one.
    """
    total_items = len(admins)
    total_pages = count_pages(total_items, page_size)
    page = clamp_page(requested_page, total_pages)

    start = (page - 1) * page_size
    return Page(
        page=page,
        total_pages=total_pages,
        total_items=total_items,
        page_size=page_size,
        items=tuple(admins[start:start + page_size]),
    )


def compute_stats(admins: Sequence[Admin]) -> RosterStats:
    """Status counts and total society assignments across every admin."""
    counts = {status: 0 for status in AdminStatus}
    total_assignments = 0
    for admin in admins:
        counts[admin.status] += 1
        total_assignments += admin.society_count

    return RosterStats(
        total=len(admins),
        active=counts[AdminStatus.ACTIVE],
        inactive=counts[AdminStatus.INACTIVE],
        pending=counts[AdminStatus.PENDING],
        total_assignments=total_assignments,
    )
