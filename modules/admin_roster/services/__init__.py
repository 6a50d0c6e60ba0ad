"""
Admin Roster Module Services.

Contains the record store, the derived-view pipeline and the facade
the rest of the application talks to.

Pipeline:
    - RecordStore: authoritative in-memory admin collection
    - query: search / status filter / sort stages
    - pagination: page slicing and dashboard statistics
    - SelectionManager: detail and bulk selection, bulk actions
    - FormValidator: gate for form submissions
    - RosterService: facade holding the view inputs
"""

from modules.admin_roster.services.directory import SocietyDirectory, toggle_assignment
from modules.admin_roster.services.pagination import (
    PAGE_SIZE,
    Page,
    RosterStats,
    compute_stats,
    paginate,
)
from modules.admin_roster.services.query import (
    QueryCache,
    SortField,
    SortOrder,
    StatusFilter,
    apply_query,
    filter_by_search,
    filter_by_status,
    sort_admins,
)
from modules.admin_roster.services.roster import (
    FormSubmission,
    RosterService,
    RosterView,
    ViewState,
)
from modules.admin_roster.services.seed import SeedData, load_seed, parse_seed
from modules.admin_roster.services.selection import SelectAllState, SelectionManager
from modules.admin_roster.services.store import RecordStore
from modules.admin_roster.services.validation import (
    FormValidator,
    ValidationResult,
    validate_form,
)

__all__ = [
    "SocietyDirectory",
    "toggle_assignment",
    "PAGE_SIZE",
    "Page",
    "RosterStats",
    "compute_stats",
    "paginate",
    "QueryCache",
    "SortField",
    "SortOrder",
    "StatusFilter",
    "apply_query",
    "filter_by_search",
    "filter_by_status",
    "sort_admins",
    "FormSubmission",
    "RosterService",
    "RosterView",
    "ViewState",
    "SeedData",
    "load_seed",
    "parse_seed",
    "SelectAllState",
    "SelectionManager",
    "RecordStore",
    "FormValidator",
    "ValidationResult",
    "validate_form",
]
