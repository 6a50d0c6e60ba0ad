"""
Admin Roster API Schemas.

Pydantic models for roster request/response validation.
Field names are emitted in camelCase to match the dashboard payloads.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from modules.admin_roster.models import Admin, AdminStatus, Society
from modules.admin_roster.services import (
    Page,
    RosterStats,
    RosterView,
    SelectAllState,
    SortField,
    SortOrder,
    StatusFilter,
    ViewState,
)


class BaseSchema(BaseModel):
    """Base schema with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Requests
# =============================================================================


class AdminFormRequest(BaseSchema):
    """
    Admin form submission.

    Text fields default to blank so that missing values are reported
    through ``field_errors`` instead of a schema error.
    """

    name: str = ""
    email: str = ""
    phone: str = ""
    status: AdminStatus = AdminStatus.PENDING
    society_ids: list[int] = Field(default_factory=list, description="Assigned society ids")


class SearchRequest(BaseSchema):
    term: str = ""


class StatusFilterRequest(BaseSchema):
    status: StatusFilter


class SortRequest(BaseSchema):
    field: Optional[SortField] = Field(None, description="Column to sort by; null disables sorting")


class SortOrderRequest(BaseSchema):
    order: SortOrder


class PageRequest(BaseSchema):
    page: int


class DetailRequest(BaseSchema):
    admin_id: Optional[int] = None


class BulkStatusRequest(BaseSchema):
    status: AdminStatus


class BulkDeleteRequest(BaseSchema):
    """Bulk delete; ``confirm`` is the answer to the confirmation prompt."""

    confirm: bool = False


# =============================================================================
# Responses
# =============================================================================


class ViewStateResponse(BaseSchema):
    search_term: str
    status_filter: StatusFilter
    sort_field: Optional[SortField]
    sort_order: SortOrder
    page: int

    @classmethod
    def from_state(cls, state: ViewState) -> "ViewStateResponse":
        return cls(
            search_term=state.search_term,
            status_filter=state.status_filter,
            sort_field=state.sort_field,
            sort_order=state.sort_order,
            page=state.page,
        )


class PageResponse(BaseSchema):
    page: int
    total_pages: int
    total_items: int
    page_size: int
    start_index: int
    end_index: int
    items: list[Admin]

    @classmethod
    def from_page(cls, page: Page) -> "PageResponse":
        return cls(
            page=page.page,
            total_pages=page.total_pages,
            total_items=page.total_items,
            page_size=page.page_size,
            start_index=page.start_index,
            end_index=page.end_index,
            items=list(page.items),
        )


class StatsResponse(BaseSchema):
    total: int
    active: int
    inactive: int
    pending: int
    total_assignments: int

    @classmethod
    def from_stats(cls, stats: RosterStats) -> "StatsResponse":
        return cls(
            total=stats.total,
            active=stats.active,
            inactive=stats.inactive,
            pending=stats.pending,
            total_assignments=stats.total_assignments,
        )


class SelectionResponse(BaseSchema):
    selected: list[int]
    select_all_state: SelectAllState


class ToggleSelectionResponse(SelectionResponse):
    is_selected: bool


class RosterViewResponse(BaseSchema):
    state: ViewStateResponse
    page: PageResponse
    selection: SelectionResponse
    stats: StatsResponse

    @classmethod
    def from_view(cls, view: RosterView) -> "RosterViewResponse":
        return cls(
            state=ViewStateResponse.from_state(view.state),
            page=PageResponse.from_page(view.page),
            selection=SelectionResponse(
                selected=list(view.selected),
                select_all_state=view.select_all_state,
            ),
            stats=StatsResponse.from_stats(view.stats),
        )


class DetailResponse(BaseSchema):
    admin: Optional[Admin] = None


class SocietiesResponse(BaseSchema):
    societies: list[Society]
    total: int


class BulkActionResponse(BaseSchema):
    affected: int
    confirmed: bool = True


class FormErrorResponse(BaseSchema):
    """Returned with HTTP 422 when the admin form fails validation."""

    message: str = "Validation failed"
    field_errors: dict[str, str]
