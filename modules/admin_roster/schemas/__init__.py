"""
Admin Roster Module Schemas.

Pydantic models for request/response validation.
"""

from modules.admin_roster.schemas.roster import (
    AdminFormRequest,
    BulkActionResponse,
    BulkDeleteRequest,
    BulkStatusRequest,
    DetailRequest,
    DetailResponse,
    FormErrorResponse,
    PageRequest,
    PageResponse,
    RosterViewResponse,
    SearchRequest,
    SelectionResponse,
    SocietiesResponse,
    SortOrderRequest,
    SortRequest,
    StatsResponse,
    StatusFilterRequest,
    ToggleSelectionResponse,
    ViewStateResponse,
)

__all__ = [
    "AdminFormRequest",
    "BulkActionResponse",
    "BulkDeleteRequest",
    "BulkStatusRequest",
    "DetailRequest",
    "DetailResponse",
    "FormErrorResponse",
    "PageRequest",
    "PageResponse",
    "RosterViewResponse",
    "SearchRequest",
    "SelectionResponse",
    "SocietiesResponse",
    "SortOrderRequest",
    "SortRequest",
    "StatsResponse",
    "StatusFilterRequest",
    "ToggleSelectionResponse",
    "ViewStateResponse",
]
