"""
Admin Roster API Router.

Endpoints for the admin list screen: record CRUD, the derived list view
(search, status filter, sort, page), detail selection and bulk actions.

The roster is a single-actor, in-memory workspace; view state lives on
the server between requests.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse

from modules.admin_roster.core.exceptions import (
    AdminNotFoundError,
    AdminValidationError,
    RosterNotInitializedError,
    SelectionScopeError,
)
from modules.admin_roster.models import Admin, AdminPatch
from modules.admin_roster.schemas import (
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
)
from modules.admin_roster.services import RosterService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/roster", tags=["Admin Roster"])


# =============================================================================
# Dependencies
# =============================================================================

_service: RosterService | None = None


def set_roster_service(service: RosterService | None) -> None:
    """Install the roster service used by the endpoints."""
    global _service
    _service = service


def get_roster_service() -> RosterService:
    """
    Dependency returning the roster service.

    Raises:
        RosterNotInitializedError: If the module has not been started.
    """
    if _service is None:
        raise RosterNotInitializedError("Roster service requested before module initialization")
    return _service


RosterDep = Annotated[RosterService, Depends(get_roster_service)]


def _not_found(e: AdminNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


def _form_errors(field_errors: dict[str, str]) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content=FormErrorResponse(field_errors=field_errors).model_dump(by_alias=True),
    )


def _selection_response(service: RosterService) -> SelectionResponse:
    return SelectionResponse(
        selected=list(service.bulk_selection),
        select_all_state=service.select_all_state,
    )


def _submit(
    service: RosterService, form: AdminFormRequest, admin_id: Optional[int] = None
) -> Admin | JSONResponse:
    try:
        societies = service.directory.resolve(form.society_ids)
    except KeyError as e:
        return _form_errors({"assignedSocieties": str(e.args[0])})

    submission = service.submit_form(
        {
            "name": form.name,
            "email": form.email,
            "phone": form.phone,
            "status": form.status,
            "assigned_societies": societies,
        },
        admin_id=admin_id,
    )
    if not submission.accepted:
        return _form_errors(submission.validation.field_errors)
    return submission.admin


# =============================================================================
# View
# =============================================================================


@router.get("/view", response_model=RosterViewResponse)
async def get_view(service: RosterDep) -> RosterViewResponse:
    """Current page, view inputs, bulk selection and statistics."""
    return RosterViewResponse.from_view(service.view)


@router.put("/view/search", response_model=RosterViewResponse)
async def set_search(body: SearchRequest, service: RosterDep) -> RosterViewResponse:
    service.set_search_term(body.term)
    return RosterViewResponse.from_view(service.view)


@router.put("/view/status", response_model=RosterViewResponse)
async def set_status_filter(body: StatusFilterRequest, service: RosterDep) -> RosterViewResponse:
    service.set_status_filter(body.status)
    return RosterViewResponse.from_view(service.view)


@router.post("/view/sort", response_model=RosterViewResponse)
async def set_sort(body: SortRequest, service: RosterDep) -> RosterViewResponse:
    """Sort by a column; repeating the current column flips the order."""
    service.set_sort_field(body.field)
    return RosterViewResponse.from_view(service.view)


@router.put("/view/order", response_model=RosterViewResponse)
async def set_sort_order(body: SortOrderRequest, service: RosterDep) -> RosterViewResponse:
    service.set_sort_order(body.order)
    return RosterViewResponse.from_view(service.view)


@router.put("/view/page", response_model=PageResponse)
async def set_page(body: PageRequest, service: RosterDep) -> PageResponse:
    return PageResponse.from_page(service.set_page(body.page))


@router.get("/stats", response_model=StatsResponse)
async def get_stats(service: RosterDep) -> StatsResponse:
    """Dashboard statistics over the whole roster, ignoring filters."""
    return StatsResponse.from_stats(service.stats)


@router.get("/societies", response_model=SocietiesResponse)
async def list_societies(
    service: RosterDep,
    search: Annotated[str, Query(description="Case-insensitive name filter")] = "",
) -> SocietiesResponse:
    societies = service.search_societies(search)
    return SocietiesResponse(societies=list(societies), total=len(societies))


# =============================================================================
# Admins
# =============================================================================


@router.get("/admins", response_model=list[Admin])
async def list_admins(service: RosterDep) -> list[Admin]:
    """Full, unfiltered roster in insertion order."""
    return list(service.admins)


@router.get("/admins/{admin_id}", response_model=Admin)
async def get_admin(admin_id: int, service: RosterDep) -> Admin:
    try:
        return service.get_admin(admin_id)
    except AdminNotFoundError as e:
        raise _not_found(e)


@router.post(
    "/admins",
    response_model=Admin,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": FormErrorResponse}},
)
async def create_admin(body: AdminFormRequest, service: RosterDep):
    return _submit(service, body)


@router.put(
    "/admins/{admin_id}",
    response_model=Admin,
    responses={404: {"description": "Admin not found"}, 422: {"model": FormErrorResponse}},
)
async def edit_admin(admin_id: int, body: AdminFormRequest, service: RosterDep):
    """Submit the edit form for an existing admin."""
    try:
        return _submit(service, body, admin_id=admin_id)
    except AdminNotFoundError as e:
        raise _not_found(e)


@router.patch(
    "/admins/{admin_id}",
    response_model=Admin,
    responses={404: {"description": "Admin not found"}, 422: {"model": FormErrorResponse}},
)
async def patch_admin(admin_id: int, body: AdminPatch, service: RosterDep):
    try:
        return service.update_admin(admin_id, body)
    except AdminNotFoundError as e:
        raise _not_found(e)
    except AdminValidationError as e:
        return _form_errors(e.field_errors)


@router.delete("/admins/{admin_id}", response_model=Admin)
async def delete_admin(admin_id: int, service: RosterDep) -> Admin:
    try:
        return service.delete_admin(admin_id)
    except AdminNotFoundError as e:
        raise _not_found(e)


@router.post("/admins/{admin_id}/toggle-status", response_model=Admin)
async def toggle_status(admin_id: int, service: RosterDep) -> Admin:
    try:
        return service.toggle_status(admin_id)
    except AdminNotFoundError as e:
        raise _not_found(e)


# =============================================================================
# Detail selection
# =============================================================================


@router.get("/detail", response_model=DetailResponse)
async def get_detail(service: RosterDep) -> DetailResponse:
    return DetailResponse(admin=service.detail)


@router.put("/detail", response_model=DetailResponse)
async def set_detail(body: DetailRequest, service: RosterDep) -> DetailResponse:
    try:
        return DetailResponse(admin=service.select_detail(body.admin_id))
    except AdminNotFoundError as e:
        raise _not_found(e)


# =============================================================================
# Bulk selection
# =============================================================================


@router.get("/selection", response_model=SelectionResponse)
async def get_selection(service: RosterDep) -> SelectionResponse:
    return _selection_response(service)


@router.post("/selection/toggle/{admin_id}", response_model=ToggleSelectionResponse)
async def toggle_selection(admin_id: int, service: RosterDep) -> ToggleSelectionResponse:
    try:
        is_selected = service.toggle_bulk_select(admin_id)
    except SelectionScopeError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    current = _selection_response(service)
    return ToggleSelectionResponse(
        selected=current.selected,
        select_all_state=current.select_all_state,
        is_selected=is_selected,
    )


@router.post("/selection/select-all", response_model=SelectionResponse)
async def select_all(service: RosterDep) -> SelectionResponse:
    service.select_all_on_page()
    return _selection_response(service)


@router.post("/selection/toggle-all", response_model=SelectionResponse)
async def toggle_all(service: RosterDep) -> SelectionResponse:
    service.toggle_select_all()
    return _selection_response(service)


@router.delete("/selection", response_model=SelectionResponse)
async def clear_selection(service: RosterDep) -> SelectionResponse:
    service.clear_bulk_selection()
    return _selection_response(service)


@router.post("/selection/bulk-status", response_model=BulkActionResponse)
async def bulk_status(body: BulkStatusRequest, service: RosterDep) -> BulkActionResponse:
    return BulkActionResponse(affected=service.bulk_set_status(body.status))


@router.post("/selection/bulk-delete", response_model=BulkActionResponse)
async def bulk_delete(body: BulkDeleteRequest, service: RosterDep) -> BulkActionResponse:
    """Delete the selected admins; ``confirm: false`` aborts without changes."""
    affected = service.bulk_delete(lambda count: body.confirm)
    return BulkActionResponse(affected=affected, confirmed=body.confirm)
