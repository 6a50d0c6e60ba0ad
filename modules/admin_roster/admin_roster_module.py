"""
Admin Roster Module Entry Point.

Implements IAppModule interface for integration with the admin system framework.
Manages the society administrator directory: record CRUD, the searchable
and sortable list view, detail and bulk selection.
"""

import logging
from typing import Any, Callable, Optional, TYPE_CHECKING

from fastapi import APIRouter
from pydantic import BaseModel, ValidationError

from core.interface import IAppModule
from modules.admin_roster.core.config import RosterSettings, get_roster_settings
from modules.admin_roster.core.exceptions import (
    AdminNotFoundError,
    AdminValidationError,
    RosterNotInitializedError,
    SelectionScopeError,
)
from modules.admin_roster.routers import roster_router, set_roster_service
from modules.admin_roster.schemas import (
    AdminFormRequest,
    BulkActionResponse,
    BulkDeleteRequest,
    BulkStatusRequest,
    DetailRequest,
    DetailResponse,
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
)
from modules.admin_roster.services import RosterService, load_seed

if TYPE_CHECKING:
    from core.app_context import AppContext

logger = logging.getLogger(__name__)

EventHandler = Callable[[RosterService, dict], Any]


def _dump(schema: BaseModel) -> dict:
    return schema.model_dump(by_alias=True, mode="json")


def _admin_id(event: dict) -> int:
    """Read the target admin id from an event (``adminId`` or ``admin_id``)."""
    value = event.get("adminId", event.get("admin_id"))
    if value is None:
        raise KeyError("adminId")
    return int(value)


def _selection(service: RosterService) -> dict:
    return _dump(SelectionResponse(
        selected=list(service.bulk_selection),
        select_all_state=service.select_all_state,
    ))


class AdminRosterModule(IAppModule):
    """
    Admin Roster Module.

    Features:
        - In-memory admin records seeded from a JSON file
        - Search, status filter, three-column sort and pagination
        - Detail selection and page-scoped bulk selection
        - Bulk status change and confirmed bulk delete

    The same operations are reachable over HTTP (``/api/roster``) and as
    action events through ``handle_event``.
    """

    def __init__(self, settings: Optional[RosterSettings] = None) -> None:
        self._context: Optional["AppContext"] = None
        self._api_router: Optional[APIRouter] = None
        self._service: Optional[RosterService] = None
        self._settings = settings or get_roster_settings()
        self._handlers: dict[str, EventHandler] = {
            "view": self._on_view,
            "stats": self._on_stats,
            "societies": self._on_societies,
            "search": self._on_search,
            "filter": self._on_filter,
            "sort": self._on_sort,
            "order": self._on_order,
            "page": self._on_page,
            "create": self._on_create,
            "update": self._on_update,
            "delete": self._on_delete,
            "toggle_status": self._on_toggle_status,
            "select_detail": self._on_select_detail,
            "toggle_select": self._on_toggle_select,
            "select_all": self._on_select_all,
            "toggle_all": self._on_toggle_all,
            "clear_selection": self._on_clear_selection,
            "bulk_status": self._on_bulk_status,
            "bulk_delete": self._on_bulk_delete,
        }

    def get_module_name(self) -> str:
        """Return module identifier."""
        return "admin_roster"

    @property
    def roster(self) -> RosterService:
        """
        The running roster service.

        Raises:
            RosterNotInitializedError: Before ``on_entry`` or after shutdown.
        """
        if self._service is None:
            raise RosterNotInitializedError("Admin roster module is not initialized")
        return self._service

    def on_entry(self, context: "AppContext") -> None:
        """
        Initialize the roster from the seed file and build the API router.

        Args:
            context: Application context from the main framework.
        """
        self._context = context
        logger.info("Admin roster module initializing...")

        seed = load_seed(self._settings.seed_path)
        self._service = RosterService.from_seed(
            seed,
            page_size=self._settings.page_size,
            include_admins=self._settings.seed_on_startup,
        )
        set_roster_service(self._service)

        self._api_router = APIRouter()
        self._api_router.include_router(roster_router)

        context.log_event(
            f"Admin roster loaded: {len(self._service.admins)} admins, "
            f"{len(self._service.directory)} societies",
            "ROSTER",
        )
        logger.info("Admin roster module initialized")

    def on_shutdown(self) -> None:
        set_roster_service(None)
        self._service = None
        logger.info("Admin roster module shut down")

    def get_api_router(self) -> Optional[APIRouter]:
        return self._api_router

    def get_menu_config(self) -> dict:
        return {
            "label": "Admin Directory",
            "icon": "users",
            "actions": [
                {"label": "Add Admin", "action": "create"},
                {"label": "Bulk Status", "action": "bulk_status"},
                {"label": "Bulk Delete", "action": "bulk_delete"},
            ],
        }

    def get_status(self) -> dict:
        if self._service is None:
            return {"status": "initializing", "details": {}}

        stats = self._service.stats
        return {
            "status": "active",
            "details": {
                "admins": stats.total,
                "active": stats.active,
                "inactive": stats.inactive,
                "pending": stats.pending,
                "assignments": stats.total_assignments,
                "societies": len(self._service.directory),
            },
        }

    # =========================================================================
    # Event dispatch
    # =========================================================================

    def handle_event(self, context: "AppContext", event: dict) -> Optional[dict]:
        """
        Run one roster action.

        The event carries an ``action`` key (see ``self._handlers``) and
        the action's arguments in camelCase. Failures are reported in the
        response rather than raised: ``not_found``, ``out_of_scope``,
        ``validation``, ``invalid_event`` or ``unknown_action``.
        """
        action = event.get("action", "")
        handler = self._handlers.get(action)
        if handler is None:
            logger.warning(f"Unknown roster action: {action!r}")
            return self._error(action, "unknown_action", f"Unknown action: {action}")

        try:
            data = handler(self.roster, event)
        except AdminNotFoundError as e:
            return self._error(action, "not_found", str(e))
        except SelectionScopeError as e:
            return self._error(action, "out_of_scope", str(e))
        except AdminValidationError as e:
            return {**self._error(action, "validation", str(e)), "fieldErrors": e.field_errors}
        except (KeyError, ValueError, ValidationError) as e:
            logger.info(f"Invalid roster event {action!r}: {e}")
            return self._error(action, "invalid_event", str(e))

        context.log_event(f"Roster action '{action}' handled", "ROSTER")
        return {"success": True, "action": action, "data": data}

    def _error(self, action: str, error: str, message: str) -> dict:
        return {"success": False, "action": action, "error": error, "message": message}

    # -- View ---------------------------------------------------------------

    def _on_view(self, service: RosterService, event: dict) -> dict:
        return _dump(RosterViewResponse.from_view(service.view))

    def _on_stats(self, service: RosterService, event: dict) -> dict:
        return _dump(StatsResponse.from_stats(service.stats))

    def _on_societies(self, service: RosterService, event: dict) -> dict:
        societies = service.search_societies(event.get("search", ""))
        return _dump(SocietiesResponse(societies=list(societies), total=len(societies)))

    def _on_search(self, service: RosterService, event: dict) -> dict:
        service.set_search_term(SearchRequest.model_validate(event).term)
        return self._on_view(service, event)

    def _on_filter(self, service: RosterService, event: dict) -> dict:
        service.set_status_filter(StatusFilterRequest.model_validate(event).status)
        return self._on_view(service, event)

    def _on_sort(self, service: RosterService, event: dict) -> dict:
        service.set_sort_field(SortRequest.model_validate(event).field)
        return self._on_view(service, event)

    def _on_order(self, service: RosterService, event: dict) -> dict:
        service.set_sort_order(SortOrderRequest.model_validate(event).order)
        return self._on_view(service, event)

    def _on_page(self, service: RosterService, event: dict) -> dict:
        page = service.set_page(PageRequest.model_validate(event).page)
        return _dump(PageResponse.from_page(page))

    # -- Records ------------------------------------------------------------

    def _submit(self, service: RosterService, event: dict, admin_id: Optional[int]) -> dict:
        form = AdminFormRequest.model_validate(event.get("form", {}))
        try:
            societies = service.directory.resolve(form.society_ids)
        except KeyError as e:
            raise AdminValidationError({"assignedSocieties": str(e.args[0])}) from e

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
            raise AdminValidationError(submission.validation.field_errors)
        return submission.admin.model_dump(by_alias=True, mode="json")

    def _on_create(self, service: RosterService, event: dict) -> dict:
        return self._submit(service, event, None)

    def _on_update(self, service: RosterService, event: dict) -> dict:
        return self._submit(service, event, _admin_id(event))

    def _on_delete(self, service: RosterService, event: dict) -> dict:
        return service.delete_admin(_admin_id(event)).model_dump(by_alias=True, mode="json")

    def _on_toggle_status(self, service: RosterService, event: dict) -> dict:
        return service.toggle_status(_admin_id(event)).model_dump(by_alias=True, mode="json")

    # -- Selection ----------------------------------------------------------

    def _on_select_detail(self, service: RosterService, event: dict) -> dict:
        request = DetailRequest.model_validate(event)
        return _dump(DetailResponse(admin=service.select_detail(request.admin_id)))

    def _on_toggle_select(self, service: RosterService, event: dict) -> dict:
        is_selected = service.toggle_bulk_select(_admin_id(event))
        return {**_selection(service), "isSelected": is_selected}

    def _on_select_all(self, service: RosterService, event: dict) -> dict:
        service.select_all_on_page()
        return _selection(service)

    def _on_toggle_all(self, service: RosterService, event: dict) -> dict:
        service.toggle_select_all()
        return _selection(service)

    def _on_clear_selection(self, service: RosterService, event: dict) -> dict:
        service.clear_bulk_selection()
        return _selection(service)

    def _on_bulk_status(self, service: RosterService, event: dict) -> dict:
        affected = service.bulk_set_status(BulkStatusRequest.model_validate(event).status)
        return _dump(BulkActionResponse(affected=affected))

    def _on_bulk_delete(self, service: RosterService, event: dict) -> dict:
        confirm = BulkDeleteRequest.model_validate(event).confirm
        affected = service.bulk_delete(lambda count: confirm)
        return _dump(BulkActionResponse(affected=affected, confirmed=confirm))
