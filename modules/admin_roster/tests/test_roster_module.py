"""
Unit Tests for AdminRosterModule.

Tests the IAppModule lifecycle and action event dispatch.
"""

import pytest
from unittest.mock import MagicMock

from modules.admin_roster import AdminRosterModule
from modules.admin_roster.core.config import RosterSettings
from modules.admin_roster.core.exceptions import RosterNotInitializedError
from modules.admin_roster.routers import get_roster_service


@pytest.fixture
def mock_context():
    context = MagicMock()
    context.log_event = MagicMock()
    return context


@pytest.fixture
def module(mock_context):
    """Started module over the bundled seed file."""
    module = AdminRosterModule(settings=RosterSettings(_env_file=None))
    module.on_entry(mock_context)
    yield module
    module.on_shutdown()


class TestModuleLifecycle:
    """Tests for module registration hooks."""

    def test_module_name(self):
        assert AdminRosterModule(settings=RosterSettings(_env_file=None)).get_module_name() == "admin_roster"

    def test_roster_before_entry_raises(self):
        module = AdminRosterModule(settings=RosterSettings(_env_file=None))
        with pytest.raises(RosterNotInitializedError):
            module.roster
        assert module.get_status()["status"] == "initializing"
        assert module.get_api_router() is None

    def test_on_entry_loads_seed(self, module, mock_context):
        assert len(module.roster.admins) == 20
        assert get_roster_service() is module.roster
        mock_context.log_event.assert_called()

    def test_api_router_exposes_roster_routes(self, module):
        paths = {route.path for route in module.get_api_router().routes}
        assert "/roster/view" in paths
        assert "/roster/admins/{admin_id}" in paths

    def test_seed_on_startup_disabled(self, mock_context, monkeypatch):
        monkeypatch.setenv("ROSTER_SEED_ON_STARTUP", "false")
        module = AdminRosterModule(settings=RosterSettings(_env_file=None))
        module.on_entry(mock_context)
        try:
            assert module.roster.admins == ()
            assert len(module.roster.directory) == 15
        finally:
            module.on_shutdown()

    def test_status_details(self, module):
        status = module.get_status()
        assert status["status"] == "active"
        assert status["details"]["admins"] == 20
        assert status["details"]["assignments"] == 38

    def test_menu_config(self, module):
        config = module.get_menu_config()
        assert config["label"] == "Admin Directory"
        assert config["actions"]

    def test_shutdown_uninstalls_service(self, mock_context):
        module = AdminRosterModule(settings=RosterSettings(_env_file=None))
        module.on_entry(mock_context)
        module.on_shutdown()

        with pytest.raises(RosterNotInitializedError):
            get_roster_service()
        with pytest.raises(RosterNotInitializedError):
            module.roster


class TestHandleEvent:
    """Tests for action event dispatch."""

    def test_view(self, module, mock_context):
        response = module.handle_event(mock_context, {"action": "view"})

        assert response["success"] is True
        assert response["data"]["page"]["totalItems"] == 20

    def test_unknown_action(self, module, mock_context):
        response = module.handle_event(mock_context, {"action": "explode"})
        assert response["success"] is False
        assert response["error"] == "unknown_action"

    def test_search(self, module, mock_context):
        response = module.handle_event(mock_context, {"action": "search", "term": "chen"})
        assert [a["id"] for a in response["data"]["page"]["items"]] == [2]

    def test_filter_and_sort(self, module, mock_context):
        module.handle_event(mock_context, {"action": "filter", "status": "active"})
        response = module.handle_event(mock_context, {"action": "sort", "field": "lastActivity"})

        state = response["data"]["state"]
        assert state["statusFilter"] == "active"
        assert state["sortField"] == "lastActivity"

    def test_invalid_filter_value(self, module, mock_context):
        response = module.handle_event(mock_context, {"action": "filter", "status": "archived"})
        assert response["error"] == "invalid_event"

    def test_page(self, module, mock_context):
        response = module.handle_event(mock_context, {"action": "page", "page": 2})
        assert response["data"]["page"] == 2

    def test_create(self, module, mock_context):
        response = module.handle_event(mock_context, {
            "action": "create",
            "form": {"name": "A", "email": "a@b.co", "phone": "1", "societyIds": [3]},
        })

        assert response["success"] is True
        assert response["data"]["id"] == 21
        assert response["data"]["assignedSocieties"][0]["name"] == "Palm Grove Society"

    def test_create_rejected(self, module, mock_context):
        response = module.handle_event(mock_context, {
            "action": "create",
            "form": {"name": "A", "email": "foo", "phone": "1"},
        })

        assert response["error"] == "validation"
        assert response["fieldErrors"] == {"email": "Invalid email format"}
        assert len(module.roster.admins) == 20

    def test_update(self, module, mock_context):
        response = module.handle_event(mock_context, {
            "action": "update",
            "adminId": 2,
            "form": {"name": "Mike Chen", "email": "michael.chen@platform.com", "phone": "1"},
        })
        assert response["data"]["name"] == "Mike Chen"
        assert response["data"]["loginCount"] == 203

    def test_update_without_id(self, module, mock_context):
        response = module.handle_event(mock_context, {"action": "update", "form": {}})
        assert response["error"] == "invalid_event"

    def test_delete_missing(self, module, mock_context):
        response = module.handle_event(mock_context, {"action": "delete", "adminId": 999})
        assert response["error"] == "not_found"

    def test_toggle_status(self, module, mock_context):
        response = module.handle_event(mock_context, {"action": "toggle_status", "adminId": 4})
        assert response["data"]["status"] == "active"

    def test_select_detail(self, module, mock_context):
        response = module.handle_event(mock_context, {"action": "select_detail", "adminId": 9})
        assert response["data"]["admin"]["name"] == "Maria Garcia"

    def test_toggle_select_out_of_scope(self, module, mock_context):
        response = module.handle_event(mock_context, {"action": "toggle_select", "adminId": 20})
        assert response["error"] == "out_of_scope"

    def test_bulk_flow(self, module, mock_context):
        module.handle_event(mock_context, {"action": "toggle_select", "adminId": 1})
        module.handle_event(mock_context, {"action": "toggle_select", "adminId": 2})

        declined = module.handle_event(mock_context, {"action": "bulk_delete", "confirm": False})
        assert declined["data"]["affected"] == 0

        status = module.handle_event(mock_context, {"action": "bulk_status", "status": "inactive"})
        assert status["data"]["affected"] == 2
        assert module.roster.stats.inactive == 6

    def test_select_all_toggle_all_clear(self, module, mock_context):
        data = module.handle_event(mock_context, {"action": "select_all"})["data"]
        assert data["selectAllState"] == "all"

        data = module.handle_event(mock_context, {"action": "toggle_all"})["data"]
        assert data["selected"] == []

        module.handle_event(mock_context, {"action": "toggle_select", "adminId": 3})
        data = module.handle_event(mock_context, {"action": "clear_selection"})["data"]
        assert data["selectAllState"] == "none"

    def test_societies_and_stats(self, module, mock_context):
        societies = module.handle_event(mock_context, {"action": "societies", "search": "tower"})
        assert [s["name"] for s in societies["data"]["societies"]] == ["Ocean View Towers", "Pearl Tower"]

        stats = module.handle_event(mock_context, {"action": "stats"})
        assert stats["data"]["totalAssignments"] == 38
