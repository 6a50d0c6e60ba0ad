"""
Unit Tests for core.registry module.

Tests ModuleRegistry and ModuleLoader classes.
"""

from pathlib import Path

import pytest

MODULES_DIR = Path(__file__).resolve().parent.parent / "modules"


class TestModuleRegistry:
    """Tests for ModuleRegistry class."""

    def test_singleton_pattern(self, fresh_registry):
        """Test ModuleRegistry follows singleton pattern."""
        from core.registry import ModuleRegistry

        assert ModuleRegistry() is fresh_registry

    def test_reset_creates_new_instance(self, fresh_registry):
        from core.registry import ModuleRegistry

        ModuleRegistry.reset()
        assert ModuleRegistry() is not fresh_registry

    def test_initialization(self, fresh_registry):
        """Test ModuleRegistry initializes empty."""
        assert fresh_registry.get_all_modules() == []
        assert fresh_registry._context is None

    def test_register_module(self, fresh_registry, mock_module):
        """Test register() adds module to registry."""
        assert fresh_registry.register(mock_module) is True
        assert fresh_registry.get_module("mock_module") is mock_module

    def test_register_duplicate_returns_false(self, fresh_registry, mock_module_factory):
        """Test register() returns False for duplicate module names."""
        fresh_registry.register(mock_module_factory("test"))
        assert fresh_registry.register(mock_module_factory("test")) is False

    def test_register_without_context_defers_entry(self, fresh_registry, mock_module):
        fresh_registry.register(mock_module)
        assert mock_module._initialized is False

    def test_register_initializes_module_with_context(self, fresh_registry, app_context, mock_module):
        """Test register() calls on_entry when context available."""
        fresh_registry.set_context(app_context)
        fresh_registry.register(mock_module)

        assert mock_module._initialized is True
        assert any("mock_module" in entry for entry in app_context.get_event_log())

    def test_failing_on_entry_is_logged(self, fresh_registry, app_context, mock_module):
        """Test a module whose on_entry fails stays registered with an ERROR event."""
        def boom(context):
            raise RuntimeError("seed missing")

        mock_module.on_entry = boom
        fresh_registry.set_context(app_context)

        assert fresh_registry.register(mock_module) is True
        assert any("[ERROR]" in entry and "seed missing" in entry for entry in app_context.get_event_log())

    def test_register_class(self, fresh_registry, app_context, mock_module):
        """Test register_class() instantiates and registers module."""
        fresh_registry.set_context(app_context)

        assert fresh_registry.register_class(type(mock_module)) is True
        assert "mock_module" in fresh_registry.get_module_names()

    def test_unregister_module(self, fresh_registry, mock_module):
        """Test unregister() removes module and calls shutdown."""
        fresh_registry.register(mock_module)

        assert fresh_registry.unregister("mock_module") is True
        assert fresh_registry.get_module("mock_module") is None
        assert mock_module._shutdown is True

    def test_unregister_nonexistent_returns_false(self, fresh_registry):
        assert fresh_registry.unregister("nonexistent") is False

    def test_get_menu_configs(self, fresh_registry, mock_module_factory):
        """Test get_menu_configs() returns configs from all modules."""
        fresh_registry.register(mock_module_factory("module1"))
        fresh_registry.register(mock_module_factory("module2"))

        labels = [c["label"] for c in fresh_registry.get_menu_configs()]

        assert labels == ["Module1", "Module2"]

    def test_get_statuses(self, fresh_registry, mock_module_factory):
        fresh_registry.register(mock_module_factory("alpha"))
        assert fresh_registry.get_statuses() == {"alpha": {"status": "active", "details": {}}}

    def test_get_statuses_reports_errors(self, fresh_registry, mock_module):
        def broken():
            raise RuntimeError("down")

        mock_module.get_status = broken
        fresh_registry.register(mock_module)

        assert fresh_registry.get_statuses()["mock_module"]["status"] == "error"

    def test_dispatch(self, fresh_registry, app_context, mock_module):
        """Test dispatch() routes events to handle_event."""
        fresh_registry.set_context(app_context)
        fresh_registry.register(mock_module)

        response = fresh_registry.dispatch("mock_module", {"action": "view"})

        assert response == {"handled": True, "module": "mock_module"}
        assert mock_module.events == [{"action": "view"}]

    def test_dispatch_unknown_module(self, fresh_registry, app_context):
        fresh_registry.set_context(app_context)
        with pytest.raises(KeyError):
            fresh_registry.dispatch("missing", {"action": "view"})

    def test_dispatch_requires_context(self, fresh_registry, mock_module):
        fresh_registry.register(mock_module)
        with pytest.raises(RuntimeError):
            fresh_registry.dispatch("mock_module", {"action": "view"})

    def test_shutdown_all(self, fresh_registry, mock_module_factory):
        """Test shutdown_all() unregisters all modules."""
        module1 = mock_module_factory("m1")
        module2 = mock_module_factory("m2")
        fresh_registry.register(module1)
        fresh_registry.register(module2)

        fresh_registry.shutdown_all()

        assert fresh_registry.get_all_modules() == []
        assert module1._shutdown is True
        assert module2._shutdown is True


class TestModuleLoader:
    """Tests for ModuleLoader class."""

    def test_load_from_nonexistent_directory(self, fresh_registry):
        """Test load_from_directory() handles missing directory."""
        from core.registry import ModuleLoader

        assert ModuleLoader(fresh_registry).load_from_directory("/nonexistent/path") == 0

    def test_loads_admin_roster_package(self, fresh_registry):
        """Test the roster package module is discovered."""
        from core.registry import ModuleLoader

        count = ModuleLoader(fresh_registry).load_from_directory(str(MODULES_DIR))

        assert count == 1
        assert fresh_registry.get_module_names() == ["admin_roster"]

    def test_loaded_module_started_with_context(self, fresh_registry, app_context):
        from core.registry import ModuleLoader

        fresh_registry.set_context(app_context)
        ModuleLoader(fresh_registry).load_from_directory(str(MODULES_DIR))

        module = fresh_registry.get_module("admin_roster")
        try:
            assert module.get_status()["status"] == "active"
        finally:
            fresh_registry.shutdown_all()
