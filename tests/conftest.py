"""
Pytest Configuration and Shared Fixtures.

Provides common test fixtures for framework unit tests.
"""

import pytest


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Set up mock environment variables for testing."""
    env_vars = {
        "SERVER_HOST": "127.0.0.1",
        "SERVER_PORT": "8000",
        "BASE_URL": "https://test.example.com",
        "APP_DEBUG": "true",
        "APP_LOG_LEVEL": "DEBUG",
        "APP_MAX_EVENT_LOG": "50",
    }

    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)

    return env_vars


@pytest.fixture
def config_loader(mock_env_vars):
    """Create a ConfigLoader instance with mock environment."""
    from core.app_context import ConfigLoader

    loader = ConfigLoader()
    loader.load()
    return loader


@pytest.fixture
def app_context(mock_env_vars):
    """Create an AppContext instance with mock environment."""
    from core.app_context import AppContext

    return AppContext()


@pytest.fixture
def fresh_registry():
    """ModuleRegistry with the singleton reset before and after the test."""
    from core.registry import ModuleRegistry

    ModuleRegistry.reset()
    yield ModuleRegistry()
    ModuleRegistry.reset()


# =============================================================================
# Module Fixtures
# =============================================================================


class MockModule:
    """Mock module implementation for testing."""

    def __init__(self, name: str = "mock_module"):
        self._name = name
        self._initialized = False
        self._shutdown = False
        self.events: list[dict] = []

    def get_module_name(self) -> str:
        return self._name

    def on_entry(self, context) -> None:
        self._initialized = True

    def handle_event(self, context, event: dict) -> dict | None:
        self.events.append(event)
        return {"handled": True, "module": self._name}

    def get_api_router(self):
        return None

    def get_menu_config(self) -> dict:
        return {
            "label": self._name.title(),
            "icon": "test_icon",
            "actions": []
        }

    def get_status(self) -> dict:
        return {"status": "active", "details": {}}

    def on_shutdown(self) -> None:
        self._shutdown = True


@pytest.fixture
def mock_module():
    """Create a mock module instance."""
    return MockModule()


@pytest.fixture
def mock_module_factory():
    """Factory for creating mock modules with custom names."""
    def _create(name: str):
        return MockModule(name)
    return _create
