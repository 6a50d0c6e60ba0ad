"""
IAppModule - Abstract Base Class for all application modules.

A module plugs into the host by implementing the lifecycle hooks below.
The registry calls ``on_entry`` once, routes action events through
``handle_event`` and calls ``on_shutdown`` when the host stops.
"""
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from fastapi import APIRouter

    from core.app_context import AppContext


class IAppModule(ABC):
    """
    Abstract interface for pluggable application modules.
    All business modules must implement this interface to be registered.
    """

    @abstractmethod
    def get_module_name(self) -> str:
        """
        Returns the unique identifier for this module.
        Used for event routing and registry lookup.

        Returns:
            str: The module's unique name (e.g., 'admin_roster')
        """

    @abstractmethod
    def on_entry(self, context: "AppContext") -> None:
        """
        Called when the module is first loaded.

        Args:
            context: The application context containing shared services
        """

    @abstractmethod
    def handle_event(self, context: "AppContext", event: dict) -> Optional[dict]:
        """
        Handles an action event routed to this module.

        Args:
            context: The application context containing shared services
            event: Payload with an ``action`` key plus action arguments

        Returns:
            Optional response dictionary
        """

    def get_api_router(self) -> Optional["APIRouter"]:
        """Router mounted under /api by the host, or None for headless modules."""
        return None

    def get_menu_config(self) -> dict:
        """
        Returns menu configuration for dashboard integration.

        Returns:
            dict: {"label": ..., "icon": ..., "actions": [...]}
        """
        return {
            "label": self.get_module_name(),
            "icon": None,
            "actions": []
        }

    def on_shutdown(self) -> None:
        """Called when the module is being unloaded."""

    def get_status(self) -> dict:
        """
        Returns the current status of the module for monitoring.

        Returns:
            dict: {"status": "active" | "warning" | "error" | "initializing",
                   "details": {...}}
        """
        return {
            "status": "active",
            "details": {}
        }
