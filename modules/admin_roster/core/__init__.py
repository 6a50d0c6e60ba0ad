"""
Admin Roster Module Core Package.

Contains configuration and exception types.
"""

from modules.admin_roster.core.config import RosterSettings, get_roster_settings
from modules.admin_roster.core.exceptions import (
    AdminNotFoundError,
    AdminValidationError,
    DuplicateAdminIdError,
    RosterError,
    RosterNotInitializedError,
    SelectionScopeError,
)

__all__ = [
    "RosterSettings",
    "get_roster_settings",
    "RosterError",
    "AdminNotFoundError",
    "AdminValidationError",
    "DuplicateAdminIdError",
    "SelectionScopeError",
    "RosterNotInitializedError",
]
