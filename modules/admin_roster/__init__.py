"""
Admin Roster Module.

Society administrator directory: records, list view and selections.
"""

from modules.admin_roster.admin_roster_module import AdminRosterModule

__all__ = ["AdminRosterModule"]
