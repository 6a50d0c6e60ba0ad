"""
Admin Roster Module Models.

Contains the immutable Pydantic records held by the roster store.
"""

from modules.admin_roster.models.entities import (
    NEVER,
    Activity,
    ActivityType,
    Admin,
    AdminDraft,
    AdminFields,
    AdminPatch,
    AdminStatus,
    Society,
    check_timestamp,
    format_timestamp,
    parse_timestamp,
)

__all__ = [
    "NEVER",
    "Activity",
    "ActivityType",
    "Admin",
    "AdminDraft",
    "AdminFields",
    "AdminPatch",
    "AdminStatus",
    "Society",
    "check_timestamp",
    "format_timestamp",
    "parse_timestamp",
]
