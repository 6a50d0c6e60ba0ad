"""
Admin Roster Routers Package.
"""

from modules.admin_roster.routers.roster import (
    get_roster_service,
    router as roster_router,
    set_roster_service,
)

__all__ = [
    "roster_router",
    "get_roster_service",
    "set_roster_service",
]
