"""
Seed Data Loader.

Reads the society directory and the initial admin roster from a JSON
file. Admins reference societies and activities by id:

    {
        "societies": [{"id": 1, "name": "...", "unitCount": 245}, ...],
        "activities": [{"id": 1, "action": "...", "society": "...",
                        "timestamp": "...", "type": "approval"}, ...],
        "admins": [{"id": 1, "name": "...", ...,
                    "assignedSocietyIds": [1, 2],
                    "recentActivityIds": [1, 2, 3]}, ...]
    }
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from pydantic import TypeAdapter

from modules.admin_roster.models import Activity, Admin, Society
from modules.admin_roster.services.directory import SocietyDirectory

logger = logging.getLogger(__name__)

_societies_adapter = TypeAdapter(list[Society])
_activities_adapter = TypeAdapter(list[Activity])


@dataclass(frozen=True)
class SeedData:
    """Parsed seed file."""

    directory: SocietyDirectory
    admins: tuple[Admin, ...]


def parse_seed(payload: Mapping[str, Any]) -> SeedData:
    """
    Build the directory and admin records from a decoded seed payload.

    Raises:
        KeyError: If an admin references an unknown society or activity.
        pydantic.ValidationError: If a record is malformed.
    """
    directory = SocietyDirectory(_societies_adapter.validate_python(payload.get("societies", [])))
    activities = {
        activity.id: activity
        for activity in _activities_adapter.validate_python(payload.get("activities", []))
    }

    admins = []
    for raw in payload.get("admins", []):
        record = dict(raw)
        society_ids = record.pop("assignedSocietyIds", [])
        activity_ids = record.pop("recentActivityIds", [])

        record["assignedSocieties"] = directory.resolve(society_ids)
        try:
            record["recentActivities"] = tuple(activities[i] for i in activity_ids)
        except KeyError as e:
            raise KeyError(f"Admin {record.get('id')} references unknown activity {e}") from e

        admins.append(Admin.model_validate(record))

    return SeedData(directory=directory, admins=tuple(admins))


def load_seed(path: Path | str) -> SeedData:
    """Load and parse a seed JSON file."""
    path = Path(path)
    with path.open(encoding="utf-8") as f:
        payload = json.load(f)

    seed = parse_seed(payload)
    logger.info(
        f"Loaded seed data from {path.name}: "
        f"{len(seed.directory)} societies, {len(seed.admins)} admins"
    )
    return seed
