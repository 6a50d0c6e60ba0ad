"""
Admin Roster Entity Models.

Pydantic models for societies, activities and admins.
Records are immutable; every change produces a new instance.

Python attributes are snake_case. The camelCase names used by the
dashboard payloads (unitCount, assignedSocieties, lastActivity, ...)
are accepted and emitted as aliases.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError


NEVER = ""
"""Sentinel stored in ``last_activity`` for an admin that never signed in."""


class AdminStatus(str, Enum):
    """Lifecycle status of an admin account."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    PENDING = "pending"

    def __str__(self) -> str:
        return self.value


class ActivityType(str, Enum):
    """Kind of historical event attached to an admin."""

    APPROVAL = "approval"
    EDIT = "edit"
    LOGIN = "login"
    TICKET = "ticket"

    def __str__(self) -> str:
        return self.value


class RosterModel(BaseModel):
    """Base model with camelCase aliases and immutability."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Society(RosterModel):
    """Organizational unit an admin may be assigned to manage."""

    id: int
    name: str
    unit_count: Annotated[int, Field(ge=0)] = 0


class Activity(RosterModel):
    """Immutable historical event entry owned by an admin."""

    id: int
    action: str
    society: str = ""
    timestamp: str
    type: ActivityType

    @field_validator("timestamp")
    @classmethod
    def timestamp_is_iso(cls, value: str) -> str:
        return check_timestamp(value)


def parse_timestamp(value: str) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp into an aware datetime.

    Returns None for the empty "never" sentinel. Naive values are
    treated as UTC.
    """
    if not value:
        return None
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(moment: datetime) -> str:
    """Render a datetime as an ISO-8601 UTC string with a Z suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def check_timestamp(value: str, allow_never: bool = False) -> str:
    """
    Reject anything that ``parse_timestamp`` cannot read.

    Raises:
        PydanticCustomError: For malformed values, and for the empty
            sentinel unless ``allow_never`` is set.
    """
    if value == NEVER:
        if allow_never:
            return value
        raise PydanticCustomError("timestamp", "Timestamp is required")
    try:
        parse_timestamp(value)
    except ValueError:
        raise PydanticCustomError(
            "timestamp",
            "Invalid ISO-8601 timestamp: {value}",
            {"value": value},
        ) from None
    return value


def _unique_societies(societies: tuple[Society, ...]) -> tuple[Society, ...]:
    # First occurrence wins
    seen: set[int] = set()
    unique: list[Society] = []
    for society in societies:
        if society.id in seen:
            continue
        seen.add(society.id)
        unique.append(society)
    return tuple(unique)


class AdminFields(RosterModel):
    """Fields shared by admins, drafts and form submissions."""

    name: str
    email: str
    phone: str
    status: AdminStatus = AdminStatus.PENDING
    assigned_societies: tuple[Society, ...] = ()
    last_activity: str = NEVER
    login_count: Annotated[int, Field(ge=0)] = 0
    tickets_resolved: Annotated[int, Field(ge=0)] = 0

    @field_validator("assigned_societies")
    @classmethod
    def dedupe_societies(cls, value: tuple[Society, ...]) -> tuple[Society, ...]:
        return _unique_societies(value)

    @field_validator("last_activity")
    @classmethod
    def last_activity_is_iso(cls, value: str) -> str:
        return check_timestamp(value, allow_never=True)

    @property
    def society_count(self) -> int:
        return len(self.assigned_societies)


class AdminDraft(AdminFields):
    """
    Candidate admin submitted for creation.

    Has no id, creation time or activity history; those are assigned
    by the record store.
    """

    model_config = ConfigDict(extra="forbid")


class Admin(AdminFields):
    """Managed administrator record."""

    id: int
    created_at: str
    recent_activities: tuple[Activity, ...] = ()

    @field_validator("created_at")
    @classmethod
    def created_at_is_iso(cls, value: str) -> str:
        return check_timestamp(value)

    @property
    def last_activity_at(self) -> Optional[datetime]:
        """Last activity as a datetime, or None if the admin never signed in."""
        return parse_timestamp(self.last_activity)

    @property
    def last_activity_label(self) -> str:
        return self.last_activity or "Never"


class AdminPatch(RosterModel):
    """
    Partial update for an admin.

    ``id``, ``created_at`` and ``recent_activities`` are not part of
    the update surface and are rejected.
    """

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    status: Optional[AdminStatus] = None
    assigned_societies: Optional[tuple[Society, ...]] = None
    last_activity: Optional[str] = None
    login_count: Optional[Annotated[int, Field(ge=0)]] = None
    tickets_resolved: Optional[Annotated[int, Field(ge=0)]] = None

    @field_validator("assigned_societies")
    @classmethod
    def dedupe_societies(
        cls, value: Optional[tuple[Society, ...]]
    ) -> Optional[tuple[Society, ...]]:
        if value is None:
            return None
        return _unique_societies(value)

    @field_validator("last_activity")
    @classmethod
    def last_activity_is_iso(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return check_timestamp(value, allow_never=True)

    def changes(self) -> dict:
        """Fields explicitly set on this patch, keyed by attribute name."""
        return self.model_dump(exclude_unset=True, exclude_none=True)
