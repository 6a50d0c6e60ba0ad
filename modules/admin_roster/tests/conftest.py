"""
Conftest for Admin Roster Module Tests.

Provides shared fixtures for unit testing the admin roster module.
"""

from datetime import datetime, timezone

import pytest

from modules.admin_roster.core.config import DEFAULT_SEED_PATH
from modules.admin_roster.models import Admin, AdminStatus, Society
from modules.admin_roster.services import RecordStore, RosterService, load_seed


FIXED_NOW = datetime(2025, 2, 1, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock():
    """Clock returning a constant instant."""
    return lambda: FIXED_NOW


@pytest.fixture(scope="session")
def seed():
    """Bundled seed data: 15 societies, 20 admins."""
    return load_seed(DEFAULT_SEED_PATH)


@pytest.fixture
def service(seed, fixed_clock):
    """Roster service over the full seed roster."""
    return RosterService.from_seed(seed, clock=fixed_clock)


@pytest.fixture
def societies():
    return [
        Society(id=1, name="Green Valley Residency", unit_count=245),
        Society(id=2, name="Sunshine Apartments", unit_count=180),
        Society(id=3, name="Palm Grove Society", unit_count=320),
    ]


@pytest.fixture
def make_admin():
    """Factory for admin records with sensible defaults."""
    def _create(admin_id: int, **overrides) -> Admin:
        fields = {
            "id": admin_id,
            "name": f"Admin {admin_id}",
            "email": f"admin{admin_id}@platform.com",
            "phone": "+1 (555) 000-0000",
            "status": AdminStatus.ACTIVE,
            "created_at": "2024-01-01T00:00:00Z",
        }
        fields.update(overrides)
        return Admin(**fields)

    return _create


@pytest.fixture
def store(make_admin, fixed_clock):
    """Small store with three admins (ids 1-3)."""
    return RecordStore(
        [
            make_admin(1, name="Alice Carter", status=AdminStatus.ACTIVE),
            make_admin(2, name="Bob Young", status=AdminStatus.INACTIVE),
            make_admin(3, name="Cara Diaz", status=AdminStatus.PENDING),
        ],
        clock=fixed_clock,
    )


@pytest.fixture
def valid_form():
    return {
        "name": "New Admin",
        "email": "new.admin@platform.com",
        "phone": "+1 (555) 999-0000",
        "status": AdminStatus.PENDING,
    }
