"""
Admin Roster Module Configuration.

Manages environment variables specific to the Admin Roster module.
Uses prefix ROSTER_ to avoid conflicts with other modules.
"""

from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_SEED_PATH = Path(__file__).resolve().parent.parent / "data" / "seed.json"


class RosterSettings(BaseSettings):
    """
    Admin Roster module settings loaded from environment variables.

    All variables use the ROSTER_ prefix for module isolation.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    page_size: Annotated[
        int,
        Field(
            default=12,
            gt=0,
            description="Number of admins shown per result page",
            validation_alias="ROSTER_PAGE_SIZE",
        ),
    ] = 12

    seed_path: Annotated[
        Path,
        Field(
            default=DEFAULT_SEED_PATH,
            description="JSON file holding the society directory and initial admins",
            validation_alias="ROSTER_SEED_PATH",
        ),
    ] = DEFAULT_SEED_PATH

    seed_on_startup: Annotated[
        bool,
        Field(
            default=True,
            description="Load the seed admins into the store when the module starts",
            validation_alias="ROSTER_SEED_ON_STARTUP",
        ),
    ] = True


@lru_cache
def get_roster_settings() -> RosterSettings:
    """
    Get cached roster module settings.

    Returns:
        RosterSettings: Roster settings instance.
    """
    return RosterSettings()
