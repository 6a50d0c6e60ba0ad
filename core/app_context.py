"""
AppContext - Dependency Injection Container.

Holds the host configuration, the bounded event log shown by
``/api/system/logs`` and the server run state. Modules receive the
context in ``on_entry`` and ``handle_event``.
"""
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, NamedTuple, Optional
import logging
import os

from dotenv import load_dotenv


def _as_bool(raw: str) -> bool:
    return raw.strip().lower() in ("1", "true", "yes", "on")


class ConfigKey(NamedTuple):
    """One environment variable mapped onto a dotted config key."""

    path: str
    env_var: str
    default: str
    cast: Callable[[str], Any] = str


# Every setting the host reads; module settings live in each module's config
CONFIG_KEYS = (
    ConfigKey("server.host", "SERVER_HOST", "127.0.0.1"),
    ConfigKey("server.port", "SERVER_PORT", "8000", int),
    ConfigKey("server.base_url", "BASE_URL", ""),
    ConfigKey("app.debug", "APP_DEBUG", "true", _as_bool),
    ConfigKey("app.log_level", "APP_LOG_LEVEL", "INFO"),
    ConfigKey("app.max_event_log", "APP_MAX_EVENT_LOG", "500", int),
)

# Event log levels that are forwarded above INFO
_EVENT_LEVELS = {
    "CRITICAL": logging.ERROR,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
}


@dataclass
class ConfigLoader:
    """Configuration loader from environment variables."""

    _config: Dict[str, Any] = field(default_factory=dict)

    def load(self, env_path: Optional[str] = None) -> None:
        """Load configuration from a .env file and the environment."""
        env_file = Path(env_path) if env_path else Path(__file__).parent.parent / ".env"
        if env_file.exists():
            load_dotenv(env_file)

        config: Dict[str, Any] = {}
        for key in CONFIG_KEYS:
            section, name = key.path.split(".", 1)
            config.setdefault(section, {})[name] = key.cast(os.getenv(key.env_var, key.default))
        self._config = config

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by dot notation key."""
        value: Any = self._config
        for part in key.split("."):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]
        return value

    def get_log_level(self) -> int:
        """Resolve app.log_level to a logging level, defaulting to INFO."""
        level = logging.getLevelName(str(self.get("app.log_level", "INFO")).upper())
        return level if isinstance(level, int) else logging.INFO


class AppContext:
    """Application Context - Central Dependency Injection Container."""

    def __init__(self, env_path: Optional[str] = None) -> None:
        self._logger = logging.getLogger(__name__)
        self._config_loader = ConfigLoader()
        self._config_loader.load(env_path)

        self._event_log: deque[str] = deque(
            maxlen=self._config_loader.get("app.max_event_log", 500)
        )

        self._server_running = False
        self._server_port: int = self._config_loader.get("server.port", 8000)

    @property
    def config(self) -> ConfigLoader:
        return self._config_loader

    def log_event(self, message: str, level: str = "INFO") -> None:
        """
        Record an event for the status endpoint and the application log.

        ``level`` is free-form (e.g. ``ROSTER``, ``LOADER``); ERROR,
        CRITICAL and WARNING map to the matching logger level.
        """
        stamp = datetime.now().strftime("%H:%M:%S")
        self._event_log.append(f"[{stamp}] [{level}] {message}")
        self._logger.log(_EVENT_LEVELS.get(level, logging.INFO), message)

    def get_event_log(self) -> list[str]:
        """Oldest-first copy of the event log."""
        return list(self._event_log)

    def set_server_status(self, running: bool, port: int = 8000) -> None:
        self._server_running = running
        self._server_port = port

    def get_server_status(self) -> tuple[bool, int]:
        return (self._server_running, self._server_port)
