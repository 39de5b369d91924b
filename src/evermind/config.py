"""Configuration management for EverMind."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

EVERMIND_HOME = Path(os.environ.get("EVERMIND_HOME", Path.home() / "evermind"))
CONFIG_FILE = EVERMIND_HOME / "config" / "evermind.conf"
DATA_DIR = EVERMIND_HOME / "data"
DEFAULT_CACHE_FILE = DATA_DIR / "assignments.json"


@dataclass
class Config:
    """EverMind configuration."""

    api_base_url: str = ""
    session_cookie: str = ""
    notifications_enabled: bool = False
    notifier: str = "console"
    telegram_bot_token: str = ""
    telegram_chat_id: str = ""
    cache_file: str = ""
    reminder_refresh_minutes: int = 60

    @property
    def cache_path(self) -> Path:
        """Resolved local cache file."""
        if self.cache_file:
            return Path(self.cache_file).expanduser()
        return DEFAULT_CACHE_FILE

    @property
    def is_offline(self) -> bool:
        """No backend configured - local cache only."""
        return not self.api_base_url


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from evermind.conf file."""
    path = path or CONFIG_FILE
    config = Config()

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "api_base_url":
                config.api_base_url = value.rstrip("/")
            case "session_cookie":
                config.session_cookie = value
            case "notifications_enabled":
                config.notifications_enabled = _parse_bool(value)
            case "notifier":
                config.notifier = value.lower()
            case "telegram_bot_token":
                config.telegram_bot_token = value
            case "telegram_chat_id":
                config.telegram_chat_id = value
            case "cache_file":
                config.cache_file = value
            case "reminder_refresh_minutes":
                try:
                    config.reminder_refresh_minutes = int(value)
                except ValueError:
                    logger.warning(f"Invalid REMINDER_REFRESH_MINUTES: {value}")
            case _:
                logger.debug(f"Ignoring unknown config key: {key}")

    return config
