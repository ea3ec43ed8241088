"""Configuration management for Toki."""

import logging
import os
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)


def toki_home() -> Path:
    return Path(os.environ.get("TOKI_HOME", Path.home() / "toki")).expanduser()


def config_file() -> Path:
    return toki_home() / "config" / "toki.conf"


def default_data_dir() -> Path:
    return toki_home() / "data" / "database"


@dataclass
class Config:
    """Toki configuration."""

    data_dir: str = ""
    upcoming_days: int = 7
    timezone: str = ""
    watch_interval: int = 60

    @property
    def data_path(self) -> Path:
        if self.data_dir:
            return Path(self.data_dir).expanduser()
        return default_data_dir()

    def today(self) -> date:
        """Current date in the configured timezone (local time if unset)."""
        if self.timezone:
            try:
                return datetime.now(ZoneInfo(self.timezone)).date()
            except (ZoneInfoNotFoundError, ValueError):
                logger.warning(f"Unknown TIMEZONE {self.timezone!r}, using local time")
        return date.today()


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    if value[:1] in ('"', "'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def _parse_int(key: str, value: str, default: int) -> int:
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid integer for {key.upper()}: {value!r}, using {default}")
        return default


def load_config(path: Path | None = None) -> Config:
    """Load configuration from toki.conf file."""
    config = Config()
    path = path or config_file()

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
            case "data_dir":
                config.data_dir = value
            case "upcoming_days":
                config.upcoming_days = _parse_int(key, value, config.upcoming_days)
            case "timezone":
                config.timezone = value
            case "watch_interval":
                config.watch_interval = _parse_int(key, value, config.watch_interval)
            case _:
                logger.debug(f"Ignoring unknown config key {key.upper()}")

    return config
