"""Configuration management for Daybook."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .adapters.file_kv import is_valid_key
from .store import DEFAULT_STORAGE_KEY

logger = logging.getLogger(__name__)

DEFAULT_HOME = Path.home() / ".daybook"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def config_file_for(home: Path) -> Path:
    """Location of daybook.conf under a home directory."""
    return home / "config" / "daybook.conf"


@dataclass
class Config:
    """Daybook configuration."""

    home: Path = field(default_factory=lambda: DEFAULT_HOME)
    data_dir: str = ""
    storage_key: str = DEFAULT_STORAGE_KEY
    log_level: str = "WARNING"

    @property
    def resolved_data_dir(self) -> Path:
        """Configured data directory, or <home>/data."""
        if self.data_dir:
            return Path(self.data_dir).expanduser()
        return self.home / "data"


def _unquote(value: str) -> str:
    """Strip quotes from a quoted value, or an inline comment from an unquoted one."""
    if value[:1] in ('"', "'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(home: Path | str | None = None) -> Config:
    """Load configuration from <home>/config/daybook.conf."""
    home = Path(home).expanduser() if home else DEFAULT_HOME
    config = Config(home=home)

    config_file = config_file_for(home)
    if not config_file.exists():
        return config

    for line in config_file.read_text().splitlines():
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
            case "storage_key":
                if is_valid_key(value):
                    config.storage_key = value
                elif value:
                    logger.warning(f"Ignoring invalid STORAGE_KEY: {value}")
            case "log_level":
                level = value.upper()
                if level in LOG_LEVELS:
                    config.log_level = level
                else:
                    logger.warning(f"Ignoring unknown LOG_LEVEL: {value}")
            case _:
                logger.debug(f"Ignoring unknown config key: {key}")

    return config
