"""
Configuration loader — reads hostcap.yml into the Settings model.

It reads YAML, validates against Pydantic schemas, and returns typed
settings. A missing config file is not an error: defaults apply.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from hostcap.core.models.settings import Settings
from hostcap.initsystem import FACILITIES as INIT_FACILITIES
from hostcap.packagemanager import FACILITIES as PACKAGE_FACILITIES

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "hostcap.yml"


class ConfigError(Exception):
    """Raised when the configuration file is invalid or missing."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for hostcap.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to hostcap.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_settings(path: Path | None = None, search: bool = True) -> Settings:
    """Load and validate settings.

    Args:
        path: Explicit path to hostcap.yml. Must exist when given.
        search: When no path is given, search upward from cwd.

    Returns:
        Validated Settings (defaults when no file is found).

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_config_file() if search else None
        if path is None:
            logger.debug("No %s found, using defaults", CONFIG_FILE)
            return Settings()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    _check_facility_names(settings, path)
    return settings


def _check_facility_names(settings: Settings, path: Path) -> None:
    unknown = [n for n in settings.disabled.init_systems if n not in INIT_FACILITIES]
    unknown += [n for n in settings.disabled.package_managers if n not in PACKAGE_FACILITIES]
    if unknown:
        raise ConfigError(f"Unknown facility names in {path}: {', '.join(unknown)}")
