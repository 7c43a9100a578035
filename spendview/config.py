"""Configuration file management for spendview."""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

from spendview.domain.models import DisplaySettings, GroupKey, SortDirection, SortField, SortSpec, ViewMode

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = DisplaySettings()


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "spendview" / "config.toml"


def settings_to_dict(settings: DisplaySettings) -> dict[str, Any]:
    """Convert display settings to the [display] table."""
    return {
        "view_mode": settings.view_mode.value,
        "group_by": settings.group_by.value,
        "sort_field": settings.sort.field.value,
        "sort_direction": settings.sort.direction.value,
        "items_per_page": settings.items_per_page,
    }


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    default_config: dict[str, Any] = {
        "display": settings_to_dict(DEFAULT_SETTINGS),
    }
    save_config(default_config, config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary, empty if the file doesn't exist.

    Raises:
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        return {}

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def _enum_value(enum_type: Any, raw: Any, default: Any) -> Any:
    try:
        return enum_type(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s value %r in config", enum_type.__name__, raw)
        return default


def parse_display_settings(config: dict[str, Any]) -> DisplaySettings:
    """Build display settings from a config dictionary.

    Missing or invalid values fall back to the defaults.

    Args:
        config: Configuration dictionary.

    Returns:
        DisplaySettings.
    """
    display = config.get("display", {})
    if not isinstance(display, dict):
        return DEFAULT_SETTINGS

    items_per_page = display.get("items_per_page", DEFAULT_SETTINGS.items_per_page)
    if not isinstance(items_per_page, int) or items_per_page <= 0:
        items_per_page = DEFAULT_SETTINGS.items_per_page

    return DisplaySettings(
        view_mode=_enum_value(ViewMode, display.get("view_mode", "list"), DEFAULT_SETTINGS.view_mode),
        group_by=_enum_value(GroupKey, display.get("group_by", "none"), DEFAULT_SETTINGS.group_by),
        sort=SortSpec(
            field=_enum_value(SortField, display.get("sort_field", "date"), DEFAULT_SETTINGS.sort.field),
            direction=_enum_value(
                SortDirection, display.get("sort_direction", "desc"), DEFAULT_SETTINGS.sort.direction
            ),
        ),
        items_per_page=items_per_page,
    )


def load_display_settings(config_path: Path | None = None) -> DisplaySettings:
    """Load display settings from the config file."""
    return parse_display_settings(load_config(config_path))


def load_storage_path(config_path: Path | None = None) -> Path | None:
    """Database path from [storage] db_path, if configured."""
    storage = load_config(config_path).get("storage", {})
    if isinstance(storage, dict) and storage.get("db_path"):
        return Path(storage["db_path"]).expanduser()
    return None
