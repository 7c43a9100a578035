"""Tests for spendview.config."""

import stat
from pathlib import Path

from spendview.config import (
    create_default_config,
    get_config_path,
    load_config,
    load_display_settings,
    load_storage_path,
    parse_display_settings,
    save_config,
)
from spendview.domain.models import DisplaySettings, GroupKey, SortDirection, SortField, ViewMode


class TestConfigFile:
    """Tests for reading and writing the TOML config."""

    def test_config_path_respects_xdg(self, tmp_path: Path, monkeypatch) -> None:
        """Should place the config under XDG_CONFIG_HOME."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert get_config_path() == tmp_path / "spendview" / "config.toml"

    def test_missing_file_gives_empty_config(self, tmp_path: Path) -> None:
        """Should treat a missing file as an empty config."""
        assert load_config(tmp_path / "nope.toml") == {}

    def test_default_config_round_trip(self, tmp_path: Path) -> None:
        """Should write defaults that load back as default settings."""
        path = tmp_path / "spendview" / "config.toml"
        create_default_config(path)

        assert stat.S_IMODE(path.stat().st_mode) == 0o600
        assert load_display_settings(path) == DisplaySettings()

    def test_save_and_load(self, tmp_path: Path) -> None:
        """Should persist custom display settings."""
        path = tmp_path / "config.toml"
        save_config(
            {
                "display": {
                    "view_mode": "compact",
                    "group_by": "month",
                    "sort_field": "amount",
                    "sort_direction": "asc",
                    "items_per_page": 10,
                }
            },
            path,
        )
        settings = load_display_settings(path)

        assert settings.view_mode == ViewMode.COMPACT
        assert settings.group_by == GroupKey.MONTH
        assert settings.sort.field == SortField.AMOUNT
        assert settings.sort.direction == SortDirection.ASC
        assert settings.items_per_page == 10

    def test_storage_path(self, tmp_path: Path) -> None:
        """Should read [storage] db_path when present."""
        path = tmp_path / "config.toml"
        assert load_storage_path(path) is None

        save_config({"storage": {"db_path": str(tmp_path / "custom.db")}}, path)
        assert load_storage_path(path) == tmp_path / "custom.db"


class TestParseDisplaySettings:
    """Tests for parse_display_settings."""

    def test_invalid_values_fall_back_to_defaults(self) -> None:
        """Should ignore unknown enum values and bad page sizes."""
        settings = parse_display_settings(
            {"display": {"view_mode": "fancy", "group_by": "decade", "sort_field": "colour", "items_per_page": -1}}
        )
        assert settings == DisplaySettings()

    def test_non_table_display_section(self) -> None:
        """Should return defaults when [display] is not a table."""
        assert parse_display_settings({"display": "yes"}) == DisplaySettings()
