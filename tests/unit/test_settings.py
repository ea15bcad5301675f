"""
Unit tests for pipeline, import and export settings and the settings loader.
"""

from pathlib import Path

import pytest

from happycamper.core.models import ExportSettings, ImportSettings, PipelineSettings
from happycamper.core.rules import SettingsBuilder, SettingsLoader

pytestmark = pytest.mark.unit

CONFIG_DIR = Path(__file__).parent.parent.parent / "config"


class TestPipelineSettings:
    """Tests for PipelineSettings defaults"""

    def test_defaults(self):
        settings = PipelineSettings()
        assert settings.include_orphans
        assert settings.require_all_swim_definitions
        assert not settings.flag_unknown_swim_activities
        assert not settings.warn_on_missing_medical
        assert settings.exempt_activities == ["Swimming", "Horseback Riding"]
        assert settings.swim_activity_requirements["Sailing"] == 2
        assert settings.swim_level_names == {"Blue": 2, "White": 1, "Red": 0}

    def test_defaults_not_shared(self):
        first = PipelineSettings()
        first.exempt_activities.append("Archery")
        assert PipelineSettings().exempt_activities == ["Swimming", "Horseback Riding"]


class TestImportSettings:
    """Tests for ImportSettings feature selection"""

    def test_activity_always_enabled(self):
        settings = ImportSettings(enabled_feature_ids=["program", "medical"])
        assert settings.enabled_feature_ids == ["activity", "program", "medical"]

    def test_duplicates_removed_in_order(self):
        settings = ImportSettings(enabled_feature_ids=["activity", "program", "activity", "program"])
        assert settings.enabled_feature_ids == ["activity", "program"]

    def test_activity_cannot_be_removed(self):
        settings = ImportSettings().add_enabled_feature("medical").remove_enabled_feature("activity")
        assert settings.is_feature_enabled("activity")
        settings.remove_enabled_feature("medical")
        assert not settings.is_feature_enabled("medical")

    def test_is_valid_requires_both_files(self):
        assert not ImportSettings(camper_file="campers.csv").is_valid()
        assert ImportSettings(camper_file="campers.csv", activity_file="activities.csv").is_valid()


class TestExportSettings:
    """Tests for ExportSettings defaults"""

    def test_defaults(self):
        settings = ExportSettings()
        assert settings.destination is None
        assert settings.show_all_columns
        assert settings.show_all_rows
        assert settings.use_empty_placeholder


class TestSettingsLoader:
    """Tests for loading settings from YAML"""

    def test_load_shipped_settings(self):
        settings = SettingsLoader(CONFIG_DIR / "roster_settings.yaml").load_settings()
        assert settings == PipelineSettings()

    def test_partial_settings_keep_defaults(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("settings:\n  warn_on_missing_medical: true\n  exempt_activities: [Archery]\n")
        settings = SettingsLoader(path).load_settings()
        assert settings.warn_on_missing_medical
        assert settings.exempt_activities == ["Archery"]
        assert settings.include_orphans

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Settings file not found"):
            SettingsLoader(tmp_path / "missing.yaml")

    def test_missing_section(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("rules: []\n")
        with pytest.raises(ValueError, match="must contain 'settings' section"):
            SettingsLoader(path).load_settings()

    def test_invalid_value(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("settings:\n  swim_level_names:\n    Blue: high\n")
        with pytest.raises(ValueError, match="Invalid settings"):
            SettingsLoader(path).load_settings()


class TestSettingsBuilder:
    """Tests for the fluent settings builder"""

    def test_builder(self):
        settings = (
            SettingsBuilder()
            .include_orphans(False)
            .flag_unknown_swim_activities()
            .warn_on_missing_medical()
            .require_all_swim_definitions(True)
            .exempt_activities("Swimming")
            .add_swim_requirement("Kayak", 1)
            .add_swim_level("Green", 3)
            .build()
        )
        assert not settings.include_orphans
        assert settings.flag_unknown_swim_activities
        assert settings.warn_on_missing_medical
        assert settings.exempt_activities == ["Swimming"]
        assert settings.swim_activity_requirements["Kayak"] == 1
        assert settings.swim_level_names["Green"] == 3

    def test_builder_does_not_modify_base(self):
        base = PipelineSettings()
        SettingsBuilder(base).add_swim_level("Green", 3).build()
        assert "Green" not in base.swim_level_names
