"""
Pipeline settings management.

Loads PipelineSettings from YAML files and provides a builder for
assembling settings in code.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from happycamper.core.models.pipeline_settings import PipelineSettings


class SettingsLoader:
    """
    Loads pipeline settings from a YAML configuration file.

    Expected YAML format:
    ```yaml
    settings:
      include_orphans: true
      warn_on_missing_medical: false
      exempt_activities:
        - Swimming
        - Horseback Riding
      swim_activity_requirements:
        Sailing: 2
        Archery: 0
      swim_level_names:
        Blue: 2
        White: 1
        Red: 0
    ```

    Keys left out keep their defaults.
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the settings loader.

        Args:
            config_path: Path to the YAML configuration file

        Raises:
            FileNotFoundError: If the file does not exist
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Settings file not found: {config_path}")

    def load_settings(self) -> PipelineSettings:
        """
        Load and validate pipeline settings.

        Returns:
            PipelineSettings built from the file

        Raises:
            ValueError: If the YAML has no 'settings' section or a value is invalid
        """
        with open(self.config_path, encoding="utf-8") as f:
            config = yaml.safe_load(f)

        if not config or "settings" not in config:
            raise ValueError("Configuration file must contain 'settings' section")

        section = config["settings"] or {}
        if not isinstance(section, dict):
            raise ValueError("'settings' section must be a mapping")

        try:
            return PipelineSettings(**section)
        except PydanticValidationError as e:
            raise ValueError(f"Invalid settings in {self.config_path.name}: {e}") from e


class SettingsBuilder:
    """
    Programmatically build pipeline settings (for testing or embedding).
    """

    def __init__(self, base: PipelineSettings | None = None):
        self._values: dict[str, Any] = (base or PipelineSettings()).model_dump()

    def include_orphans(self, enabled: bool = True) -> "SettingsBuilder":
        self._values["include_orphans"] = enabled
        return self

    def require_all_swim_definitions(self, enabled: bool = True) -> "SettingsBuilder":
        self._values["require_all_swim_definitions"] = enabled
        return self

    def flag_unknown_swim_activities(self, enabled: bool = True) -> "SettingsBuilder":
        self._values["flag_unknown_swim_activities"] = enabled
        return self

    def warn_on_missing_medical(self, enabled: bool = True) -> "SettingsBuilder":
        self._values["warn_on_missing_medical"] = enabled
        return self

    def exempt_activities(self, *activities: str) -> "SettingsBuilder":
        """Replace the exempt activity list."""
        self._values["exempt_activities"] = list(activities)
        return self

    def add_swim_requirement(self, activity: str, level: int) -> "SettingsBuilder":
        self._values["swim_activity_requirements"][activity] = level
        return self

    def add_swim_level(self, name: str, level: int) -> "SettingsBuilder":
        self._values["swim_level_names"][name] = level
        return self

    def build(self) -> PipelineSettings:
        """Build and return the settings."""
        return PipelineSettings(**self._values)
