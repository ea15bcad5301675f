"""
Settings models for a roster pipeline run.

PipelineSettings holds the behaviour switches and lookup tables the features
read. ImportSettings and ExportSettings describe one import and one export.
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

ACTIVITY_FEATURE_ID = "activity"

DEFAULT_EXEMPT_ACTIVITIES = ["Swimming", "Horseback Riding"]

DEFAULT_SWIM_ACTIVITY_REQUIREMENTS = {
    "Sailing": 2,
    "Paddlesports": 1,
    "Paddle Sports": 1,
    "Skiing": 2,
    "Gold Swimming": 2,
    "Archery": 0,
    "Arts & Crafts": 0,
    "Biking": 0,
    "Challenge": 0,
    "Dance": 0,
    "Drama": 0,
    "Horseback Riding": 0,
    "Fishing": 0,
    "Friendship Bracelet": 0,
    "Nature": 0,
    "Sports": 0,
}

DEFAULT_SWIM_LEVEL_NAMES = {
    "Blue": 2,
    "White": 1,
    "Red": 0,
}


class PipelineSettings(BaseModel):
    """
    Behaviour switches and lookup tables for the enrichment features.

    Attributes:
        include_orphans: Add activity-only campers to the enriched roster
        require_all_swim_definitions: Track activities missing from the swim requirement map
        flag_unknown_swim_activities: Treat untracked activities as swim conflicts
        warn_on_missing_medical: Log a warning for campers with no medical notes
        exempt_activities: Activities that never count for or against preference scores
        swim_activity_requirements: Activity name to minimum swim level value
        swim_level_names: Swim level name to level value
    """

    include_orphans: bool = True
    require_all_swim_definitions: bool = True
    flag_unknown_swim_activities: bool = False
    warn_on_missing_medical: bool = False
    exempt_activities: list[str] = Field(default_factory=lambda: list(DEFAULT_EXEMPT_ACTIVITIES))
    swim_activity_requirements: dict[str, int] = Field(
        default_factory=lambda: dict(DEFAULT_SWIM_ACTIVITY_REQUIREMENTS)
    )
    swim_level_names: dict[str, int] = Field(default_factory=lambda: dict(DEFAULT_SWIM_LEVEL_NAMES))

    class Config:
        json_schema_extra = {
            "example": {
                "include_orphans": True,
                "require_all_swim_definitions": True,
                "flag_unknown_swim_activities": False,
                "warn_on_missing_medical": False,
                "exempt_activities": ["Swimming", "Horseback Riding"],
                "swim_activity_requirements": {"Sailing": 2, "Archery": 0},
                "swim_level_names": {"Blue": 2, "White": 1, "Red": 0},
            }
        }


class ImportSettings(BaseModel):
    """
    Input files and feature selection for one import.

    The activity feature is always enabled and cannot be removed.
    """

    camper_file: Path | None = None
    activity_file: Path | None = None
    enabled_feature_ids: list[str] = Field(default_factory=lambda: [ACTIVITY_FEATURE_ID])

    @field_validator("enabled_feature_ids")
    @classmethod
    def ensure_activity_feature(cls, v: list[str]) -> list[str]:
        """De-duplicate the feature list; add the activity feature first if it is missing."""
        feature_ids = list(dict.fromkeys(v))
        if ACTIVITY_FEATURE_ID not in feature_ids:
            feature_ids.insert(0, ACTIVITY_FEATURE_ID)
        return feature_ids

    def add_enabled_feature(self, feature_id: str) -> "ImportSettings":
        if feature_id not in self.enabled_feature_ids:
            self.enabled_feature_ids.append(feature_id)
        return self

    def remove_enabled_feature(self, feature_id: str) -> "ImportSettings":
        if feature_id != ACTIVITY_FEATURE_ID and feature_id in self.enabled_feature_ids:
            self.enabled_feature_ids.remove(feature_id)
        return self

    def is_feature_enabled(self, feature_id: str) -> bool:
        return feature_id in self.enabled_feature_ids

    def is_valid(self) -> bool:
        return self.camper_file is not None and self.activity_file is not None


class ExportSettings(BaseModel):
    """
    Options for writing an enriched roster to CSV.

    Attributes:
        destination: Output file path
        show_all_columns: Export every header (False: visible headers only)
        show_all_rows: Export every camper (False: only campers passing the filters)
        use_empty_placeholder: Write "No Data" for empty cells instead of ""
    """

    destination: Path | None = None
    show_all_columns: bool = True
    show_all_rows: bool = True
    use_empty_placeholder: bool = True
