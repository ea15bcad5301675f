"""
Roster enrichment features.

FEATURE_REGISTRY maps feature ids to feature classes in their default run
order. The activity feature always runs and must come first.
"""

from happycamper.core.models import PipelineSettings

from .activity_feature import ActivityFeature
from .base_feature import ActivityRosterFeature, RosterFeature
from .medical_feature import MedicalFeature
from .preference_feature import PreferenceFeature
from .program_feature import ProgramFeature
from .swim_level_feature import SwimLevelFeature

FEATURE_REGISTRY: dict[str, type[RosterFeature]] = {
    ActivityFeature.feature_id: ActivityFeature,
    ProgramFeature.feature_id: ProgramFeature,
    PreferenceFeature.feature_id: PreferenceFeature,
    SwimLevelFeature.feature_id: SwimLevelFeature,
    MedicalFeature.feature_id: MedicalFeature,
}


def build_available_features(settings: PipelineSettings | None = None) -> list[RosterFeature]:
    """Instantiate every registered feature with shared settings."""
    settings = settings or PipelineSettings()
    return [feature_class(settings) for feature_class in FEATURE_REGISTRY.values()]


__all__ = [
    "RosterFeature",
    "ActivityRosterFeature",
    "ActivityFeature",
    "ProgramFeature",
    "PreferenceFeature",
    "SwimLevelFeature",
    "MedicalFeature",
    "FEATURE_REGISTRY",
    "build_available_features",
]
