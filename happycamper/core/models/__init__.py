"""
Core roster models.

Settings and warnings are pydantic models; rosters and campers are plain
classes because they are mutated in place by the enrichment features.
"""

from .activity_roster import ActivityRoster
from .camper import Camper
from .camper_roster import CamperRoster
from .enhanced_roster import EnhancedRoster
from .identity import generate_camper_id, generate_camper_id_from_activity
from .pipeline_settings import ExportSettings, ImportSettings, PipelineSettings
from .roster import Roster
from .roster_header import RosterHeader, RosterKind
from .roster_warning import RosterWarning, WarningType

__all__ = [
    "Camper",
    "Roster",
    "CamperRoster",
    "ActivityRoster",
    "EnhancedRoster",
    "RosterHeader",
    "RosterKind",
    "RosterWarning",
    "WarningType",
    "PipelineSettings",
    "ImportSettings",
    "ExportSettings",
    "generate_camper_id",
    "generate_camper_id_from_activity",
]
