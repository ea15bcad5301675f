"""
Camper filters for enriched rosters.
"""

from .assignment_filter import AssignmentFilter
from .base_filter import FieldPresenceFilter, RosterFilter
from .camper_rounds_filter import CamperRoundsFilter
from .filter_manager import FilterManager
from .presence_filters import MedicalFilter, PreferenceFilter, SwimLevelFilter
from .program_filter import SortedProgramFilter

__all__ = [
    "RosterFilter",
    "FieldPresenceFilter",
    "AssignmentFilter",
    "CamperRoundsFilter",
    "PreferenceFilter",
    "SwimLevelFilter",
    "MedicalFilter",
    "SortedProgramFilter",
    "FilterManager",
]
