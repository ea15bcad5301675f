"""
FilterManager - combine filters with AND semantics.
"""

from happycamper.core.models import Camper, EnhancedRoster
from happycamper.features.medical_feature import FEATURE_ID as MEDICAL_FEATURE_ID
from happycamper.features.preference_feature import FEATURE_ID as PREFERENCE_FEATURE_ID
from happycamper.features.program_feature import FEATURE_ID as PROGRAM_FEATURE_ID
from happycamper.features.swim_level_feature import FEATURE_ID as SWIM_FEATURE_ID

from .assignment_filter import AssignmentFilter
from .base_filter import RosterFilter
from .presence_filters import MedicalFilter, PreferenceFilter, SwimLevelFilter
from .program_filter import SortedProgramFilter

# Feature id -> filter registered when that feature is enabled
FEATURE_FILTERS: dict[str, type[RosterFilter]] = {
    PROGRAM_FEATURE_ID: SortedProgramFilter,
    PREFERENCE_FEATURE_ID: PreferenceFilter,
    SWIM_FEATURE_ID: SwimLevelFilter,
    MEDICAL_FEATURE_ID: MedicalFilter,
}


class FilterManager:
    """
    Holds filters keyed by id. A camper passes when every filter passes;
    with no filters every camper passes.
    """

    def __init__(self):
        self._filters: dict[str, RosterFilter] = {}
        self.roster: EnhancedRoster | None = None

    def add_filter(self, roster_filter: RosterFilter) -> None:
        self._filters[roster_filter.filter_id] = roster_filter

    def remove_filter(self, filter_id: str) -> None:
        self._filters.pop(filter_id, None)

    def get_filter(self, filter_id: str) -> RosterFilter | None:
        return self._filters.get(filter_id)

    def has_filter(self, filter_id: str) -> bool:
        return filter_id in self._filters

    def get_filter_count(self) -> int:
        return len(self._filters)

    def get_all_filters(self) -> list[RosterFilter]:
        return list(self._filters.values())

    def apply_filters(self, camper: Camper) -> bool:
        return all(roster_filter.apply(camper) for roster_filter in self._filters.values())

    def filter_campers(self, roster: EnhancedRoster) -> list[Camper]:
        return [camper for camper in roster.campers if self.apply_filters(camper)]

    def create_filters_for_roster(self, roster: EnhancedRoster) -> None:
        """
        Replace current filters with those the roster's features support.

        The assignment filter is always registered.
        """
        self.roster = roster
        self._filters.clear()
        self.add_filter(AssignmentFilter())
        for feature_id, filter_class in FEATURE_FILTERS.items():
            if roster.has_feature(feature_id):
                self.add_filter(filter_class())
