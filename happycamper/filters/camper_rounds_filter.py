"""
CamperRoundsFilter - show campers with complete or incomplete schedules.
"""

from happycamper.core.models import Camper, RosterHeader
from happycamper.features.activity_feature import MAX_ROUNDS

from .base_filter import RosterFilter


class CamperRoundsFilter(RosterFilter):
    """A camper is complete when every round has an assignment."""

    filter_id = "camper-rounds"
    filter_name = "Camper Filter"

    def __init__(self, show_missing: bool = True, show_complete: bool = True):
        self.show_missing = show_missing
        self.show_complete = show_complete

    def apply(self, camper: Camper) -> bool:
        value = camper.get_value(RosterHeader.ROUND_COUNT.standard_name)
        if value is None:
            return True
        try:
            round_count = int(value)
        except ValueError:
            return True
        if round_count == MAX_ROUNDS:
            return self.show_complete
        return self.show_missing
