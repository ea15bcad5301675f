"""
AssignmentFilter - show campers by how many rounds they were assigned.
"""

from happycamper.core.models import Camper, RosterHeader
from happycamper.features.activity_feature import MAX_ROUNDS

from .base_filter import RosterFilter


class AssignmentFilter(RosterFilter):
    """
    Hide campers whose "Rounds Assigned" count is switched off.

    Every count from 0 to MAX_ROUNDS starts visible. Campers with no count
    or an unparsable count always pass.
    """

    filter_id = "assignment"
    filter_name = "Assignment Filter"

    def __init__(self):
        self.round_visibility: dict[int, bool] = {count: True for count in range(MAX_ROUNDS + 1)}

    def apply(self, camper: Camper) -> bool:
        value = camper.get_value(RosterHeader.ROUND_COUNT.standard_name)
        if value is None:
            return True
        try:
            return self.round_visibility.get(int(value), True)
        except ValueError:
            return True

    def set_round_visible(self, round_count: int, visible: bool) -> None:
        self.round_visibility[round_count] = visible

    def is_round_visible(self, round_count: int) -> bool:
        return self.round_visibility.get(round_count, True)
