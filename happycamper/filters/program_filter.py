"""
SortedProgramFilter - show or hide campers by program.
"""

from happycamper.core.models import Camper, EnhancedRoster, RosterHeader
from happycamper.features.program_feature import get_programs_by_round_count

from .base_filter import RosterFilter


class SortedProgramFilter(RosterFilter):
    """
    Per-program visibility. Programs not yet seen are visible.

    Programs are offered grouped by their campers' round count
    (see get_programs_by_round_count).
    """

    filter_id = "program-list"
    filter_name = "Programs Filter"

    def __init__(self):
        self.program_visibility: dict[str | None, bool] = {}

    def apply(self, camper: Camper) -> bool:
        program = camper.get_value(RosterHeader.PROGRAM.standard_name)
        return self.program_visibility.setdefault(program, True)

    def set_program_visible(self, program: str, visible: bool) -> None:
        self.program_visibility[program] = visible

    def is_program_visible(self, program: str) -> bool:
        return self.program_visibility.get(program, True)

    def set_round_count_group_visible(self, roster: EnhancedRoster, round_count: int, visible: bool) -> None:
        """Toggle every program in one round-count group."""
        for program in get_programs_by_round_count(roster).get(round_count, []):
            self.set_program_visible(program, visible)
