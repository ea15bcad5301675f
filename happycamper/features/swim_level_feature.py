"""
Swim safety feature.

Flags assigned activities that need a higher swim level than the camper has.
"""

from happycamper.core.models import Camper, EnhancedRoster, RosterHeader, RosterWarning
from happycamper.core.models.data_constants import DISPLAY_EMPTY, is_empty
from happycamper.observability.warning_manager import WarningManager

from .activity_feature import get_assignments
from .base_feature import RosterFeature

FEATURE_ID = "swimlevel"


class SwimLevelFeature(RosterFeature):
    """
    Compare each camper's swim level against their activities' requirements.

    Requirement and level tables come from PipelineSettings. Activities with
    no requirement entry are collected and reported once per run.
    """

    feature_id = FEATURE_ID
    feature_name = "Swim Level Validation"
    required_headers = (RosterHeader.SWIMCOLOR.camper_roster_name,)
    added_headers = (RosterHeader.SWIMCONFLICTS.standard_name,)

    def __init__(self, settings=None):
        super().__init__(settings)
        self.unknown_activities: set[str] = set()

    def apply_feature(self, roster: EnhancedRoster, warning_manager: WarningManager) -> None:
        self.add_headers(roster)
        self.unknown_activities = set()

        for camper in roster.campers:
            if is_empty(camper.get_value(RosterHeader.SWIMCOLOR.camper_roster_name)):
                warning_manager.log_warning(
                    RosterWarning.camper_missing_field(
                        camper.data, RosterHeader.SWIMCOLOR.standard_name, self.feature_name
                    )
                )
                continue
            self.check_camper(camper, warning_manager)

        if self.settings.require_all_swim_definitions:
            for activity in sorted(self.unknown_activities):
                warning_manager.log_warning(
                    RosterWarning.unknown_swim_activity(activity, self.settings.flag_unknown_swim_activities)
                )

        roster.enable_feature(self.feature_id)

    def check_camper(self, camper: Camper, warning_manager: WarningManager) -> None:
        swim_level_name = camper.get_value(RosterHeader.SWIMCOLOR.camper_roster_name)
        swim_level = self.settings.swim_level_names.get(swim_level_name)
        if swim_level is None:
            warning_manager.log_warning(
                RosterWarning.unknown_swim_level(camper.data, swim_level_name, self.settings.swim_level_names.keys())
            )
            camper.set_value(RosterHeader.SWIMCONFLICTS.standard_name, DISPLAY_EMPTY)
            return

        conflicts = [
            activity
            for activity in get_assignments(camper)
            if not is_empty(activity) and not self.approve_activity(activity, swim_level)
        ]
        camper.set_value(
            RosterHeader.SWIMCONFLICTS.standard_name,
            ", ".join(conflicts) if conflicts else DISPLAY_EMPTY,
        )

    def approve_activity(self, activity: str, swim_level: int) -> bool:
        """
        Check one activity against a swim level.

        Unknown activities are recorded when all definitions are required,
        and rejected only if unknown activities are also flagged.
        """
        requirements = self.settings.swim_activity_requirements
        if activity in requirements:
            return requirements[activity] <= swim_level
        if not self.settings.require_all_swim_definitions:
            return True
        self.unknown_activities.add(activity)
        return not self.settings.flag_unknown_swim_activities
