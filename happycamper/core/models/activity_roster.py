"""
ActivityRoster: the activity export, one row per camper per round.
"""

from happycamper.core.rules.format_registry import GRADES_LIST, INCLUSIVE_NAMES, NON_EMPTY, PERIOD, FormatRegistry

from .camper import Camper
from .roster import Roster
from .roster_header import RosterHeader
from .roster_warning import RosterWarning


class ActivityRoster(Roster):
    """Activity assignment rows; several rows share one camper identity."""

    REQUIRED_HEADERS = (
        RosterHeader.ACTIVITY.activity_roster_name,
        RosterHeader.ROUND.activity_roster_name,
        RosterHeader.PREFERRED_NAME.activity_roster_name,
        RosterHeader.LAST_NAME.activity_roster_name,
        RosterHeader.FIRST_NAME.activity_roster_name,
        RosterHeader.CABIN.activity_roster_name,
        RosterHeader.GRADE.activity_roster_name,
    )

    FIELD_FORMATS = {
        RosterHeader.ROUND.activity_roster_name: PERIOD,
        RosterHeader.PREFERRED_NAME.activity_roster_name: INCLUSIVE_NAMES,
        RosterHeader.LAST_NAME.activity_roster_name: INCLUSIVE_NAMES,
        RosterHeader.GRADE.activity_roster_name: GRADES_LIST,
        RosterHeader.ACTIVITY.activity_roster_name: NON_EMPTY,
    }

    FORMATS = FormatRegistry(FIELD_FORMATS, REQUIRED_HEADERS)

    def validate(self, warning_manager) -> None:
        """
        Check required headers and field formats for every activity row.

        Raises:
            RosterException: If the table or any row lacks a required header
        """
        self.validate_headers(self.get_all_headers())

        for activity in self.campers:
            self.validate_headers(activity.fields())
            for field, pattern in self.FORMATS.find_violations(activity.data):
                warning_manager.log_warning(RosterWarning.bad_data_format(activity.data, field, pattern))

    def get_keyed_data(self) -> dict[str, list[Camper]]:
        """Group activity rows by camper identity, preserving row order."""
        keyed: dict[str, list[Camper]] = {}
        for activity in self.campers:
            keyed.setdefault(activity.camper_id, []).append(activity)
        return keyed
