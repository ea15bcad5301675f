"""
CamperRoster: the enrollment export, one row per camper.
"""

from happycamper.core.rules.format_registry import GRADES, INCLUSIVE_NAMES, SESSIONS_PROGRAMS, FormatRegistry
from happycamper.observability.logger import get_logger

from .program_names import AdjustMode, ProgramNameAdjuster
from .roster import Roster
from .roster_header import RosterHeader
from .roster_warning import RosterWarning

logger = get_logger(__name__)


class CamperRoster(Roster):
    """Enrollment roster keyed by first name, last name and camp grade."""

    REQUIRED_HEADERS = (
        RosterHeader.FIRST_NAME.camper_roster_name,
        RosterHeader.LAST_NAME.camper_roster_name,
        RosterHeader.GRADE.camper_roster_name,
        RosterHeader.ESP.camper_roster_name,
        RosterHeader.PREFERRED_NAME.camper_roster_name,
    )

    FIELD_FORMATS = {
        RosterHeader.ESP.camper_roster_name: SESSIONS_PROGRAMS,
        RosterHeader.GRADE.camper_roster_name: GRADES,
        RosterHeader.PREFERRED_NAME.camper_roster_name: INCLUSIVE_NAMES,
        RosterHeader.LAST_NAME.camper_roster_name: INCLUSIVE_NAMES,
        RosterHeader.FIRST_NAME.camper_roster_name: INCLUSIVE_NAMES,
    }

    FORMATS = FormatRegistry(FIELD_FORMATS, REQUIRED_HEADERS)

    def validate(self, warning_manager) -> None:
        """
        Check required headers, then field formats for every camper.

        Args:
            warning_manager: Receives one BAD_DATA_FORMAT warning per failing value

        Raises:
            RosterException: If the table or any camper lacks a required header
        """
        self.validate_headers(self.get_all_headers())

        for camper in self.campers:
            self.validate_headers(camper.fields())
            for field, pattern in self.FORMATS.find_violations(camper.data):
                warning_manager.log_warning(RosterWarning.bad_data_format(camper.data, field, pattern))

    def normalize_programs(self) -> None:
        """Standardise program names in the sessions/programs column."""
        adjuster = ProgramNameAdjuster(AdjustMode.STANDARDIZE)
        esp_header = RosterHeader.ESP.camper_roster_name
        changed = 0
        for camper in self.campers:
            value = camper.get_value(esp_header)
            adjusted = adjuster.adjust(value)
            if adjusted != value:
                camper.set_value(esp_header, adjusted)
                changed += 1
        logger.debug("Program names normalized", extra={"changed": changed})
