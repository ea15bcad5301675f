"""
Medical notes feature.
"""

from happycamper.core.models import EnhancedRoster, RosterHeader, RosterWarning
from happycamper.core.models.data_constants import DISPLAY_EMPTY, is_empty
from happycamper.observability.warning_manager import WarningManager

from .base_feature import RosterFeature

FEATURE_ID = "medical"


class MedicalFeature(RosterFeature):
    """Give every camper a medical notes value, using the placeholder when empty."""

    feature_id = FEATURE_ID
    feature_name = "Medical Notes"
    required_headers = (RosterHeader.MEDICAL_NOTES.camper_roster_name,)

    def apply_feature(self, roster: EnhancedRoster, warning_manager: WarningManager) -> None:
        header = RosterHeader.MEDICAL_NOTES.standard_name
        for camper in roster.campers:
            if not is_empty(camper.get_value(header)):
                continue
            camper.set_value(header, DISPLAY_EMPTY)
            if self.settings.warn_on_missing_medical:
                warning_manager.log_warning(RosterWarning.camper_missing_field(camper.data, header, self.feature_name))

        roster.enable_feature(self.feature_id)
