"""
Filters for the feature columns that are either filled in or empty.
"""

from happycamper.core.models import RosterHeader

from .base_filter import FieldPresenceFilter


class PreferenceFilter(FieldPresenceFilter):
    """Show campers with and/or without unrequested activities."""

    filter_id = "preference"
    filter_name = "Preference Filter"
    field_name = RosterHeader.UNREQUESTED_ACTIVITIES.standard_name


class SwimLevelFilter(FieldPresenceFilter):
    """Show campers with and/or without swim conflicts."""

    filter_id = "swimlevel"
    filter_name = "Swim Level Compatibility"
    field_name = RosterHeader.SWIMCONFLICTS.standard_name


class MedicalFilter(FieldPresenceFilter):
    """Show campers with and/or without medical notes."""

    filter_id = "medical"
    filter_name = "Medical Notes Filter"
    field_name = RosterHeader.MEDICAL_NOTES.standard_name
