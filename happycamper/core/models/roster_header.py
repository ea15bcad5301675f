"""
Known field registry.

RosterHeader lists every field the roster system understands. Member order is
the canonical display order: identity fields first, then activity and round
fields, then the analytical columns added by features. Each member also
records the name the field goes by in the enrollment export and in the
activity export, which is how the two source schemas are translated into
the enriched schema.
"""

from enum import Enum


class RosterKind(str, Enum):
    """Which schema a header name should be resolved against."""

    ENROLLMENT = "enrollment"
    ACTIVITY = "activity"
    ENHANCED = "enhanced"


ROUND_BASE = "Round "


class RosterHeader(Enum):
    """
    Every field known to the roster system.

    Value tuple: (standard_name, default_visibility, camper_roster_name,
    activity_roster_name, input_only)
    """

    # Identity columns, present on both source rosters
    FIRST_NAME = ("First Name", False, "First Name", "First Name", False)
    PREFERRED_NAME = ("Preferred Name", True, "Preferred Name", "Preferred Name", False)
    LAST_NAME = ("Last Name", True, "Last Name", "Last Name", False)
    GRADE = ("Grade", False, "Camp Grade", "Grade", False)
    ESP = ("Enrolled Sessions/Programs", False, "Enrolled Sessions/Programs", None, False)
    PROGRAM = ("Program", True, None, None, False)

    # Activity roster input columns, folded into round slots
    ACTIVITY = ("Activity", True, None, "Activity", True)
    ROUND = ("Period", True, None, "Period", True)

    # Activity columns added by the activity feature
    CABIN = ("Cabin", True, None, "Cabin", False)
    ROUND_1 = ("Round 1", True, None, None, False)
    ROUND_2 = ("Round 2", True, None, None, False)
    ROUND_3 = ("Round 3", True, None, None, False)
    ROUND_COUNT = ("Rounds Assigned", False, None, None, False)

    # Preference feature
    PREFERENCES = ("Activity Preferences", False, "Activity Preferences", None, False)
    PREFERENCE_SCORE = ("Preference Score", True, None, None, False)
    PREFERENCE_PERCENTILE = ("Preference Percentile", False, None, None, False)
    UNREQUESTED_ACTIVITIES = ("Unrequested Activities", True, None, None, False)
    SCORE_BY_ROUND = ("Preference by Round", False, None, None, False)

    # Medical feature
    MEDICAL_NOTES = ("Medical Notes", True, "Medical Notes", "Medical Notes", False)

    # Swim level feature
    SWIMCOLOR = ("SwimColor", True, "SwimColor", None, False)
    SWIMCONFLICTS = ("Swim Conflicts", True, None, None, False)

    def __init__(
        self,
        standard_name: str,
        default_visibility: bool,
        camper_roster_name: str | None,
        activity_roster_name: str | None,
        input_only: bool,
    ):
        self.standard_name = standard_name
        self.default_visibility = default_visibility
        self.camper_roster_name = camper_roster_name
        self.activity_roster_name = activity_roster_name
        self.input_only = input_only

    @property
    def does_numeric_sort(self) -> bool:
        return self in (
            RosterHeader.GRADE,
            RosterHeader.PREFERENCE_PERCENTILE,
            RosterHeader.PREFERENCE_SCORE,
        )

    @classmethod
    def determine_header_type(cls, header_text: str) -> "RosterHeader | None":
        """
        Resolve a header name from any schema to its known field.

        Standard names take priority, then enrollment names, then activity
        names.

        Args:
            header_text: Header name as it appears in a roster

        Returns:
            Matching RosterHeader, or None for custom headers
        """
        for attribute in ("standard_name", "camper_roster_name", "activity_roster_name"):
            for header in cls:
                name = getattr(header, attribute)
                if name is not None and name == header_text:
                    return header
        return None

    @classmethod
    def determine_header_type_for(cls, header_text: str, kind: RosterKind) -> "RosterHeader | None":
        """Resolve a header name against one specific schema only."""
        attribute = {
            RosterKind.ENHANCED: "standard_name",
            RosterKind.ENROLLMENT: "camper_roster_name",
            RosterKind.ACTIVITY: "activity_roster_name",
        }[kind]
        for header in cls:
            name = getattr(header, attribute)
            if name is not None and name == header_text:
                return header
        return None

    @classmethod
    def sorted_headers(cls, headers: list["RosterHeader"]) -> list["RosterHeader"]:
        return [header for header in cls if header in headers]

    @staticmethod
    def build_round_string(round_number: int | str) -> str:
        return f"{ROUND_BASE}{round_number}"

    @staticmethod
    def is_round(header_name: str) -> bool:
        return header_name.startswith(ROUND_BASE)

    @classmethod
    def order_header_names(cls, header_names: list[str]) -> list[str]:
        """
        Put header names into canonical display order.

        Known fields come first in enumeration order; custom headers follow
        in their original order.
        """
        ordered = [header.standard_name for header in cls if header.standard_name in header_names]
        ordered.extend(name for name in header_names if name not in ordered)
        return ordered

    @classmethod
    def update_header_map_order(cls, header_map: dict[str, int]) -> None:
        """Reassign contiguous positions to a header map in canonical order (in place)."""
        ordered = cls.order_header_names(list(header_map.keys()))
        header_map.clear()
        for position, name in enumerate(ordered):
            header_map[name] = position
