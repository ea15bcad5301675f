"""
RosterWarning model: a recoverable issue found while importing or enriching rosters.

Warnings never stop the pipeline. They are collected by the WarningManager,
bucketed by type, and shown to the user as one batch once processing ends.
"""

import hashlib
import json
from collections.abc import Iterable, Mapping
from enum import Enum

from pydantic import BaseModel, Field

from .data_constants import DISPLAY_NO_DATA
from .roster_header import RosterHeader


class WarningType(Enum):
    """
    Warning categories with their user-facing explanation and the column
    headers used to display each warning's context rows.
    """

    OTHER = (
        "Generic warning",
        "In depth description if relevant",
        ("Single Header",),
    )
    UNMATCHED_ACTIVITY_SKIPPED = (
        "Some activity data had no match on the camper roster",
        "Those rows were not added to the roster.",
        ("Camper", "Grade", "Round Assignments"),
    )
    UNMATCHED_ACTIVITY_ADDED = (
        "Some activity data had no match on the camper roster",
        "Added unmatched data to the roster as new camper(s). Some columns may be missing",
        ("Camper", "Grade", "Round Assignments"),
    )
    DUPLICATE_ACTIVITY = (
        "Duplicate activity/activities found (and skipped)",
        "This shouldn't happen for an exported roster - double check your data",
        ("Camper", "Round", "First Assignment", "Conflicting Assignment"),
    )
    BAD_DATA_FORMAT = (
        "Some data didn't match the expected format for its column",
        "Processing can continue, but some data might look weird",
        ("Camper", "Column", "Value", "Format (RegEx)"),
    )
    PROGRAM_PARSING_FAILURE = (
        "Failed to find program(s) for the selected session",
        "Processing can continue, but the program filter will be less helpful.",
        ("Camper", "Value", "Selected Session"),
    )
    MISSING_FEATURE_HEADER = (
        "Input file(s) lacked header(s) required by selected feature(s)",
        "The feature(s) will be skipped this time.",
        ("Required Header", "Required For Feature:"),
    )
    CAMPER_MISSING_FIELD = (
        "Camper data was missing a field required by a selected feature",
        "The feature can continue, but must skip this camper.",
        ("Camper", "Missing Field", "Required For Feature:"),
    )
    UNKNOWN_SWIM_ACTIVITY_FLAGGED = (
        "Swim level feature found activities not defined in the activity requirements list",
        "Those activities are flagged as problematic, but may be fine",
        ("Activity",),
    )
    UNKNOWN_SWIM_ACTIVITY_IGNORED = (
        "Swim level feature found activities not defined in the activity requirements list",
        "If a camper's swim level contradicts their assignment to that activity, it won't be caught",
        ("Activity",),
    )
    UNKNOWN_SWIM_LEVEL = (
        "Swim level(s) not defined in the swim level list",
        "Check the settings to ensure all valid swim levels are included",
        ("Camper", "Swim Level", "Accepted Levels"),
    )

    def __init__(self, general_explanation: str, secondary_explanation: str, display_headers: tuple[str, ...]):
        self.general_explanation = general_explanation
        self.secondary_explanation = secondary_explanation
        self.display_headers = display_headers


UNKNOWN = "Unknown"


def build_name_string(data_row: Mapping[str, str | None]) -> str:
    """
    Build a human-readable camper name from an enrollment or activity row.

    Enrollment field names take priority over activity field names. The
    preferred name is quoted when it differs from the first name.

    Args:
        data_row: Row payload

    Returns:
        Display name such as "Sam Smith" or "Samuel 'Sam' Smith"
    """
    first_name = _lookup(data_row, RosterHeader.FIRST_NAME, UNKNOWN)
    preferred_name = _lookup(data_row, RosterHeader.PREFERRED_NAME, first_name)
    last_name = _lookup(data_row, RosterHeader.LAST_NAME, UNKNOWN)

    if first_name == UNKNOWN and last_name == UNKNOWN:
        return f"Data row {row_checksum(data_row)}"

    if first_name == preferred_name:
        return f"{preferred_name} {last_name}"
    return f"{first_name} '{preferred_name}' {last_name}"


def row_checksum(data_row: Mapping[str, str | None]) -> int:
    """Stable numeric label for a row; the same payload gives the same number in every process."""
    data_str = json.dumps(dict(data_row), sort_keys=True)
    return int(hashlib.md5(data_str.encode()).hexdigest()[:8], 16)


def _lookup(data_row: Mapping[str, str | None], header: RosterHeader, default: str) -> str:
    for name in (header.camper_roster_name, header.activity_roster_name):
        if name is not None and data_row.get(name) is not None:
            return data_row[name]
    return default


class RosterWarning(BaseModel):
    """
    A single recoverable issue.

    Attributes:
        warning_type: Category of the warning
        display_data: Context cells, aligned with warning_type.display_headers
    """

    warning_type: WarningType
    display_data: list[str] = Field(default_factory=list)

    @property
    def explanation(self) -> str:
        return self.warning_type.general_explanation

    @classmethod
    def unmatched_activity_added(cls, data_row: Mapping[str, str | None]) -> "RosterWarning":
        return cls(
            warning_type=WarningType.UNMATCHED_ACTIVITY_ADDED,
            display_data=[
                build_name_string(data_row),
                data_row.get(RosterHeader.GRADE.camper_roster_name) or UNKNOWN,
                data_row.get(RosterHeader.ROUND_COUNT.standard_name) or UNKNOWN,
            ],
        )

    @classmethod
    def duplicate_activity(
        cls,
        data_row: Mapping[str, str | None],
        round_header: str,
        kept_assignment: str,
        discarded_assignment: str | None,
    ) -> "RosterWarning":
        return cls(
            warning_type=WarningType.DUPLICATE_ACTIVITY,
            display_data=[
                build_name_string(data_row),
                round_header,
                kept_assignment,
                discarded_assignment or DISPLAY_NO_DATA,
            ],
        )

    @classmethod
    def bad_data_format(cls, data_row: Mapping[str, str | None], column: str, expected_format: str) -> "RosterWarning":
        value = data_row.get(column)
        return cls(
            warning_type=WarningType.BAD_DATA_FORMAT,
            display_data=[
                build_name_string(data_row),
                column,
                value if value is not None else DISPLAY_NO_DATA,
                expected_format,
            ],
        )

    @classmethod
    def program_parsing_failure(cls, data_row: Mapping[str, str | None], current_session: str) -> "RosterWarning":
        esp_value = data_row.get(RosterHeader.ESP.camper_roster_name)
        return cls(
            warning_type=WarningType.PROGRAM_PARSING_FAILURE,
            display_data=[
                build_name_string(data_row),
                esp_value if esp_value is not None else DISPLAY_NO_DATA,
                current_session,
            ],
        )

    @classmethod
    def missing_feature_header(cls, header: str, feature_name: str) -> "RosterWarning":
        return cls(warning_type=WarningType.MISSING_FEATURE_HEADER, display_data=[header, feature_name])

    @classmethod
    def camper_missing_field(
        cls, data_row: Mapping[str, str | None], missing_field: str, feature_name: str
    ) -> "RosterWarning":
        return cls(
            warning_type=WarningType.CAMPER_MISSING_FIELD,
            display_data=[build_name_string(data_row), missing_field, feature_name],
        )

    @classmethod
    def unknown_swim_activity(cls, activity: str, flagged: bool) -> "RosterWarning":
        warning_type = (
            WarningType.UNKNOWN_SWIM_ACTIVITY_FLAGGED if flagged else WarningType.UNKNOWN_SWIM_ACTIVITY_IGNORED
        )
        return cls(warning_type=warning_type, display_data=[activity])

    @classmethod
    def unknown_swim_level(
        cls, data_row: Mapping[str, str | None], swim_level: str, accepted_levels: Iterable[str]
    ) -> "RosterWarning":
        return cls(
            warning_type=WarningType.UNKNOWN_SWIM_LEVEL,
            display_data=[build_name_string(data_row), swim_level, ", ".join(accepted_levels)],
        )
