"""
Activity consolidation.

Folds the activity export (one row per camper per round) into the enriched
roster: one "Round N" column per round plus a "Rounds Assigned" count.
"""

from collections.abc import Mapping

from happycamper.core.exceptions import FeatureNotEnabledError
from happycamper.core.models import (
    ActivityRoster,
    Camper,
    EnhancedRoster,
    RosterHeader,
    RosterWarning,
    generate_camper_id_from_activity,
)
from happycamper.core.models.data_constants import is_empty
from happycamper.observability.logger import get_logger
from happycamper.observability.warning_manager import WarningManager

from .base_feature import ActivityRosterFeature

logger = get_logger(__name__)

FEATURE_ID = "activity"
MAX_ROUNDS = 3
ROUND_HEADERS = tuple(RosterHeader.build_round_string(n) for n in range(1, MAX_ROUNDS + 1))
ROUNDS_ASSIGNED_HEADER = RosterHeader.ROUND_COUNT.standard_name

# Activity-row field -> enriched-roster field, copied first-seen-wins
IDENTITY_FIELDS = (
    (RosterHeader.CABIN.activity_roster_name, RosterHeader.CABIN.standard_name),
    (RosterHeader.PREFERRED_NAME.activity_roster_name, RosterHeader.PREFERRED_NAME.camper_roster_name),
    (RosterHeader.FIRST_NAME.activity_roster_name, RosterHeader.FIRST_NAME.camper_roster_name),
    (RosterHeader.LAST_NAME.activity_roster_name, RosterHeader.LAST_NAME.camper_roster_name),
    (RosterHeader.GRADE.activity_roster_name, RosterHeader.GRADE.camper_roster_name),
)


class ActivityFeature(ActivityRosterFeature):
    """
    Merge per-round activity rows onto campers.

    The enriched roster cannot be built without this feature, so a failed
    pre-validation aborts the pipeline.
    """

    feature_id = FEATURE_ID
    feature_name = "Activity Assignments"
    added_headers = (*ROUND_HEADERS, ROUNDS_ASSIGNED_HEADER)
    load_bearing = True

    def apply_feature(
        self,
        roster: EnhancedRoster,
        activity_roster: ActivityRoster,
        warning_manager: WarningManager,
    ) -> None:
        self.add_headers(roster)

        merged = self.arrange_activities_by_camper(
            [activity.data for activity in activity_roster.campers], warning_manager
        )
        self.apply_activity_data(roster, merged, warning_manager)
        self.update_assignment_counts(roster)

        roster.enable_feature(self.feature_id)

    def arrange_activities_by_camper(
        self,
        rows: list[Mapping[str, str | None]],
        warning_manager: WarningManager,
    ) -> dict[str, dict[str, str | None]]:
        """
        Group activity rows by camper identity.

        Rows with an invalid round are skipped with a BAD_DATA_FORMAT warning.
        Identity fields and round assignments are first-seen-wins; a second
        assignment for the same round logs DUPLICATE_ACTIVITY.

        Returns:
            Camper id to merged row (identity fields plus "Round N" slots)
        """
        merged: dict[str, dict[str, str | None]] = {}
        round_field = RosterHeader.ROUND.activity_roster_name
        activity_field = RosterHeader.ACTIVITY.activity_roster_name

        for row in rows:
            round_value = row.get(round_field)
            if not is_valid_round(round_value):
                warning_manager.log_warning(
                    RosterWarning.bad_data_format(row, round_field, f"Must be a number between 1 and {MAX_ROUNDS}")
                )
                continue

            camper_id = generate_camper_id_from_activity(row)
            camper_activities = merged.setdefault(camper_id, {})

            for source_field, target_field in IDENTITY_FIELDS:
                camper_activities.setdefault(target_field, row.get(source_field))

            round_header = RosterHeader.build_round_string(int(round_value))
            new_assignment = row.get(activity_field)
            if round_header in camper_activities:
                warning_manager.log_warning(
                    RosterWarning.duplicate_activity(
                        row, round_header, camper_activities[round_header], new_assignment
                    )
                )
            else:
                camper_activities[round_header] = new_assignment

        return merged

    def apply_activity_data(
        self,
        roster: EnhancedRoster,
        merged: dict[str, dict[str, str | None]],
        warning_manager: WarningManager,
    ) -> None:
        """Copy merged activity data onto matching campers; handle orphans."""
        campers_by_id: dict[str, Camper] = {}
        for camper in roster.campers:
            campers_by_id.setdefault(camper.camper_id, camper)
        orphans_dropped = 0

        for camper_id, activity_data in merged.items():
            roster.add_headers(activity_data.keys())
            camper = campers_by_id.get(camper_id)

            if camper is not None:
                for header, value in activity_data.items():
                    camper.set_value(header, value)
                continue

            activity_data[ROUNDS_ASSIGNED_HEADER] = str(tally_rounds(activity_data))
            if self.settings.include_orphans:
                roster.add_camper(Camper(activity_data))
                warning_manager.log_warning(RosterWarning.unmatched_activity_added(activity_data))
            else:
                orphans_dropped += 1

        if orphans_dropped:
            logger.debug("Unmatched activity campers dropped", extra={"count": orphans_dropped})

    def update_assignment_counts(self, roster: EnhancedRoster) -> None:
        for camper in roster.campers:
            camper.set_value(ROUNDS_ASSIGNED_HEADER, str(tally_rounds(camper.data)))


def is_valid_round(round_value: str | None) -> bool:
    if round_value is None:
        return False
    try:
        round_number = int(round_value)
    except ValueError:
        return False
    return 1 <= round_number <= MAX_ROUNDS


def tally_rounds(data: Mapping[str, str | None]) -> int:
    """Count non-empty values in the three round slots."""
    return sum(1 for header in ROUND_HEADERS if not is_empty(data.get(header)))


def _check_period(period: int) -> None:
    if period < 1 or period > MAX_ROUNDS:
        raise ValueError(f"Period must be between 1 and {MAX_ROUNDS}")


def get_activity_for_camper(camper: Camper, period: int) -> str | None:
    """
    Get a camper's assignment for one round.

    Raises:
        ValueError: If period is outside 1..MAX_ROUNDS
    """
    _check_period(period)
    return camper.get_value(RosterHeader.build_round_string(period))


def get_activity_for_roster(roster: EnhancedRoster, camper_id: str, period: int) -> str | None:
    """
    Get an assignment by camper id.

    Raises:
        FeatureNotEnabledError: If the activity feature was not applied
        ValueError: If period is outside 1..MAX_ROUNDS
    """
    if not roster.has_feature(FEATURE_ID):
        raise FeatureNotEnabledError(FEATURE_ID)
    _check_period(period)
    return roster.get_value(camper_id, RosterHeader.build_round_string(period))


def get_assignments(camper: Camper) -> list[str | None]:
    return [get_activity_for_camper(camper, period) for period in range(1, MAX_ROUNDS + 1)]


def get_assignment_count(roster: EnhancedRoster, camper_id: str) -> int:
    """Rounds assigned to a camper; 0 when missing or unparsable."""
    if not roster.has_feature(FEATURE_ID):
        raise FeatureNotEnabledError(FEATURE_ID)
    value = roster.get_value(camper_id, ROUNDS_ASSIGNED_HEADER)
    if value is None:
        return 0
    try:
        return int(value)
    except ValueError:
        return 0
