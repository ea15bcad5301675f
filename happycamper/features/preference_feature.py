"""
Preference scoring feature.

Compares each camper's round assignments against their ranked activity
preferences and records a score, a population percentile, the assigned
activities they never asked for and the points earned per round.
"""

from happycamper.core.exceptions import FeatureNotEnabledError
from happycamper.core.models import Camper, EnhancedRoster, RosterHeader, RosterWarning
from happycamper.core.models.data_constants import DISPLAY_EMPTY, is_empty
from happycamper.core.rules.format_registry import PREFERENCE_LIST
from happycamper.observability.warning_manager import WarningManager

from .activity_feature import get_assignments
from .base_feature import RosterFeature
from .preference_scoring import (
    determine_max_points,
    determine_preference_score,
    determine_round_points,
    determine_unrequested_activities,
    format_percentage,
    parse_preferences,
    percentile_ranks,
)

FEATURE_ID = "preference"


class PreferenceFeature(RosterFeature):
    """Score how well each camper's assignments match their preferences."""

    feature_id = FEATURE_ID
    feature_name = "Preference Evaluation"
    required_headers = (
        RosterHeader.PREFERENCES.camper_roster_name,
        RosterHeader.ROUND_COUNT.standard_name,
    )
    added_headers = (
        RosterHeader.PREFERENCES.standard_name,
        RosterHeader.PREFERENCE_SCORE.standard_name,
        RosterHeader.PREFERENCE_PERCENTILE.standard_name,
        RosterHeader.UNREQUESTED_ACTIVITIES.standard_name,
        RosterHeader.SCORE_BY_ROUND.standard_name,
    )
    required_formats = {RosterHeader.PREFERENCES.standard_name: PREFERENCE_LIST}

    def apply_feature(self, roster: EnhancedRoster, warning_manager: WarningManager) -> None:
        self.add_headers(roster)
        scores: dict[str, float] = {}

        for camper in roster.campers:
            if is_empty(camper.get_value(RosterHeader.PREFERENCES.standard_name)):
                warning_manager.log_warning(
                    RosterWarning.camper_missing_field(
                        camper.data, RosterHeader.PREFERENCES.standard_name, self.feature_name
                    )
                )
                continue
            scores[camper.camper_id] = self.score_camper(camper)

        if scores:
            percentiles = percentile_ranks(scores)
            for camper in roster.campers:
                if camper.camper_id in percentiles:
                    camper.set_value(RosterHeader.PREFERENCE_PERCENTILE.standard_name, percentiles[camper.camper_id])

        roster.enable_feature(self.feature_id)

    def score_camper(self, camper: Camper) -> float:
        """
        Compute and store one camper's preference columns.

        Returns:
            Raw score in [0, 1]
        """
        exempt = self.settings.exempt_activities
        preferences = parse_preferences(camper.get_value(RosterHeader.PREFERENCES.standard_name))
        assignments = get_assignments(camper)

        unrequested = determine_unrequested_activities(preferences, assignments, exempt)
        round_points = determine_round_points(preferences, assignments, exempt)
        max_points = determine_max_points(_round_count(camper), assignments, exempt)
        score = determine_preference_score(round_points, max_points)

        camper.set_value(
            RosterHeader.UNREQUESTED_ACTIVITIES.standard_name,
            ", ".join(unrequested) if unrequested else DISPLAY_EMPTY,
        )
        camper.set_value(RosterHeader.SCORE_BY_ROUND.standard_name, ", ".join(str(p) for p in round_points))
        camper.set_value(RosterHeader.PREFERENCE_SCORE.standard_name, format_percentage(score * 100))
        return score


def _round_count(camper: Camper) -> int:
    value = camper.get_value(RosterHeader.ROUND_COUNT.standard_name)
    return 0 if is_empty(value) else int(value)


def get_preference_score(roster: EnhancedRoster, camper_id: str) -> str | None:
    if not roster.has_feature(FEATURE_ID):
        raise FeatureNotEnabledError(FEATURE_ID)
    return roster.get_value(camper_id, RosterHeader.PREFERENCE_SCORE.standard_name)
