"""
Unit tests for preference parsing, scoring and the preference feature
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from happycamper.core.exceptions import FeatureNotEnabledError
from happycamper.core.models import PipelineSettings, WarningType
from happycamper.features.preference_feature import PreferenceFeature, get_preference_score
from happycamper.features.preference_scoring import (
    determine_max_points,
    determine_preference_score,
    determine_round_points,
    determine_unrequested_activities,
    format_percentage,
    parse_preferences,
    percentile_ranks,
    score_activity,
)

pytestmark = pytest.mark.unit

EXEMPT = ["Swimming", "Horseback Riding"]


class TestParsePreferences:
    """Tests for splitting preference lists"""

    def test_single(self):
        assert parse_preferences("Archery") == ["Archery"]

    def test_trailing_and(self):
        assert parse_preferences("Archery, Drama and Sports") == ["Archery", "Drama", "Sports"]

    def test_two_items_joined_by_and(self):
        assert parse_preferences("Archery and Drama") == ["Archery", "Drama"]

    def test_and_inside_name_not_last(self):
        assert parse_preferences("Arts and Crafts, Drama") == ["Arts and Crafts", "Drama"]


class TestScoringHelpers:
    """Tests for the point and score arithmetic"""

    def test_score_activity_by_rank(self):
        preferences = ["Archery", "Drama", "Sports"]
        assert score_activity(preferences, "Archery") == 10
        assert score_activity(preferences, "Sports") == 8
        assert score_activity(preferences, "Sailing") == 0

    def test_exempt_rounds_score_zero(self):
        points = determine_round_points(["Swimming", "Archery"], ["Swimming", "Archery", None], EXEMPT)
        assert points == [0, 9, 0]

    @pytest.mark.parametrize("round_count,expected", [(0, 0), (1, 10), (2, 19), (3, 27)])
    def test_max_points(self, round_count, expected):
        assert determine_max_points(round_count, ["A", "B", "C"], EXEMPT) == expected

    def test_max_points_skip_exempt(self):
        assert determine_max_points(3, ["Archery", "Swimming", "Drama"], EXEMPT) == 19

    def test_score_with_nothing_achievable(self):
        assert determine_preference_score([0, 0, 0], 0) == 1.0

    def test_perfect_and_zero_scores(self):
        assert determine_preference_score([10, 9, 8], 27) == 1.0
        assert determine_preference_score([0, 0, 0], 27) == 0.0

    def test_unrequested(self):
        unrequested = determine_unrequested_activities(
            ["Archery"], ["Sailing", "Archery", "Swimming"], EXEMPT
        )
        assert unrequested == ["Sailing"]

    @pytest.mark.parametrize("value,expected", [(62.5, "63"), (33.333, "33"), (100.0, "100"), (0.0, "0"), (0.5, "1")])
    def test_format_percentage_rounds_half_up(self, value, expected):
        assert format_percentage(value) == expected


class TestPercentileRanks:
    """Tests for inclusive percentile ranks"""

    def test_ties_share_percentile(self):
        ranks = percentile_ranks({"a": 0.5, "b": 0.5, "c": 1.0, "d": 0.1})
        assert ranks == {"a": "75", "b": "75", "c": "100", "d": "25"}

    @given(st.dictionaries(st.text(min_size=1, max_size=5), st.floats(0, 1), min_size=1, max_size=30))
    def test_higher_score_never_lower_percentile(self, scores):
        ranks = percentile_ranks(scores)
        top = max(scores.values())
        for camper_id, score in scores.items():
            for other_id, other_score in scores.items():
                if score > other_score:
                    assert int(ranks[camper_id]) >= int(ranks[other_id])
            if score == top:
                assert ranks[camper_id] == "100"


@pytest.fixture
def scored_roster(make_roster):
    return make_roster([
        {
            "First Name": "Alice", "Last Name": "Smith", "Camp Grade": "5th",
            "Activity Preferences": "Archery, Sailing, Drama and Sports",
            "Round 1": "Archery", "Round 2": "Sailing", "Round 3": "Swimming",
            "Rounds Assigned": "3",
        },
        {
            "First Name": "Ben", "Last Name": "Jones", "Camp Grade": "6th",
            "Activity Preferences": "Archery, Drama and Sports",
            "Round 1": "Sailing", "Round 2": "Archery", "Round 3": "Sports",
            "Rounds Assigned": "3",
        },
        {
            "First Name": "Dan", "Last Name": "Park", "Camp Grade": "4th",
            "Activity Preferences": None,
            "Rounds Assigned": "0",
        },
    ])


class TestPreferenceFeature:
    """Tests for the preference feature on a roster"""

    def test_pre_validate_missing_headers(self, make_roster, warning_manager):
        roster = make_roster([{"First Name": "Alice"}])

        assert not PreferenceFeature().pre_validate(roster, warning_manager)

        warnings = warning_manager.get_warning_log()[WarningType.MISSING_FEATURE_HEADER]
        assert [w.display_data[0] for w in warnings] == ["Activity Preferences", "Rounds Assigned"]

    def test_scores_and_columns(self, scored_roster, warning_manager):
        PreferenceFeature().apply_feature(scored_roster, warning_manager)

        alice = scored_roster.get_camper_by_id("alice_smith_5th")
        assert alice.get_value("Preference Score") == "100"
        assert alice.get_value("Preference by Round") == "10, 9, 0"
        assert alice.get_value("Unrequested Activities") == " - "
        assert alice.get_value("Preference Percentile") == "100"

        ben = scored_roster.get_camper_by_id("ben_jones_6th")
        assert ben.get_value("Preference Score") == "67"
        assert ben.get_value("Preference by Round") == "0, 10, 8"
        assert ben.get_value("Unrequested Activities") == "Sailing"
        assert ben.get_value("Preference Percentile") == "50"

    def test_camper_without_preferences_skipped(self, scored_roster, warning_manager):
        PreferenceFeature().apply_feature(scored_roster, warning_manager)

        dan = scored_roster.get_camper_by_id("dan_park_4th")
        assert dan.get_value("Preference Score") is None
        assert dan.get_value("Preference Percentile") is None
        [warning] = warning_manager.get_warning_log()[WarningType.CAMPER_MISSING_FIELD]
        assert warning.display_data == ["Dan Park", "Activity Preferences", "Preference Evaluation"]

    def test_custom_exempt_activities(self, scored_roster, warning_manager):
        feature = PreferenceFeature(PipelineSettings(exempt_activities=["Sailing"]))
        feature.apply_feature(scored_roster, warning_manager)

        ben = scored_roster.get_camper_by_id("ben_jones_6th")
        assert ben.get_value("Preference by Round") == "0, 10, 8"
        assert ben.get_value("Preference Score") == "95"
        assert ben.get_value("Unrequested Activities") == " - "

    def test_lookup_requires_feature(self, scored_roster, warning_manager):
        with pytest.raises(FeatureNotEnabledError):
            get_preference_score(scored_roster, "alice_smith_5th")

        PreferenceFeature().apply_feature(scored_roster, warning_manager)

        assert get_preference_score(scored_roster, "alice_smith_5th") == "100"
