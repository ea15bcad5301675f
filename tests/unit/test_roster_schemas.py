"""
Unit tests for source roster validation, field formats and program names.
"""

import re

import pytest

from happycamper.core.exceptions import RosterException
from happycamper.core.models import (
    ActivityRoster,
    Camper,
    CamperRoster,
    WarningType,
    generate_camper_id_from_activity,
)
from happycamper.core.models.program_names import AdjustMode, ProgramNameAdjuster, ReplacementPair
from happycamper.core.rules.format_registry import (
    GRADES,
    PREFERENCE_LIST,
    SESSIONS_PROGRAMS,
    FormatRegistry,
)
from happycamper.core.validators import RegexValidator, RequiredHeaderValidator, ValidationError

pytestmark = pytest.mark.unit


def enrollment_row(**overrides):
    row = {
        "First Name": "Alice",
        "Last Name": "Smith",
        "Preferred Name": "Ali",
        "Camp Grade": "5th",
        "Enrolled Sessions/Programs": "Session 2/Traditional Camp",
    }
    row.update(overrides)
    return row


def activity_row(**overrides):
    row = {
        "First Name": "Alice",
        "Last Name": "Smith",
        "Preferred Name": "Ali",
        "Grade": "5th",
        "Cabin": "Cedar",
        "Activity": "Archery",
        "Period": "1",
    }
    row.update(overrides)
    return row


def build(roster_class, rows):
    roster = roster_class()
    roster.add_headers(rows[0].keys())
    for row in rows:
        roster.add_camper(Camper(row))
    return roster


class TestRegexValidator:
    """Tests for RegexValidator"""

    def test_full_match_required(self):
        validator = RegexValidator("Camp Grade", {"pattern": GRADES})
        validator.validate("5th", {})
        with pytest.raises(ValidationError, match="does not match pattern"):
            validator.validate("5th grade", {})

    def test_none_is_skipped(self):
        validator = RegexValidator("Camp Grade", {"pattern": GRADES})
        validator.validate(None, {})  # Should not raise

    def test_missing_pattern_rejected(self):
        with pytest.raises(ValueError, match="requires 'pattern'"):
            RegexValidator("Camp Grade", {})

    def test_invalid_pattern_rejected(self):
        with pytest.raises(ValueError, match="Invalid regex pattern"):
            RegexValidator("Camp Grade", {"pattern": "("})

    def test_compiled_pattern_accepted(self):
        validator = RegexValidator("Period", {"pattern": re.compile(r"[123]")})
        assert validator.rule_type == "regex"
        validator.validate("2", {})


class TestRequiredHeaderValidator:
    """Tests for RequiredHeaderValidator"""

    def test_missing_headers_listed(self):
        validator = RequiredHeaderValidator(parameters={"headers": ["Cabin", "Period"]})
        assert validator.missing_headers({"Cabin": None}) == ["Period"]

    def test_validate_raises(self):
        validator = RequiredHeaderValidator(parameters={"headers": ["Cabin"]})
        with pytest.raises(ValidationError, match="Missing headers: Cabin") as exc_info:
            validator.validate(None, {})
        assert exc_info.value.rule_name == "required_header"


class TestFormatRegistry:
    """Tests for FormatRegistry"""

    def test_violations_reported_per_field(self):
        registry = FormatRegistry({"Camp Grade": GRADES, "Period": r"^(1|2|3)$"})
        violations = registry.find_violations({"Camp Grade": "Fifth", "Period": "2"})
        assert violations == [("Camp Grade", GRADES)]

    def test_missing_headers(self):
        registry = FormatRegistry({}, ["Cabin", "Grade"])
        assert registry.missing_headers({"Grade": "5th"}) == ["Cabin"]

    def test_unknown_rule_type_rejected(self):
        registry = FormatRegistry({})
        with pytest.raises(ValueError, match="Unknown rule type"):
            registry._build_validator({"rule_type": "range", "field_name": "Grade"})

    @pytest.mark.parametrize(
        "value",
        [
            "Session 2/Traditional Camp",
            "Session 2A/Traditional Camp and Session 4/Backpacking",
            "Session 1-2/Counselor-In-Training",
            "Summer Family Camp Weekend",
        ],
    )
    def test_sessions_programs_pattern_accepts(self, value):
        assert re.fullmatch(SESSIONS_PROGRAMS, value)

    @pytest.mark.parametrize("value", ["Session 9/Traditional Camp", "Traditional Camp", "Session 2/"])
    def test_sessions_programs_pattern_rejects(self, value):
        assert not re.fullmatch(SESSIONS_PROGRAMS, value)

    def test_preference_list_pattern(self):
        assert re.fullmatch(PREFERENCE_LIST, "Archery, Sailing and Drama")
        assert not re.fullmatch(PREFERENCE_LIST, "Archery,,Sailing")


class TestCamperRoster:
    """Tests for enrollment roster validation"""

    def test_valid_roster_logs_nothing(self, warning_manager):
        roster = build(CamperRoster, [enrollment_row()])
        roster.validate(warning_manager)
        assert not warning_manager.has_warnings()

    def test_format_violation_is_one_warning(self, warning_manager):
        roster = build(CamperRoster, [enrollment_row(**{"Camp Grade": "Fifth"})])
        roster.validate(warning_manager)

        warnings = warning_manager.get_warning_log()[WarningType.BAD_DATA_FORMAT]
        assert len(warnings) == 1
        assert warnings[0].display_data == ["Alice 'Ali' Smith", "Camp Grade", "Fifth", GRADES]

    def test_missing_table_header_raises_before_rows(self, warning_manager):
        row = enrollment_row(**{"Camp Grade": "Fifth"})
        del row["Preferred Name"]
        roster = build(CamperRoster, [row])

        with pytest.raises(RosterException, match="Preferred Name"):
            roster.validate(warning_manager)
        assert not warning_manager.has_warnings()

    def test_missing_camper_header_raises(self, warning_manager):
        roster = build(CamperRoster, [enrollment_row()])
        partial = enrollment_row()
        del partial["Camp Grade"]
        roster.add_camper(Camper(partial))

        with pytest.raises(RosterException, match="Camp Grade"):
            roster.validate(warning_manager)

    def test_normalize_programs(self):
        roster = build(
            CamperRoster,
            [
                enrollment_row(**{"Enrolled Sessions/Programs": "Session 2/Traditional Camp - All Gender"}),
                enrollment_row(
                    **{
                        "First Name": "Cara",
                        "Enrolled Sessions/Programs": "Session 3/Leader in Training",
                    }
                ),
            ],
        )
        roster.normalize_programs()
        values = [c.get_value("Enrolled Sessions/Programs") for c in roster]
        assert values == ["Session 2/Traditional Camp", "Session 3/Leader-In-Training"]


class TestActivityRoster:
    """Tests for activity roster validation and keying"""

    def test_bad_period_warns(self, warning_manager):
        roster = build(ActivityRoster, [activity_row(Period="4")])
        roster.validate(warning_manager)
        assert warning_manager.warning_count(WarningType.BAD_DATA_FORMAT) == 1

    def test_missing_header_raises(self, warning_manager):
        row = activity_row()
        del row["Cabin"]
        roster = build(ActivityRoster, [row])
        with pytest.raises(RosterException, match="Cabin"):
            roster.validate(warning_manager)

    def test_missing_table_header_raises_without_rows(self, warning_manager):
        roster = ActivityRoster()
        roster.add_headers(["First Name", "Last Name"])

        with pytest.raises(RosterException, match="Activity"):
            roster.validate(warning_manager)
        assert not warning_manager.has_warnings()

    def test_get_keyed_data_groups_rows(self):
        roster = ActivityRoster()
        for row in (activity_row(Period="1"), activity_row(Period="2"), activity_row(**{"First Name": "Ben"})):
            roster.add_camper(Camper(row, generate_camper_id_from_activity(row)))

        keyed = roster.get_keyed_data()
        assert list(keyed) == ["alice_smith_5th", "ben_smith_5th"]
        assert [a.get_value("Period") for a in keyed["alice_smith_5th"]] == ["1", "2"]


class TestProgramNameAdjuster:
    """Tests for program name standardisation"""

    def test_standardize(self):
        adjuster = ProgramNameAdjuster()
        assert adjuster.adjust("Session 2/Counselor in Training - All Gender") == "Session 2/Counselor-In-Training"
        assert adjuster.adjust(None) is None

    def test_shorten(self):
        adjuster = ProgramNameAdjuster(AdjustMode.SHORTEN)
        assert adjuster.adjust("All Gender Backpacking") == "AG"

    def test_disabled_pairs_skipped(self):
        adjuster = ProgramNameAdjuster(AdjustMode.SHORTEN)
        assert ReplacementPair.SHORTEN_CIT not in adjuster.pairs
        assert adjuster.adjust("Counselor-In-Training") == "Counselor-In-Training"

    def test_explicit_pairs(self):
        adjuster = ProgramNameAdjuster(pairs=[ReplacementPair.SHORTEN_CIT])
        assert adjuster.adjust("Counselor-In-Training") == "CIT"
