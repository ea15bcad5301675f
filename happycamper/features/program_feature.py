"""
Program extraction feature.

The sessions/programs column looks like
"Session 2/Traditional Camp and Session 4/Backpacking". The current session
is the one most campers are enrolled in; each camper's program is the one
listed for that session.
"""

import re
from collections import Counter
from collections.abc import Iterable

from happycamper.core.exceptions import FeatureNotEnabledError
from happycamper.core.models import Camper, EnhancedRoster, RosterHeader, RosterWarning
from happycamper.core.rules.format_registry import PROGRAM_NAME, SESSIONS_PROGRAMS
from happycamper.observability.logger import get_logger
from happycamper.observability.warning_manager import WarningManager

from .base_feature import RosterFeature

logger = get_logger(__name__)

FEATURE_ID = "program"
ENTRY_SEPARATOR = " and "
SESSION_PATTERN = re.compile(r"Session\s+(\d+)[A-Za-z]?")
MIXED_ROUND_COUNT = -1
ROUND_COUNT_GROUPS = (MIXED_ROUND_COUNT, 3, 2, 1, 0)


def split_entries(esp_value: str) -> list[tuple[str, str]]:
    """
    Split a sessions/programs value into (session, program) pairs.

    Entries without a "/" are ignored.
    """
    entries = []
    for entry in esp_value.split(ENTRY_SEPARATOR):
        parts = entry.split("/")
        if len(parts) < 2:
            continue
        entries.append((parts[0].strip(), parts[1].strip()))
    return entries


def determine_current_session(campers: Iterable[Camper]) -> int | None:
    """
    Find the most common session number across all campers.

    Ties go to the lowest session number.

    Returns:
        Session number, or None if no session could be parsed
    """
    counts: Counter[int] = Counter()
    for camper in campers:
        esp_value = camper.get_value(RosterHeader.ESP.camper_roster_name)
        if not esp_value:
            continue
        for session_part, _ in split_entries(esp_value):
            match = SESSION_PATTERN.search(session_part)
            if match:
                counts[int(match.group(1))] += 1

    if not counts:
        return None
    return min(counts, key=lambda session: (-counts[session], session))


def extract_program(esp_value: str | None, current_session: int | None) -> str | None:
    """
    Pick the program for the current session out of a sessions/programs value.

    Returns:
        Program name; "" for an empty value; None when the value lists no
        entry for the current session
    """
    if not esp_value:
        return ""

    if current_session is None:
        first_entry = esp_value.split(ENTRY_SEPARATOR)[0].split("/")
        return first_entry[1].strip() if len(first_entry) > 1 else ""

    for session_part, program_part in split_entries(esp_value):
        match = SESSION_PATTERN.search(session_part)
        if match and int(match.group(1)) == current_session:
            return program_part
    return None


class ProgramFeature(RosterFeature):
    """Extract each camper's program for the current session."""

    feature_id = FEATURE_ID
    feature_name = "Program Information"
    required_headers = (RosterHeader.ESP.camper_roster_name,)
    added_headers = (RosterHeader.PROGRAM.standard_name,)
    required_formats = {
        RosterHeader.ESP.camper_roster_name: SESSIONS_PROGRAMS,
        RosterHeader.PROGRAM.standard_name: PROGRAM_NAME,
    }

    def apply_feature(self, roster: EnhancedRoster, warning_manager: WarningManager) -> None:
        self.add_headers(roster)

        current_session = determine_current_session(roster.campers)
        logger.debug("Current session determined", extra={"session": current_session})

        for camper in roster.campers:
            esp_value = camper.get_value(RosterHeader.ESP.camper_roster_name)
            program = extract_program(esp_value, current_session)
            if program is None:
                program = esp_value
                warning_manager.log_warning(
                    RosterWarning.program_parsing_failure(
                        camper.data, str(current_session) if current_session is not None else "unknown"
                    )
                )
            camper.set_value(RosterHeader.PROGRAM.standard_name, program)

        roster.enable_feature(self.feature_id)


def get_program_for_camper(roster: EnhancedRoster, camper_id: str) -> str:
    if not roster.has_feature(FEATURE_ID):
        raise FeatureNotEnabledError(FEATURE_ID)
    return roster.get_value(camper_id, RosterHeader.PROGRAM.standard_name) or ""


def get_programs_by_round_count(roster: EnhancedRoster) -> dict[int, list[str]]:
    """
    Group programs by how many rounds their campers were assigned.

    A program whose campers disagree on round count goes in the -1 (mixed)
    group. Programs are sorted alphabetically within each group.

    Returns:
        Mapping with keys -1, 3, 2, 1, 0 in that order
    """
    program_round_counts: dict[str, int] = {}
    for camper in roster.campers:
        program = camper.get_value(RosterHeader.PROGRAM.standard_name)
        if not program:
            continue
        try:
            round_count = int(camper.get_value(RosterHeader.ROUND_COUNT.standard_name))
        except (TypeError, ValueError):
            program_round_counts.setdefault(program, 0)
            continue
        if program not in program_round_counts:
            program_round_counts[program] = round_count
        elif program_round_counts[program] != round_count:
            program_round_counts[program] = MIXED_ROUND_COUNT

    groups: dict[int, list[str]] = {count: [] for count in ROUND_COUNT_GROUPS}
    for program, round_count in program_round_counts.items():
        groups.get(round_count, groups[MIXED_ROUND_COUNT]).append(program)
    for programs in groups.values():
        programs.sort()
    return groups
