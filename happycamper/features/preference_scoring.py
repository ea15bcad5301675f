"""
Preference scoring helpers.

Campers rank up to ten activity preferences. An assignment ranked at index i
(0-based) earns 10 - i points; the score is the points earned divided by the
best points achievable for the camper's non-exempt rounds.
"""

from collections.abc import Iterable, Sequence
from decimal import ROUND_HALF_UP, Decimal

from happycamper.core.models.data_constants import is_empty
from happycamper.observability.logger import get_logger

logger = get_logger(__name__)

PREFERENCE_COUNT = 10
PENULTIMATE_TOKEN = " and "


def parse_preferences(preference_text: str) -> list[str]:
    """
    Split a preference list such as "Archery, Sailing and Drama".

    The final comma token is split again on " and ".

    Examples:
        >>> parse_preferences("Archery, Sports, Fishing and Sailing")
        ['Archery', 'Sports', 'Fishing', 'Sailing']
    """
    preferences = [item.strip() for item in preference_text.split(",")]
    last_item = preferences[-1]
    if PENULTIMATE_TOKEN in last_item:
        parts = last_item.split(PENULTIMATE_TOKEN)
        if len(parts) > 2:
            logger.debug("Multiple 'and' tokens in last preference item", extra={"item": last_item})
        preferences = preferences[:-1] + [part.strip() for part in parts]
    return preferences


def is_exempt(activity: str | None, exempt_activities: Iterable[str]) -> bool:
    return is_empty(activity) or activity in exempt_activities


def score_activity(preferences: Sequence[str], activity: str | None) -> int:
    if activity in preferences:
        return PREFERENCE_COUNT - preferences.index(activity)
    return 0


def determine_round_points(
    preferences: Sequence[str],
    assignments: Sequence[str | None],
    exempt_activities: Iterable[str],
) -> list[int]:
    exempt = set(exempt_activities)
    return [0 if is_exempt(assignment, exempt) else score_activity(preferences, assignment) for assignment in assignments]


def determine_max_points(
    round_count: int,
    assignments: Sequence[str | None],
    exempt_activities: Iterable[str],
) -> int:
    """
    Best achievable points for the non-exempt assignments in the first
    round_count rounds: 10 + 9 + ... for k rounds, i.e. 11k - k(k+1)/2.
    """
    exempt = set(exempt_activities)
    k = sum(1 for assignment in assignments[:round_count] if not is_exempt(assignment, exempt))
    return 11 * k - k * (k + 1) // 2


def determine_preference_score(round_points: Sequence[int], max_points: int) -> float:
    """Fraction of achievable points; 1.0 when nothing was achievable."""
    if max_points <= 0:
        return 1.0
    return sum(round_points) / max_points


def determine_unrequested_activities(
    preferences: Sequence[str],
    assignments: Sequence[str | None],
    exempt_activities: Iterable[str],
) -> list[str]:
    exempt = set(exempt_activities)
    return [
        assignment
        for assignment in assignments
        if not is_exempt(assignment, exempt) and assignment not in preferences
    ]


def format_percentage(value: float) -> str:
    """
    Format a percentage as a whole number, rounding halves up.

    Examples:
        >>> format_percentage(62.5)
        '63'
    """
    return str(Decimal(repr(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def percentile_ranks(scores: dict[str, float]) -> dict[str, str]:
    """
    Inclusive percentile rank for each scored camper.

    A camper's percentile is the share of scores less than or equal to
    theirs, so tied campers share a percentile and the top score is 100.
    """
    all_scores = sorted(scores.values())
    total = len(all_scores)
    ranks = {}
    for camper_id, score in scores.items():
        rank = sum(1 for other in all_scores if other <= score)
        ranks[camper_id] = format_percentage(rank / total * 100)
    return ranks
