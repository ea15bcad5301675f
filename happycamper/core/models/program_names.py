"""
Program name standardisation.

Registration exports spell the same program several ways across seasons.
ProgramNameAdjuster rewrites them to one spelling (STANDARDIZE) or to a
compact display form (SHORTEN).
"""

import re
from enum import Enum


class AdjustMode(Enum):
    SHORTEN = "shorten"
    STANDARDIZE = "standardize"


class ReplacementPair(Enum):
    """(mode, pattern, replacement, enabled)"""

    STANDARDIZE_ALLGENDER = (AdjustMode.STANDARDIZE, r" - All Gender", "", True)
    STANDARDIZE_LEADERSHIP = (AdjustMode.STANDARDIZE, r"(?i)[-\s]in[-\s]Training", "-In-Training", True)
    SHORTEN_ALLGENDER = (AdjustMode.SHORTEN, r"All Gender", "AG", True)
    SHORTEN_BACKPACKING = (AdjustMode.SHORTEN, r" Backpacking", "", True)
    SHORTEN_CIT = (AdjustMode.SHORTEN, r"Counselor-In-Training", "CIT", False)
    SHORTEN_LIT = (AdjustMode.SHORTEN, r"LEADER-In-Training", "LIT", False)

    def __init__(self, mode: AdjustMode, pattern: str, replacement: str, enabled: bool):
        self.mode = mode
        self.pattern = re.compile(pattern)
        self.replacement = replacement
        self.enabled = enabled


class ProgramNameAdjuster:
    """
    Applies the enabled replacement pairs for one mode.

    Examples:
        >>> ProgramNameAdjuster(AdjustMode.STANDARDIZE).adjust("Session 2/Counselor in Training - All Gender")
        'Session 2/Counselor-In-Training'
    """

    def __init__(self, mode: AdjustMode = AdjustMode.STANDARDIZE, pairs: list[ReplacementPair] | None = None):
        if pairs is not None:
            self.pairs = list(pairs)
        else:
            self.pairs = [pair for pair in ReplacementPair if pair.mode == mode and pair.enabled]

    def adjust(self, name: str | None) -> str | None:
        if name is None:
            return None
        for pair in self.pairs:
            name = pair.pattern.sub(pair.replacement, name)
        return name
