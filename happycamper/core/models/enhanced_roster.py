"""
EnhancedRoster: the merged, feature-enriched output table.
"""

from .roster import Roster


class EnhancedRoster(Roster):
    """Roster that records which features have been applied to it."""

    def __init__(self, campers=None):
        super().__init__(campers)
        self._enabled_features: set[str] = set()

    def enable_feature(self, feature_id: str) -> None:
        self._enabled_features.add(feature_id)

    def has_feature(self, feature_id: str) -> bool:
        return feature_id in self._enabled_features

    @property
    def enabled_features(self) -> set[str]:
        return set(self._enabled_features)
