"""
Base feature interface for roster enrichment.

A feature runs in three steps, driven by the pipeline in caller order:
pre_validate (are my required headers present?), apply_feature (mutate the
enriched roster in place) and post_validate (is the result sane?).
"""

from abc import ABC, abstractmethod

from happycamper.core.models import ActivityRoster, EnhancedRoster, PipelineSettings, RosterWarning
from happycamper.observability.warning_manager import WarningManager


class RosterFeature(ABC):
    """
    Abstract base class for enrichment features.

    Subclasses set the class attributes below and implement apply_feature().
    The default pre_validate() logs one MISSING_FEATURE_HEADER warning per
    absent required header.

    Attributes:
        feature_id: Stable identifier used to enable the feature
        feature_name: Human-readable name shown in warnings
        required_headers: Headers that must exist on the enriched roster
        added_headers: Headers the feature registers when applied
        required_formats: Field name to regex pattern the feature expects
        load_bearing: Abort the whole pipeline if pre-validation fails
        needs_activity_roster: apply_feature() takes the activity roster as input
    """

    feature_id: str = ""
    feature_name: str = ""
    required_headers: tuple[str, ...] = ()
    added_headers: tuple[str, ...] = ()
    required_formats: dict[str, str] = {}
    load_bearing: bool = False
    needs_activity_roster: bool = False

    def __init__(self, settings: PipelineSettings | None = None):
        """
        Initialize feature.

        Args:
            settings: Behaviour switches and lookup tables (defaults if None)
        """
        self.settings = settings or PipelineSettings()

    def pre_validate(self, roster: EnhancedRoster, warning_manager: WarningManager) -> bool:
        """
        Check that every required header is present.

        Returns:
            True if the feature can be applied
        """
        all_present = True
        for header in self.required_headers:
            if not roster.has_header(header):
                warning_manager.log_warning(RosterWarning.missing_feature_header(header, self.feature_name))
                all_present = False
        return all_present

    @abstractmethod
    def apply_feature(self, roster: EnhancedRoster, warning_manager: WarningManager) -> None:
        """
        Enrich the roster in place and enable this feature on it.

        Args:
            roster: Enriched roster to mutate
            warning_manager: Receives per-camper warnings
        """

    def post_validate(self, roster: EnhancedRoster, warning_manager: WarningManager) -> bool:
        return True

    def add_headers(self, roster: EnhancedRoster) -> None:
        for header in self.added_headers:
            roster.add_header(header)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.feature_id})"


class ActivityRosterFeature(RosterFeature):
    """
    Feature whose data comes from the activity roster rather than the
    enriched roster, so apply_feature() takes the activity roster as an
    explicit second input.
    """

    needs_activity_roster = True

    @abstractmethod
    def apply_feature(
        self,
        roster: EnhancedRoster,
        activity_roster: ActivityRoster,
        warning_manager: WarningManager,
    ) -> None:
        """
        Merge activity data into the roster and enable this feature on it.

        Args:
            roster: Enriched roster to mutate
            activity_roster: Source activity rows
            warning_manager: Receives per-row warnings
        """
