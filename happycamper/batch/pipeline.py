"""
Roster enrichment pipeline orchestration.

Coordinates the flow: import → normalize → validate → merge → features → reorder
"""

from collections.abc import Iterable
from pathlib import Path

from happycamper.core.exceptions import RosterException
from happycamper.core.models import (
    ActivityRoster,
    CamperRoster,
    EnhancedRoster,
    ExportSettings,
    ImportSettings,
    PipelineSettings,
)
from happycamper.features import RosterFeature, build_available_features
from happycamper.filters import FilterManager
from happycamper.observability.logger import get_logger, log_operation
from happycamper.observability.metrics import record_feature_outcome, record_pipeline_run
from happycamper.observability.warning_manager import WarningManager
from happycamper.utils.validation import check_export_file

from .readers import RosterReader
from .writers import RosterCSVWriter

logger = get_logger(__name__)


class RosterPipeline:
    """
    Builds enriched rosters from an enrollment export and an activity export.

    Flow:
    1. Import both files (file checks, parsing, required headers)
    2. Standardise program names on the enrollment roster
    3. Format-validate both rosters (violations become warnings)
    4. Copy enrollment headers and campers into a new enriched roster
    5. Run each enabled feature in caller order: pre-validate, apply, post-validate
    6. Put headers into canonical display order

    Each run gets a fresh WarningManager, available afterwards as
    `warning_manager`. A fatal error is logged there and the run returns None.
    """

    def __init__(
        self,
        settings: PipelineSettings | None = None,
        reader: RosterReader | None = None,
        writer: RosterCSVWriter | None = None,
    ):
        """
        Initialize pipeline.

        Args:
            settings: Feature switches and lookup tables (defaults if None)
            reader: Roster importer
            writer: Roster exporter
        """
        self.settings = settings or PipelineSettings()
        self.reader = reader or RosterReader()
        self.writer = writer or RosterCSVWriter()
        self._available_features = build_available_features(self.settings)
        self._warning_manager: WarningManager | None = None

    @property
    def warning_manager(self) -> WarningManager:
        if self._warning_manager is None:
            raise RuntimeError("No pipeline run has started yet")
        return self._warning_manager

    def get_available_features(self) -> list[RosterFeature]:
        return list(self._available_features)

    def find_feature(self, feature_id: str) -> RosterFeature | None:
        for feature in self._available_features:
            if feature.feature_id == feature_id:
                return feature
        return None

    def run(self, import_settings: ImportSettings) -> EnhancedRoster | None:
        return self.create_enriched_roster(
            import_settings.camper_file,
            import_settings.activity_file,
            import_settings.enabled_feature_ids,
        )

    def create_enriched_roster(
        self,
        camper_file: str | Path | None,
        activity_file: str | Path | None,
        enabled_feature_ids: Iterable[str],
    ) -> EnhancedRoster | None:
        """
        Build an enriched roster.

        Args:
            camper_file: Enrollment export
            activity_file: Activity export
            enabled_feature_ids: Features to apply, in order; unknown ids are ignored

        Returns:
            The enriched roster, or None if a fatal error was logged
        """
        self._warning_manager = WarningManager()
        roster: EnhancedRoster | None = None

        with log_operation("Building enriched roster", logger=logger) as operation:
            try:
                roster = self._build(camper_file, activity_file, list(enabled_feature_ids))
            except RosterException as e:
                self._warning_manager.log_error(e)
            except Exception as e:
                logger.exception("Unexpected error while merging rosters")
                self._warning_manager.log_error(
                    RosterException.wrap(f"An error occurred while merging rosters: {e}", e)
                )

        self._finish_run(roster, operation.duration)
        return roster

    def _build(
        self,
        camper_file: str | Path | None,
        activity_file: str | Path | None,
        enabled_feature_ids: list[str],
    ) -> EnhancedRoster:
        warning_manager = self._warning_manager

        camper_roster = self.reader.read_camper_roster(camper_file)
        activity_roster = self.reader.read_activity_roster(activity_file)

        camper_roster.normalize_programs()

        camper_roster.validate(warning_manager)
        activity_roster.validate(warning_manager)

        roster = self._merge(camper_roster)

        for feature_id in enabled_feature_ids:
            feature = self.find_feature(feature_id)
            if feature is None:
                logger.warning("Unknown feature id ignored", extra={"feature_id": feature_id})
                continue
            self._run_feature(feature, roster, activity_roster, warning_manager)

        roster.reorder_headers()
        return roster

    @staticmethod
    def _merge(camper_roster: CamperRoster) -> EnhancedRoster:
        roster = EnhancedRoster()
        roster.add_headers(camper_roster.get_header_map().keys())
        for camper in camper_roster.campers:
            roster.add_camper(camper)
        return roster

    def _run_feature(
        self,
        feature: RosterFeature,
        roster: EnhancedRoster,
        activity_roster: ActivityRoster,
        warning_manager: WarningManager,
    ) -> None:
        """
        Run one feature's lifecycle.

        Raises:
            RosterException: If a load-bearing feature fails pre-validation,
                or any feature fails post-validation
        """
        if not feature.pre_validate(roster, warning_manager):
            if feature.load_bearing:
                record_feature_outcome(feature.feature_id, "aborted")
                raise RosterException.feature_prevalidation_failed(feature.feature_name)
            record_feature_outcome(feature.feature_id, "skipped")
            logger.info("Feature skipped", extra={"feature_id": feature.feature_id})
            return

        if feature.needs_activity_roster:
            feature.apply_feature(roster, activity_roster, warning_manager)
        else:
            feature.apply_feature(roster, warning_manager)

        # No rollback: a failed post-validation discards the whole roster
        if not feature.post_validate(roster, warning_manager):
            record_feature_outcome(feature.feature_id, "aborted")
            raise RosterException.feature_postvalidation_failed(feature.feature_name)

        record_feature_outcome(feature.feature_id, "applied")
        logger.debug("Feature applied", extra={"feature_id": feature.feature_id})

    def _finish_run(self, roster: EnhancedRoster | None, duration_seconds: float) -> None:
        summary = self.warning_manager.summary()
        logger.info(
            "Pipeline run finished",
            extra={
                "succeeded": roster is not None,
                "campers": len(roster) if roster is not None else 0,
                "warnings": summary["warnings"],
                "errors": summary["errors"],
            },
        )
        record_pipeline_run(
            succeeded=roster is not None,
            camper_count=len(roster) if roster is not None else 0,
            warning_counts=summary["warnings"],
            error_counts=summary["errors"],
            duration_seconds=duration_seconds,
        )

    def export_roster(
        self,
        roster: EnhancedRoster,
        settings: ExportSettings,
        filter_manager: FilterManager | None = None,
    ) -> int:
        """
        Export a roster after checking the destination.

        Returns:
            Number of campers written

        Raises:
            RosterException: FILE error for a bad destination, WRAPPER for any other failure
        """
        check = check_export_file(settings.destination)
        if not check.valid:
            raise RosterException.file_error(check.summary, check.message)

        try:
            return self.writer.write(roster, settings, filter_manager)
        except RosterException:
            raise
        except Exception as e:
            raise RosterException.wrap(f"An error occurred while exporting: {type(e).__name__}", e) from e
