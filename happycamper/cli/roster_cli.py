"""
Command-line interface for building enriched rosters.

Usage:
    happycamper process --campers <file> --activities <file> [options]
    happycamper features
"""

import argparse
import json
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from happycamper.batch import RosterPipeline
from happycamper.core.models import EnhancedRoster, ExportSettings, ImportSettings, PipelineSettings
from happycamper.core.rules import SettingsLoader
from happycamper.features import FEATURE_REGISTRY
from happycamper.filters import (
    AssignmentFilter,
    CamperRoundsFilter,
    FilterManager,
    MedicalFilter,
    PreferenceFilter,
    SwimLevelFilter,
)
from happycamper.observability.logger import get_logger, setup_logger
from happycamper.observability.metrics import generate_metrics
from happycamper.observability.warning_manager import WarningManager
from happycamper.utils.validation import ensure_extension

logger = get_logger(__name__)

SETTINGS_ENV_VAR = "HAPPYCAMPER_SETTINGS"
METRICS_FILE_ENV_VAR = "HAPPYCAMPER_METRICS_FILE"


def load_pipeline_settings(settings_path: str | None) -> PipelineSettings:
    """
    Load settings from a YAML file, the HAPPYCAMPER_SETTINGS variable, or defaults.

    Raises:
        FileNotFoundError: If a settings path is given but missing
        ValueError: If the settings file is invalid
    """
    path = settings_path or os.getenv(SETTINGS_ENV_VAR)
    if not path:
        return PipelineSettings()
    logger.info("Loading pipeline settings", extra={"path": path})
    return SettingsLoader(path).load_settings()


def build_filter_manager(roster: EnhancedRoster, args) -> FilterManager:
    """Create the roster's default filters, then apply the command-line options to them."""
    manager = FilterManager()
    manager.create_filters_for_roster(roster)

    assignment_filter = manager.get_filter(AssignmentFilter.filter_id)
    for round_count in args.hide_rounds or []:
        assignment_filter.set_round_visible(round_count, False)

    if args.incomplete_only:
        manager.add_filter(CamperRoundsFilter(show_missing=True, show_complete=False))

    presence_options = (
        (PreferenceFilter, args.unrequested_only),
        (SwimLevelFilter, args.swim_conflicts_only),
        (MedicalFilter, args.medical_only),
    )
    for filter_class, only_with_value in presence_options:
        roster_filter = manager.get_filter(filter_class.filter_id)
        if only_with_value and roster_filter is not None:
            roster_filter.show_without_value = False

    return manager


def has_row_filters(args) -> bool:
    return bool(
        args.hide_rounds
        or args.incomplete_only
        or args.unrequested_only
        or args.swim_conflicts_only
        or args.medical_only
    )


def warning_report(warning_manager: WarningManager) -> dict:
    """Warnings and errors as plain data, grouped by type."""
    return {
        "warnings": [
            {
                "type": warning_type.name,
                "explanation": warning_type.general_explanation,
                "detail": warning_type.secondary_explanation,
                "rows": [dict(zip(warning_type.display_headers, w.display_data)) for w in warnings],
            }
            for warning_type, warnings in warning_manager.get_warning_log().items()
        ],
        "errors": [
            {
                "type": error_type.name,
                "summary": error.summary,
                "explanation": error.explanation,
                "rows": [dict(zip(getattr(error, "table_headers", []), row)) for row in getattr(error, "table_data", [])],
            }
            for error_type, errors in warning_manager.get_error_log().items()
            for error in errors
        ],
    }


def print_text_report(report: dict) -> None:
    for error in report["errors"]:
        print(f"\nERROR: {error['summary']}")
        print(f"  {error['explanation']}")
        for row in error["rows"]:
            print("  - " + ", ".join(f"{header}: {value}" for header, value in row.items()))

    for group in report["warnings"]:
        print(f"\nWARNING ({len(group['rows'])}): {group['explanation']}")
        print(f"  {group['detail']}")
        for row in group["rows"]:
            print("  - " + ", ".join(f"{header}: {value}" for header, value in row.items()))


def process_command(args):
    """
    Build an enriched roster and optionally export it.

    Args:
        args: Command-line arguments
    """
    try:
        settings = load_pipeline_settings(args.settings)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Invalid settings: {e}")
        print(f"\nError: {e}")
        sys.exit(1)

    import_settings = ImportSettings(
        camper_file=Path(args.campers),
        activity_file=Path(args.activities),
        enabled_feature_ids=args.features or list(FEATURE_REGISTRY),
    )

    pipeline = RosterPipeline(settings)
    roster = pipeline.run(import_settings)

    report = warning_report(pipeline.warning_manager)
    if args.report == "json":
        print(json.dumps(report, indent=2))
    else:
        print_text_report(report)

    if args.metrics_file:
        Path(args.metrics_file).write_bytes(generate_metrics())

    if roster is None:
        print("\nNo roster was created.")
        sys.exit(1)

    print(f"\nEnriched roster: {len(roster)} campers, features: {', '.join(sorted(roster.enabled_features))}")

    if args.output:
        export_settings = ExportSettings(
            destination=ensure_extension(args.output, "csv"),
            show_all_columns=not args.visible_only,
            show_all_rows=not has_row_filters(args),
            use_empty_placeholder=not args.no_placeholder,
        )
        try:
            written = pipeline.export_roster(roster, export_settings, build_filter_manager(roster, args))
        except Exception as e:
            logger.error(f"Error exporting roster: {e}", exc_info=True)
            print(f"\nError: {e}")
            sys.exit(1)
        print(f"Exported {written} campers to {export_settings.destination}")


def features_command(args):
    """List the features that can be enabled."""
    print(f"{'ID':<12} {'Name':<28} {'Required'}")
    print(f"{'-' * 50}")
    for feature_id, feature_class in FEATURE_REGISTRY.items():
        required = "yes" if feature_class.load_bearing else "no"
        print(f"{feature_id:<12} {feature_class.feature_name:<28} {required}")


def main():
    """Main CLI entry point."""
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Merge camper and activity exports into an enriched roster",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Build a roster with every feature and export it
  happycamper process --campers campers.csv --activities activities.csv --output roster.csv

  # Only the program and swim level features, visible columns only
  happycamper process --campers campers.csv --activities activities.csv \\
      --features activity program swimlevel --output roster.csv --visible-only

  # Export only campers with swim conflicts, using custom settings
  happycamper process --campers campers.csv --activities activities.csv \\
      --settings config/roster_settings.yaml --swim-conflicts-only --output conflicts.csv

  # List available features
  happycamper features
        """
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: LOG_LEVEL or INFO)"
    )
    parser.add_argument(
        "--log-format",
        default=None,
        choices=["json", "text"],
        help="Log output format (default: LOG_FORMAT or json)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Process command
    process_parser = subparsers.add_parser("process", help="Build an enriched roster")
    process_parser.add_argument(
        "--campers",
        required=True,
        help="Path to the camper enrollment CSV"
    )
    process_parser.add_argument(
        "--activities",
        required=True,
        help="Path to the activity assignment CSV"
    )
    process_parser.add_argument(
        "--features",
        nargs="+",
        choices=list(FEATURE_REGISTRY),
        help="Features to apply, in order (default: all)"
    )
    process_parser.add_argument(
        "--settings",
        default=None,
        help=f"Pipeline settings YAML (default: ${SETTINGS_ENV_VAR} or built-in defaults)"
    )
    process_parser.add_argument(
        "--output",
        help="Export the enriched roster to this CSV file"
    )
    process_parser.add_argument(
        "--visible-only",
        action="store_true",
        help="Export visible columns only"
    )
    process_parser.add_argument(
        "--no-placeholder",
        action="store_true",
        help="Write empty cells as \"\" instead of \"No Data\""
    )
    process_parser.add_argument(
        "--report",
        default="text",
        choices=["text", "json"],
        help="Warning report format (default: text)"
    )
    process_parser.add_argument(
        "--metrics-file",
        default=os.getenv(METRICS_FILE_ENV_VAR),
        help=f"Write Prometheus metrics to this file (default: ${METRICS_FILE_ENV_VAR})"
    )

    # Row filters (export only campers passing every filter)
    process_parser.add_argument(
        "--hide-rounds",
        nargs="+",
        type=int,
        choices=range(0, 4),
        metavar="N",
        help="Exclude campers assigned exactly N rounds"
    )
    process_parser.add_argument(
        "--incomplete-only",
        action="store_true",
        help="Only campers missing at least one round"
    )
    process_parser.add_argument(
        "--unrequested-only",
        action="store_true",
        help="Only campers with unrequested activities"
    )
    process_parser.add_argument(
        "--swim-conflicts-only",
        action="store_true",
        help="Only campers with swim conflicts"
    )
    process_parser.add_argument(
        "--medical-only",
        action="store_true",
        help="Only campers with medical notes"
    )

    # Features command
    subparsers.add_parser("features", help="List available features")

    # Parse arguments
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    setup_logger(level=args.log_level, format_type=args.log_format)

    # Execute command
    if args.command == "process":
        process_command(args)
    elif args.command == "features":
        features_command(args)


if __name__ == "__main__":
    main()
