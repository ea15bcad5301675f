"""
CSV export of enriched rosters.
"""

import csv
from pathlib import Path

from happycamper.core.exceptions import RosterException
from happycamper.core.models import EnhancedRoster, ExportSettings
from happycamper.core.models.data_constants import DISPLAY_NO_DATA, EXPORT_EMPTY
from happycamper.filters import FilterManager
from happycamper.observability.logger import get_logger

logger = get_logger(__name__)


def export_cell(value: str | None, use_empty_placeholder: bool) -> str:
    """
    Value written for one cell. Blank cells become the placeholder.

    Examples:
        >>> export_cell("   ", True)
        'No Data'
        >>> export_cell(None, False)
        ''
    """
    if value is None or not value.strip():
        return DISPLAY_NO_DATA if use_empty_placeholder else EXPORT_EMPTY
    return value


class RosterCSVWriter:
    """
    Writes an enriched roster to CSV with every value quoted.
    """

    def write(
        self,
        roster: EnhancedRoster,
        settings: ExportSettings,
        filter_manager: FilterManager | None = None,
    ) -> int:
        """
        Export a roster.

        Args:
            roster: Enriched roster
            settings: Destination and column/row/placeholder options
            filter_manager: Filters used when settings.show_all_rows is False

        Returns:
            Number of campers written

        Raises:
            ValueError: If no destination is set
            RosterException: WRAPPER error if the file cannot be written
        """
        if settings.destination is None:
            raise ValueError("Export settings must include a destination file")

        headers = roster.get_all_headers() if settings.show_all_columns else roster.get_visible_headers()
        active_filters = None if settings.show_all_rows else filter_manager
        destination = Path(settings.destination)

        written = 0
        try:
            with destination.open("w", newline="", encoding="utf-8") as handle:
                writer = csv.writer(handle, quoting=csv.QUOTE_ALL)
                writer.writerow(headers)
                for camper in roster.campers:
                    if active_filters is not None and not active_filters.apply_filters(camper):
                        continue
                    writer.writerow(
                        [export_cell(camper.get_value(header), settings.use_empty_placeholder) for header in headers]
                    )
                    written += 1
        except OSError as e:
            raise RosterException.wrap(f"Error exporting to CSV with file {destination.name}", e) from e

        logger.info(
            "Exported roster",
            extra={"file": destination.name, "campers": written, "columns": len(headers)},
        )
        return written
