"""
Roster importer: validated CSV files to roster objects.
"""

from collections.abc import Callable, Iterable, Mapping
from pathlib import Path

from happycamper.core.exceptions import RosterException
from happycamper.core.models import (
    ActivityRoster,
    Camper,
    CamperRoster,
    Roster,
    generate_camper_id,
    generate_camper_id_from_activity,
)
from happycamper.observability.logger import get_logger
from happycamper.utils.validation import check_import_file

from .csv_reader import CSVReader, ParsedCSV

logger = get_logger(__name__)


class RosterReader:
    """
    Imports the enrollment and activity exports.

    Every import runs the same steps: basic file checks, parse, content
    checks (headers present, at least one row, required headers), then one
    Camper per row keyed by the roster's identity function.
    """

    def __init__(self, csv_reader: CSVReader | None = None):
        self.csv_reader = csv_reader or CSVReader()

    def read_csv(self, file_path: str | Path | None, required_headers: Iterable[str] = ()) -> ParsedCSV:
        """
        Check, parse and validate one file.

        Raises:
            RosterException: FILE, MISSING_DATA, HEADER or MALFORMED error
        """
        check = check_import_file(file_path)
        if not check.valid:
            raise RosterException.file_error(check.summary, check.message)

        parsed = self.csv_reader.read(check.path)
        self._validate_content(check.path, parsed, list(required_headers))
        return parsed

    def read_camper_roster(self, file_path: str | Path | None) -> CamperRoster:
        roster = self._build_roster(file_path, CamperRoster(), generate_camper_id)
        logger.info("Imported camper roster", extra={"file": Path(file_path).name, "campers": len(roster)})
        return roster

    def read_activity_roster(self, file_path: str | Path | None) -> ActivityRoster:
        roster = self._build_roster(file_path, ActivityRoster(), generate_camper_id_from_activity)
        logger.info("Imported activity roster", extra={"file": Path(file_path).name, "rows": len(roster)})
        return roster

    def _build_roster(
        self,
        file_path: str | Path | None,
        roster: Roster,
        id_function: Callable[[Mapping[str, str | None]], str],
    ) -> Roster:
        parsed = self.read_csv(file_path, roster.REQUIRED_HEADERS)
        roster.add_headers(parsed.headers)
        for row in parsed.rows:
            roster.add_camper(Camper(row, id_function(row)))
        return roster

    @staticmethod
    def _validate_content(file_path: Path, parsed: ParsedCSV, required_headers: list[str]) -> None:
        if not parsed.headers:
            raise RosterException.no_data(file_path, has_headers=False)
        if parsed.is_empty():
            raise RosterException.no_data(file_path, has_headers=True)

        present = set(parsed.headers)
        missing = [header for header in required_headers if header not in present]
        if missing:
            raise RosterException.missing_headers(file_path, missing)
