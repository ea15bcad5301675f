"""
CSV reader for roster exports.

Registration-platform exports quote every cell. Lines are cleaned before
parsing: blank and comment lines are dropped, stray characters outside the
outer quotes are trimmed and lines with an odd number of quote characters
are discarded.
"""

import csv
import io
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from happycamper.core.exceptions import RosterException
from happycamper.observability.logger import get_logger

logger = get_logger(__name__)

QUOTE = '"'
COMMENT = "#"


@dataclass
class ParsedCSV:
    """Headers and row maps from one parsed file."""

    headers: list[str]
    rows: list[dict[str, str]] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.rows


def clean_line(line: str) -> str | None:
    """
    Clean one raw line, or return None if it should be skipped.

    Examples:
        >>> clean_line('x"a","b"\\r')
        '"a","b"'
        >>> clean_line('"a","b') is None
        True
        >>> clean_line("# exported by the registration system") is None
        True
    """
    if not line.strip() or line.startswith(COMMENT):
        return None

    start = line.find(QUOTE)
    end = line.rfind(QUOTE)
    if start == -1:
        logger.debug("Dropped line with no quoted cells", extra={"line": line})
        return None
    if start > 0 or end < len(line) - 1:
        logger.debug(
            "Trimmed junk characters",
            extra={"leading": line[:start], "trailing": line[end + 1:]},
        )
    line = line[start:end + 1]

    if line.count(QUOTE) % 2 != 0:
        logger.info("Filtered a line with uneven quote count", extra={"line": line})
        return None

    return line.strip()


def clean_content(lines: Iterable[str]) -> str:
    cleaned = (clean_line(line.rstrip("\r\n")) for line in lines)
    return "".join(line + "\n" for line in cleaned if line)


class CSVReader:
    """
    Reads a cleaned CSV file into a ParsedCSV.

    The first record is the header row. Any data row whose cell count differs
    from the header count raises a MALFORMED RosterException.
    """

    def __init__(self, encoding: str = "utf-8-sig"):
        self.encoding = encoding

    def read(self, file_path: str | Path) -> ParsedCSV:
        """
        Parse a file.

        Args:
            file_path: CSV file to read

        Returns:
            ParsedCSV with headers and rows

        Raises:
            RosterException: MALFORMED for inconsistent rows, WRAPPER for I/O errors
        """
        file_path = Path(file_path)
        try:
            with file_path.open(encoding=self.encoding, newline="") as handle:
                content = clean_content(handle)
        except (OSError, UnicodeDecodeError) as e:
            raise RosterException.wrap(f"Error in parsing file '{file_path.name}'", e) from e

        return self.parse(content, file_path)

    def parse(self, content: str, file_path: str | Path = "<memory>") -> ParsedCSV:
        records = csv.reader(io.StringIO(content))
        headers = next(records, [])
        parsed = ParsedCSV(headers=headers)

        # Header is row 1
        for row_number, record in enumerate(records, start=2):
            if len(record) != len(headers):
                raise RosterException.malformed_row(file_path, row_number, len(record), len(headers))
            parsed.rows.append(dict(zip(headers, record)))

        logger.debug(
            "Parsed CSV file",
            extra={"file": Path(file_path).name, "headers": len(headers), "rows": len(parsed.rows)},
        )
        return parsed
