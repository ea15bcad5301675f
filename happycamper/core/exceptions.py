"""
Fatal roster errors.

A RosterException stops the pipeline. It carries a one-line summary and a
longer explanation for the user; DetailedRosterException adds a small table
of context rows (for example, each missing header and what needs it).
"""

from enum import Enum
from pathlib import Path


class ErrorType(Enum):
    """Category of a fatal roster error."""

    MALFORMED = "Malformed data"
    MISSING_DATA = "Missing data"
    HEADER = "Header error"
    FILE = "File error"
    INTERNAL = "Internal error"
    WRAPPER = "Wrapped error"

    @property
    def label(self) -> str:
        return self.value


class RosterException(Exception):
    """Raised when a roster cannot be imported, validated or enriched."""

    def __init__(self, error_type: ErrorType, summary: str, explanation: str):
        self.error_type = error_type
        self.summary = summary
        self.explanation = explanation
        super().__init__(f"{summary}: {explanation}")

    @property
    def is_wrapper(self) -> bool:
        return self.error_type == ErrorType.WRAPPER

    @classmethod
    def file_error(cls, summary: str, explanation: str) -> "RosterException":
        return cls(ErrorType.FILE, summary, explanation)

    @classmethod
    def malformed_row(
        cls,
        file_name: str | Path,
        row_number: int,
        items_in_row: int,
        header_count: int,
    ) -> "DetailedRosterException":
        """
        Build the error for a data row whose cell count differs from the header row.

        Args:
            file_name: Source file
            row_number: 1-based row number (the header row is row 1)
            items_in_row: Number of cells found in the row
            header_count: Number of headers

        Returns:
            DetailedRosterException with one context row
        """
        more_or_fewer = "more" if items_in_row > header_count else "fewer"
        return DetailedRosterException(
            ErrorType.MALFORMED,
            "Malformed data detected - double check file contents before selecting",
            f"A row in file '{Path(file_name).name}' has {more_or_fewer} columns than the header row.",
            table_headers=["Malformed Row Index", "Items in row", "Number of headers"],
            table_data=[[str(row_number), str(items_in_row), str(header_count)]],
        )

    @classmethod
    def no_data(cls, file_name: str | Path, has_headers: bool) -> "RosterException":
        detail = "contains headers but no rows." if has_headers else "contains no data rows."
        return cls(
            ErrorType.MISSING_DATA,
            "No data found",
            f"File '{Path(file_name).name}' {detail}",
        )

    @classmethod
    def missing_headers_basic(cls, missing_headers: list[str]) -> "RosterException":
        return cls(
            ErrorType.HEADER,
            "Missing required headers",
            "Required headers were not found: " + ", ".join(missing_headers),
        )

    @classmethod
    def missing_headers(cls, file_name: str | Path, missing_headers: list[str]) -> "DetailedRosterException":
        return DetailedRosterException(
            ErrorType.HEADER,
            "Missing required headers",
            f"File '{Path(file_name).name}' is missing headers needed to build a roster.",
            table_headers=["Missing Header", "Required For"],
            table_data=[[header, "Basic Setup"] for header in missing_headers],
        )

    @classmethod
    def feature_prevalidation_failed(cls, feature_name: str) -> "RosterException":
        return cls(
            ErrorType.HEADER,
            f"Cannot run {feature_name}",
            f"The input files lack headers required by '{feature_name}', "
            "which every enriched roster needs. See warnings for the missing headers.",
        )

    @classmethod
    def feature_postvalidation_failed(cls, feature_name: str) -> "RosterException":
        return cls(
            ErrorType.INTERNAL,
            f"{feature_name} produced an invalid roster",
            f"Post-validation failed after applying '{feature_name}'. No roster was created.",
        )

    @classmethod
    def wrap(cls, summary: str, cause: BaseException) -> "RosterException":
        wrapped = cls(ErrorType.WRAPPER, summary, str(cause))
        wrapped.__cause__ = cause
        return wrapped


class DetailedRosterException(RosterException):
    """RosterException with tabular context for the user."""

    def __init__(
        self,
        error_type: ErrorType,
        summary: str,
        explanation: str,
        table_headers: list[str] | None = None,
        table_data: list[list[str]] | None = None,
    ):
        super().__init__(error_type, summary, explanation)
        self.table_headers = table_headers or []
        self.table_data = table_data or []


class FeatureNotEnabledError(RuntimeError):
    """Raised when a feature lookup is made on a roster the feature was never applied to."""

    def __init__(self, feature_id: str):
        self.feature_id = feature_id
        super().__init__(f"Feature '{feature_id}' is not enabled on this roster")
