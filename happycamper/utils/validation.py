"""
File path validation for roster imports and exports.

Each check returns a FileCheckResult; checks are chained and stop at the
first failure. Callers that prefer exceptions use the validate_* wrappers,
which raise ValidationError.
"""

import os
import re
from collections.abc import Callable
from pathlib import Path

from pydantic import BaseModel


class ValidationError(ValueError):
    """Raised when a file path fails validation."""
    pass


INVALID_FILE_NAME_CHARACTERS = re.compile(r'[<>:"|?*$]')


class FileCheckResult(BaseModel):
    """
    Outcome of a file check.

    Attributes:
        valid: Whether every check passed
        path: The checked path (None when no path was given)
        summary: Short failure title, empty on success
        message: Longer failure description, empty on success
    """

    valid: bool
    path: Path | None = None
    summary: str = ""
    message: str = ""

    @classmethod
    def success(cls, path: Path) -> "FileCheckResult":
        return cls(valid=True, path=path)

    @classmethod
    def failure(cls, summary: str, message: str, path: Path | None = None) -> "FileCheckResult":
        return cls(valid=False, path=path, summary=summary, message=message)

    def and_then(self, check: Callable[[Path], "FileCheckResult"]) -> "FileCheckResult":
        """Run the next check only if this one passed."""
        if not self.valid:
            return self
        return check(self.path)


# =======================
# IMPORT CHECKS
# =======================

def _check_exists(path: Path | None) -> FileCheckResult:
    if path is None:
        return FileCheckResult.failure("Invalid File", "The file path is null")
    if not path.exists():
        return FileCheckResult.failure(
            "File Not Found",
            f"Couldn't find file '{path.name}'\nIt may have been moved or deleted.\nFull file path:\n{path}",
            path,
        )
    return FileCheckResult.success(path)


def _check_readable(path: Path) -> FileCheckResult:
    if not path.is_file() or not os.access(path, os.R_OK):
        return FileCheckResult.failure(
            "Cannot Read File",
            f"Cannot read file '{path.name}'\n"
            "Make sure another application isn't using it and you have permission to access it.",
            path,
        )
    return FileCheckResult.success(path)


def _check_csv_extension(path: Path) -> FileCheckResult:
    if path.suffix.lower() != ".csv":
        return FileCheckResult.failure(
            "Invalid File Extension",
            f"The file '{path.name}' is not a valid CSV file.\nPlease provide a file with the .csv extension.",
            path,
        )
    return FileCheckResult.success(path)


def check_import_file(path: str | Path | None) -> FileCheckResult:
    """
    Check that an input roster file exists, is readable and is a .csv file.

    Examples:
        >>> check_import_file(None).summary
        'Invalid File'
    """
    path = Path(path) if path is not None else None
    return _check_exists(path).and_then(_check_readable).and_then(_check_csv_extension)


# =======================
# EXPORT CHECKS
# =======================

def _has_extension(path: Path, allowed_extensions: tuple[str, ...]) -> bool:
    name = path.name.lower()
    return any(name.endswith("." + extension.lower()) for extension in allowed_extensions)


def _check_directory(path: Path) -> FileCheckResult:
    parent = path.parent
    if not parent.exists():
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError:
            return FileCheckResult.failure(
                "Cannot create directory", f"Cannot create directory: {parent.resolve()}", path
            )
    return FileCheckResult.success(path)


def _check_writable(path: Path) -> FileCheckResult:
    if path.exists() and not os.access(path, os.W_OK):
        return FileCheckResult.failure(
            "Cannot write to file",
            "Cannot write to file. It may be in use by another application or you don't have permission.",
            path,
        )
    return FileCheckResult.success(path)


def _check_file_name(path: Path) -> FileCheckResult:
    if INVALID_FILE_NAME_CHARACTERS.search(path.name):
        return FileCheckResult.failure("Invalid file name", "File name contains invalid characters", path)
    return FileCheckResult.success(path)


def check_export_file(path: str | Path | None, allowed_extensions: tuple[str, ...] = ("csv",)) -> FileCheckResult:
    """
    Check that a roster can be exported to a path.

    Creates the parent directory when it does not exist yet.

    Args:
        path: Destination path
        allowed_extensions: Extensions without the dot; empty allows any

    Returns:
        FileCheckResult for the first failing check, or success
    """
    if path is None:
        return FileCheckResult.failure("No file selected", "Please select a file to export to.")
    path = Path(path)

    if allowed_extensions and not _has_extension(path, allowed_extensions):
        return FileCheckResult.failure(
            "Invalid file extension",
            "Invalid file extension. Allowed extensions: " + ", ".join(allowed_extensions),
            path,
        )

    return FileCheckResult.success(path).and_then(_check_file_name).and_then(_check_directory).and_then(
        _check_writable
    )


def validate_export_file(path: str | Path | None, allowed_extensions: tuple[str, ...] = ("csv",)) -> Path:
    """
    Validate an export destination.

    Returns:
        The destination as a Path

    Raises:
        ValidationError: If any export check fails
    """
    result = check_export_file(path, allowed_extensions)
    if not result.valid:
        raise ValidationError(f"{result.summary}: {result.message}")
    return result.path


def ensure_extension(path: str | Path | None, *allowed_extensions: str) -> Path | None:
    """
    Append the first allowed extension unless the path already has one.

    Examples:
        >>> ensure_extension("out/roster", "csv").name
        'roster.csv'
        >>> ensure_extension("roster.CSV", "csv").name
        'roster.CSV'
    """
    if path is None or not allowed_extensions:
        return Path(path) if path is not None else None
    path = Path(path)
    if _has_extension(path, allowed_extensions):
        return path
    return path.with_name(f"{path.name}.{allowed_extensions[0]}")
