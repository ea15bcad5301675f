"""
Per-run collector for roster warnings and errors.

The WarningManager is the user-facing diagnostics channel: everything logged
here is shown to the user at the end of a run, grouped by type. Operational
logging goes through the structured logger instead.
"""

from happycamper.core.exceptions import ErrorType, RosterException
from happycamper.core.models.roster_warning import RosterWarning, WarningType


class WarningManager:
    """
    Collects RosterWarning and RosterException entries, grouped by type.

    Groups are returned in type declaration order; entries within a group
    keep insertion order.
    """

    def __init__(self):
        self._warning_log: dict[WarningType, list[RosterWarning]] = {}
        self._error_log: dict[ErrorType, list[RosterException]] = {}

    def log_warning(self, warning: RosterWarning) -> None:
        self._warning_log.setdefault(warning.warning_type, []).append(warning)

    def log_error(self, error: RosterException) -> None:
        self._error_log.setdefault(error.error_type, []).append(error)

    def has_warnings(self) -> bool:
        return bool(self._warning_log)

    def has_errors(self) -> bool:
        return bool(self._error_log)

    def get_warning_log(self) -> dict[WarningType, list[RosterWarning]]:
        return {
            warning_type: list(self._warning_log[warning_type])
            for warning_type in WarningType
            if warning_type in self._warning_log
        }

    def get_error_log(self) -> dict[ErrorType, list[RosterException]]:
        return {
            error_type: list(self._error_log[error_type])
            for error_type in ErrorType
            if error_type in self._error_log
        }

    def warning_count(self, warning_type: WarningType | None = None) -> int:
        if warning_type is not None:
            return len(self._warning_log.get(warning_type, []))
        return sum(len(entries) for entries in self._warning_log.values())

    def error_count(self) -> int:
        return sum(len(entries) for entries in self._error_log.values())

    def summary(self) -> dict[str, dict[str, int]]:
        """Counts per type, keyed by type name, for logging and metrics."""
        return {
            "warnings": {t.name: len(entries) for t, entries in self.get_warning_log().items()},
            "errors": {t.name: len(entries) for t, entries in self.get_error_log().items()},
        }
