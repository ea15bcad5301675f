"""
Field rule interface for roster rows.

A rule inspects one cell (or the key set of a row) and raises
ValidationError on failure. Callers decide whether a failure is fatal; the
format registry turns every failure into a recoverable warning.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any


class ValidationError(Exception):
    """A roster field broke one rule."""

    def __init__(self, rule_name: str, field_name: str, message: str, value: str | None = None):
        self.rule_name = rule_name
        self.field_name = field_name
        self.value = value
        self.message = message
        super().__init__(f"{field_name} ({rule_name}): {message}")


class BaseValidator(ABC):
    """
    One rule bound to one field.

    Rules are built by FormatRegistry from dicts of the form
    {"rule_type": ..., "field_name": ..., "parameters": {...}}, so every
    subclass takes the same two constructor arguments.
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        self.field_name = field_name
        self.parameters = dict(parameters or {})

    @abstractmethod
    def validate(self, value: str | None, row: Mapping[str, str | None]) -> None:
        """
        Check a cell.

        Args:
            value: Cell value for field_name (None when the row has no such cell)
            row: Whole row, for rules that look at more than one cell

        Raises:
            ValidationError: If the rule is broken
        """

    @property
    @abstractmethod
    def rule_type(self) -> str:
        """Key of this rule in FormatRegistry.VALIDATOR_REGISTRY."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.field_name!r})"
