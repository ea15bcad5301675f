"""
RegexValidator - a cell must match its field format in full.
"""

import re
from collections.abc import Mapping
from typing import Any

from .base_validator import BaseValidator, ValidationError


class RegexValidator(BaseValidator):
    """
    Full-match format rule for one roster field.

    Parameters:
    - pattern: regex source or a compiled pattern

    Absent cells (None) pass; a missing value is reported by the features
    that need it, not as a format problem. Empty strings are checked.
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)

        pattern = self.parameters.get("pattern")
        if not pattern:
            raise ValueError(f"RegexValidator for '{field_name}' requires 'pattern' parameter")

        if isinstance(pattern, re.Pattern):
            self.pattern = pattern
        else:
            try:
                self.pattern = re.compile(pattern)
            except re.error as e:
                raise ValueError(f"Invalid regex pattern for '{field_name}': {e}") from e

    def validate(self, value: str | None, row: Mapping[str, str | None]) -> None:
        if value is None or self.pattern.fullmatch(value):
            return
        raise ValidationError(
            rule_name=self.rule_type,
            field_name=self.field_name,
            message=f"'{value}' does not match pattern {self.pattern.pattern!r}",
            value=value,
        )

    @property
    def rule_type(self) -> str:
        return "regex"
