"""
RequiredHeaderValidator - a row must carry every header a roster needs.
"""

from collections.abc import Mapping
from typing import Any

from .base_validator import BaseValidator, ValidationError


class RequiredHeaderValidator(BaseValidator):
    """
    Key-presence rule for a whole row; field_name is "*".

    A header whose cell is None still counts as present.

    Parameters:
    - headers: required header names, in reporting order
    """

    def __init__(self, field_name: str = "*", parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)
        self.headers: list[str] = list(self.parameters.get("headers", []))

    def missing_headers(self, row: Mapping[str, str | None]) -> list[str]:
        return [header for header in self.headers if header not in row]

    def validate(self, value: str | None, row: Mapping[str, str | None]) -> None:
        missing = self.missing_headers(row)
        if missing:
            raise ValidationError(
                rule_name=self.rule_type,
                field_name=self.field_name,
                message="Missing headers: " + ", ".join(missing),
            )

    @property
    def rule_type(self) -> str:
        return "required_header"
