"""
Field format registry.

Each source schema declares the headers it requires and a regex per field.
Values are checked with a full match; a failing value is a recoverable
format warning, never a fatal error.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from happycamper.core.validators import (
    BaseValidator,
    RegexValidator,
    RequiredHeaderValidator,
    ValidationError,
)

SESSION_PROGRAM = r"Session [1-6][AB]?(-[1-6][AB]?)?/[A-Za-z ,\-]+"
SESSION_PROGRAM_OR_EXTRA = rf"({SESSION_PROGRAM}|.*Family Camp.*|.*Echo Corps.*)"
SESSIONS_PROGRAMS = rf"{SESSION_PROGRAM_OR_EXTRA}( and {SESSION_PROGRAM_OR_EXTRA})*"

INCLUSIVE_NAMES = r"^[A-Za-zÁÉÍÓÚáéíóúÑñüÜ '.,/\-\(\)]+$"
GRADES = r"^(1st|2nd|3rd|[4-9]th|1[0-2]th|12th\+)$"
GRADES_LIST = r"^(1st|2nd|3rd|4th|5th|6th|7th|8th|9th|10th|11th|12th|12th\+)$"
PERIOD = r"^(1|2|3)$"
NON_EMPTY = r"^.+$"
PREFERENCE_LIST = r"^[^,]+(,[^,]+)*(\s+and\s+[^,]+)?$"
PROGRAM_NAME = r"^[A-Za-z ,\-]+$"


class FormatRegistry:
    """
    Applies a schema's required headers and field formats to rows.

    Validators are built from rule dicts (rule_type, field_name, parameters)
    and looked up in VALIDATOR_REGISTRY.
    """

    VALIDATOR_REGISTRY: dict[str, type[BaseValidator]] = {
        "regex": RegexValidator,
        "required_header": RequiredHeaderValidator,
    }

    def __init__(self, formats: Mapping[str, str], required_headers: Iterable[str] = ()):
        """
        Initialize the registry.

        Args:
            formats: Field name to regex pattern (full match)
            required_headers: Headers every row must carry
        """
        self.formats = dict(formats)
        self.required_headers = list(required_headers)
        self.header_validator = self._build_validator(
            {"rule_type": "required_header", "field_name": "*", "parameters": {"headers": self.required_headers}}
        )
        self.validators: list[RegexValidator] = [
            self._build_validator({"rule_type": "regex", "field_name": field, "parameters": {"pattern": pattern}})
            for field, pattern in self.formats.items()
        ]

    def _build_validator(self, rule: dict[str, Any]) -> BaseValidator:
        validator_class = self.VALIDATOR_REGISTRY.get(rule["rule_type"])
        if not validator_class:
            raise ValueError(f"Unknown rule type: {rule['rule_type']}")
        try:
            return validator_class(rule["field_name"], rule.get("parameters", {}))
        except ValueError as e:
            raise ValueError(f"Failed to create validator for field '{rule['field_name']}': {e}") from e

    def missing_headers(self, row: Mapping[str, str | None]) -> list[str]:
        return self.header_validator.missing_headers(row)

    def find_violations(self, row: Mapping[str, str | None]) -> list[tuple[str, str]]:
        """
        Check every format against a row.

        Args:
            row: Row payload

        Returns:
            (field, pattern) for each non-None value that fails its format
        """
        violations = []
        for validator in self.validators:
            try:
                validator.validate(row.get(validator.field_name), row)
            except ValidationError:
                violations.append((validator.field_name, validator.pattern.pattern))
        return violations

