"""
Roster field validators.

Provides validators for required headers and full-match regex formats.
"""

from .base_validator import BaseValidator, ValidationError
from .regex_validator import RegexValidator
from .required_header_validator import RequiredHeaderValidator

__all__ = [
    "BaseValidator",
    "ValidationError",
    "RegexValidator",
    "RequiredHeaderValidator",
]
