"""
Field format registry and pipeline settings management.
"""

from .format_registry import FormatRegistry
from .settings_loader import SettingsBuilder, SettingsLoader

__all__ = [
    "FormatRegistry",
    "SettingsLoader",
    "SettingsBuilder",
]
