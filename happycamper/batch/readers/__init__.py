"""
Roster file readers.
"""

from .csv_reader import CSVReader, ParsedCSV
from .roster_reader import RosterReader

__all__ = [
    "CSVReader",
    "ParsedCSV",
    "RosterReader",
]
