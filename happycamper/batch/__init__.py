"""
Roster import, enrichment and export.
"""

from .pipeline import RosterPipeline
from .readers import CSVReader, ParsedCSV, RosterReader
from .writers import RosterCSVWriter

__all__ = [
    "RosterPipeline",
    "CSVReader",
    "ParsedCSV",
    "RosterReader",
    "RosterCSVWriter",
]
