"""
Roster export writers.
"""

from .csv_writer import RosterCSVWriter, export_cell

__all__ = [
    "RosterCSVWriter",
    "export_cell",
]
