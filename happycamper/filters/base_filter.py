"""
Base filter interface for enriched rosters.

A filter decides whether one camper is shown (and exported when only
filtered rows are exported). Filters never modify campers.
"""

from abc import ABC, abstractmethod

from happycamper.core.models import Camper
from happycamper.core.models.data_constants import is_empty


class RosterFilter(ABC):
    """Abstract base class for camper filters."""

    filter_id: str = ""
    filter_name: str = ""

    @abstractmethod
    def apply(self, camper: Camper) -> bool:
        """
        Args:
            camper: Camper to check

        Returns:
            True if the camper passes this filter
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.filter_id})"


class FieldPresenceFilter(RosterFilter):
    """
    Show or hide campers depending on whether one field has data.

    Campers without the field at all always pass.
    """

    field_name: str = ""

    def __init__(self, show_with_value: bool = True, show_without_value: bool = True):
        self.show_with_value = show_with_value
        self.show_without_value = show_without_value

    def apply(self, camper: Camper) -> bool:
        value = camper.get_value(self.field_name)
        if value is None:
            return True
        if is_empty(value):
            return self.show_without_value
        return self.show_with_value
