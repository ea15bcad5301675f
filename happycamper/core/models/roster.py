"""
Roster: an ordered table of campers plus a header registry.

The header registry maps each header name to a position and a visibility
flag. Positions follow insertion order until reorder_headers() puts them in
canonical display order.
"""

from collections.abc import Iterable

from happycamper.core.exceptions import RosterException
from happycamper.core.rules.format_registry import FormatRegistry

from .camper import Camper
from .roster_header import RosterHeader


class Roster:
    """
    Ordered collection of Camper records with header metadata.

    Subclasses describe a particular source schema (enrollment, activity)
    or the enriched output table.
    """

    REQUIRED_HEADERS: tuple[str, ...] = ()
    FORMATS = FormatRegistry({})

    def __init__(self, campers: Iterable[Camper] | None = None):
        self._campers: list[Camper] = list(campers or [])
        self._header_map: dict[str, int] = {}
        self._header_visibility: dict[str, bool] = {}

    # ------------------------------------------------------------------
    # Campers
    # ------------------------------------------------------------------

    @property
    def campers(self) -> tuple[Camper, ...]:
        return tuple(self._campers)

    def add_camper(self, camper: Camper) -> None:
        self._campers.append(camper)

    def get_camper_by_id(self, camper_id: str) -> Camper | None:
        for camper in self._campers:
            if camper.camper_id == camper_id:
                return camper
        return None

    def get_value(self, camper_id: str, header: str) -> str | None:
        camper = self.get_camper_by_id(camper_id)
        return camper.get_value(header) if camper else None

    def set_value(self, camper_id: str, header: str, value: str | None) -> None:
        """
        Set a cell, registering the header if needed.

        Unknown camper ids are ignored.
        """
        camper = self.get_camper_by_id(camper_id)
        if camper is None:
            return
        self.add_header(header)
        camper.set_value(header, value)

    def __len__(self) -> int:
        return len(self._campers)

    def __iter__(self):
        return iter(self._campers)

    # ------------------------------------------------------------------
    # Headers
    # ------------------------------------------------------------------

    def add_header(self, header: str, default_value: str | None = None) -> None:
        """
        Register a header.

        Registering an existing header is a no-op. A new header gets the next
        position and the default visibility of its known field (visible for
        custom headers). A non-None default_value is written to every camper.

        Args:
            header: Header name
            default_value: Value to back-fill onto existing campers
        """
        if header in self._header_map:
            return

        self._header_map[header] = len(self._header_map)
        known = RosterHeader.determine_header_type(header)
        self._header_visibility[header] = known.default_visibility if known else True

        if default_value is not None:
            for camper in self._campers:
                camper.set_value(header, default_value)

    def add_headers(self, headers: Iterable[str]) -> None:
        for header in headers:
            self.add_header(header)

    def has_header(self, header: str) -> bool:
        return header in self._header_map

    def get_all_headers(self) -> list[str]:
        return list(self._header_map.keys())

    def get_header_map(self) -> dict[str, int]:
        return dict(self._header_map)

    def get_visible_headers(self) -> list[str]:
        return [header for header in self._header_map if self._header_visibility.get(header, True)]

    def get_ordered_headers(self) -> list[str]:
        return RosterHeader.order_header_names(self.get_all_headers())

    def get_ordered_visible_headers(self) -> list[str]:
        return RosterHeader.order_header_names(self.get_visible_headers())

    def is_header_visible(self, header: str) -> bool:
        return self._header_visibility.get(header, True)

    def set_header_visibility(self, header: str, visible: bool) -> None:
        if header in self._header_map:
            self._header_visibility[header] = visible

    def set_headers_visibility(self, visibility: dict[str, bool]) -> None:
        for header, visible in visibility.items():
            self.set_header_visibility(header, visible)

    def set_all_headers_visibility(self, visible: bool) -> None:
        for header in self._header_map:
            self._header_visibility[header] = visible

    def reset_header_visibility(self) -> None:
        """Restore each header's default visibility."""
        for header in self._header_map:
            known = RosterHeader.determine_header_type(header)
            self._header_visibility[header] = known.default_visibility if known else True

    def reorder_headers(self) -> None:
        """Reassign header positions in canonical display order."""
        RosterHeader.update_header_map_order(self._header_map)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate_headers(self, checked_headers: Iterable[str]) -> None:
        """
        Ensure every header the schema requires is present.

        Args:
            checked_headers: Table header names or one row's field names

        Raises:
            RosterException: HEADER error listing the missing headers
        """
        missing = self.FORMATS.missing_headers(dict.fromkeys(checked_headers))
        if missing:
            raise RosterException.missing_headers_basic(missing)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(campers={len(self._campers)}, headers={len(self._header_map)})"
