"""
Camper model: a single roster row with a stable identity key.
"""

from collections.abc import Mapping
from types import MappingProxyType

from .identity import generate_camper_id


class Camper:
    """
    A mutable bag of named string fields with an immutable identity.

    Attributes:
        camper_id: Identity key, derived from first/last/grade when not given
        data: Read-only snapshot of the payload
    """

    __slots__ = ("_camper_id", "_data")

    def __init__(self, data: Mapping[str, str | None], camper_id: str | None = None):
        self._data: dict[str, str | None] = dict(data)
        self._camper_id = camper_id if camper_id is not None else generate_camper_id(self._data)

    @property
    def camper_id(self) -> str:
        return self._camper_id

    @property
    def data(self) -> Mapping[str, str | None]:
        return MappingProxyType(dict(self._data))

    def get_value(self, field: str) -> str | None:
        return self._data.get(field)

    def set_value(self, field: str, value: str | None) -> None:
        self._data[field] = value

    def has_value(self, field: str) -> bool:
        return self._data.get(field) is not None

    def fields(self) -> list[str]:
        return list(self._data.keys())

    def __repr__(self) -> str:
        return f"Camper(id={self._camper_id!r}, fields={len(self._data)})"
