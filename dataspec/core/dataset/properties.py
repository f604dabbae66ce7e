from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping, Optional


class DatasetProperties:
    """Properties supplied by a caller when a dataset is created or reconfigured.

    Immutable and key-ordered. A specification carries these as its original
    properties so an admin layer can report exactly what was passed in.
    """

    __slots__ = ("_properties",)

    EMPTY: "DatasetProperties"

    def __init__(self, properties: Optional[Mapping[str, str]] = None):
        items = sorted((properties or {}).items())
        object.__setattr__(self, "_properties", MappingProxyType(dict(items)))

    def __setattr__(self, key, value):
        raise AttributeError("DatasetProperties is immutable")

    @classmethod
    def of(cls, properties: Optional[Mapping[str, str]]) -> "DatasetProperties":
        return cls(properties)

    @staticmethod
    def builder() -> "DatasetPropertiesBuilder":
        return DatasetPropertiesBuilder()

    @property
    def properties(self) -> Mapping[str, str]:
        return self._properties

    def __eq__(self, other) -> bool:
        if not isinstance(other, DatasetProperties):
            return NotImplemented
        return dict(self._properties) == dict(other._properties)

    def __hash__(self) -> int:
        return hash(tuple(self._properties.items()))

    def __repr__(self) -> str:
        return f"DatasetProperties({dict(self._properties)!r})"


DatasetProperties.EMPTY = DatasetProperties()


class DatasetPropertiesBuilder:
    def __init__(self):
        self._properties: Dict[str, str] = {}

    def add(self, key: str, value) -> "DatasetPropertiesBuilder":
        # Numbers and booleans are stored as their text form
        self._properties[key] = str(value)
        return self

    def add_all(self, properties: Mapping[str, str]) -> "DatasetPropertiesBuilder":
        for k, v in properties.items():
            self.add(k, v)
        return self

    def build(self) -> DatasetProperties:
        return DatasetProperties(self._properties)
