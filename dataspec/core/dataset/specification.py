from __future__ import annotations

import logging
import re
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Union

from dataspec.core.config import get_settings
from dataspec.core.dataset.namespacer import namespace
from dataspec.core.dataset.properties import DatasetProperties
from dataspec.core.errors import DuplicateDatasetError, PropertyFormatError

_log = logging.getLogger("dataspec.build")

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT_BITS = {"int": 32, "long": 64}


def _parse_integer(key: str, raw: str, kind: str) -> int:
    if raw is None or not _INT_RE.fullmatch(raw):
        raise PropertyFormatError(key, raw, kind)
    value = int(raw)
    bits = _INT_BITS[kind]
    if not -(1 << (bits - 1)) <= value < (1 << (bits - 1)):
        raise PropertyFormatError(key, raw, kind)
    return value


def _ordered(mapping: Optional[Mapping]) -> Mapping:
    return MappingProxyType(dict(sorted((mapping or {}).items())))


class DatasetSpecification:
    """
    Hierarchical metadata needed to instantiate a dataset at runtime.

    A specification holds the dataset name and type, custom string properties
    that the dataset implementation depends on, and one specification per
    embedded dataset. An indexed table built from a data table and an index
    table carries both table specs along with its own.

    Instances are immutable. ``properties`` and ``specifications`` iterate in
    ascending key order so equal specs serialize to identical text. Use
    ``DatasetSpecification.builder(name, type)`` to construct one.
    """

    __slots__ = ("_name", "_type", "_original_properties", "_properties", "_specs", "_hash")

    def __init__(
        self,
        name: str,
        type_name: str,
        properties: Optional[Mapping[str, str]] = None,
        specifications: Optional[Mapping[str, "DatasetSpecification"]] = None,
        original_properties: Optional[Mapping[str, str]] = None,
    ):
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_type", type_name)
        object.__setattr__(self, "_properties", _ordered(properties))
        object.__setattr__(self, "_specs", _ordered(specifications))
        object.__setattr__(
            self,
            "_original_properties",
            None if original_properties is None else _ordered(original_properties),
        )
        object.__setattr__(self, "_hash", None)

    def __setattr__(self, key, value):
        raise AttributeError("DatasetSpecification is immutable")

    def __delattr__(self, key):
        raise AttributeError("DatasetSpecification is immutable")

    @staticmethod
    def builder(name: str, type_name: str, *, strict: Optional[bool] = None) -> "DatasetSpecificationBuilder":
        return DatasetSpecificationBuilder(name, type_name, strict=strict)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def name(self) -> str:
        return self._name

    @property
    def type(self) -> str:
        return self._type

    def get_property(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._properties.get(key, default)

    def get_int_property(self, key: str, default: int) -> int:
        if key not in self._properties:
            return default
        return _parse_integer(key, self._properties[key], "int")

    def get_long_property(self, key: str, default: int) -> int:
        if key not in self._properties:
            return default
        return _parse_integer(key, self._properties[key], "long")

    @property
    def properties(self) -> Mapping[str, str]:
        return self._properties

    @property
    def original_properties(self) -> Optional[Mapping[str, str]]:
        """Properties passed in when the dataset was created or reconfigured.

        Always ``None`` for embedded datasets.
        """
        return self._original_properties

    def get_specification(self, name: str) -> Optional["DatasetSpecification"]:
        return self._specs.get(name)

    @property
    def specifications(self) -> Mapping[str, "DatasetSpecification"]:
        return self._specs

    def set_original_properties(
        self, original: Union[DatasetProperties, Mapping[str, str]]
    ) -> "DatasetSpecification":
        """Return a copy of this spec carrying ``original`` as its original properties."""
        props = original.properties if isinstance(original, DatasetProperties) else original
        return DatasetSpecification(self._name, self._type, self._properties, self._specs, props)

    def is_parent(self, dataset_name: Optional[str]) -> bool:
        """True if ``dataset_name`` is one of the non-composite datasets in this tree.

        Composite nodes are only searched when ``dataset_name`` starts with
        their name; the check is a plain string prefix.
        """
        if dataset_name is None:
            return False
        return _is_parent(dataset_name, self)

    def _renamed(
        self, name: str, specifications: Mapping[str, "DatasetSpecification"]
    ) -> "DatasetSpecification":
        # Namespaced nodes never carry original properties
        return DatasetSpecification(name, self._type, self._properties, specifications)

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------
    def __eq__(self, other) -> bool:
        if self is other:
            return True
        if not isinstance(other, DatasetSpecification):
            return NotImplemented
        return (
            self._name == other._name
            and self._type == other._type
            and dict(self._properties) == dict(other._properties)
            and dict(self._specs) == dict(other._specs)
        )

    def __hash__(self) -> int:
        if self._hash is None:
            h = hash((
                self._name,
                self._type,
                tuple(self._properties.items()),
                tuple(self._specs.items()),
            ))
            object.__setattr__(self, "_hash", h)
        return self._hash

    def __repr__(self) -> str:
        return (
            "DatasetSpecification("
            f"dataset_specs={dict(self._specs)!r}, "
            f"name={self._name!r}, "
            f"type={self._type!r}, "
            f"properties={dict(self._properties)!r})"
        )


def _is_parent(dataset_name: str, spec: DatasetSpecification) -> bool:
    if not spec.specifications and spec.name == dataset_name:
        return True
    if dataset_name.startswith(spec.name):
        return any(_is_parent(dataset_name, child) for child in spec.specifications.values())
    return False


class DatasetSpecificationBuilder:
    """Collects properties and embedded specs, then builds a namespaced spec.

    Not safe for concurrent use. Later writes to the same property key or
    embedded name replace earlier ones unless the builder is strict.
    """

    def __init__(self, name: str, type_name: str, *, strict: Optional[bool] = None):
        self._name = name
        self._type = type_name
        self._strict = get_settings().strict_embedded_names if strict is None else bool(strict)
        self._properties: Dict[str, str] = {}
        self._specs: Dict[str, DatasetSpecification] = {}

    def datasets(self, *specs) -> "DatasetSpecificationBuilder":
        """Add embedded specs, as varargs or as a single iterable."""
        if len(specs) == 1 and not isinstance(specs[0], DatasetSpecification):
            items: Iterable[DatasetSpecification] = specs[0]
        else:
            items = specs
        for spec in items:
            if spec.name in self._specs:
                if self._strict:
                    raise DuplicateDatasetError(self._name, spec.name)
                _log.warning("Replacing embedded dataset %r in %r", spec.name, self._name)
            self._specs[spec.name] = spec
        return self

    def property(self, key: str, value: str) -> "DatasetSpecificationBuilder":
        self._properties[key] = value
        return self

    def properties(self, props: Mapping[str, str]) -> "DatasetSpecificationBuilder":
        for k, v in props.items():
            self.property(k, v)
        return self

    def build(self) -> DatasetSpecification:
        raw = DatasetSpecification(self._name, self._type, self._properties, self._specs)
        spec = namespace(raw)
        _log.debug("built spec %r type=%r embedded=%d", spec.name, spec.type, len(spec.specifications))
        return spec
