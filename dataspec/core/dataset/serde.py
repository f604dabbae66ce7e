"""
Canonical text form of dataset specifications.

Deploy-time validation compares specs as serialized text, so the JSON form is
emitted with sorted keys and compact separators: equal specs always produce
identical bytes.

Dict layout:
    {
      "name": "orders",
      "type": "indexedTable",
      "properties": {"columnsToIndex": "id"},
      "dataset_specs": {"orders.d": {...}, "orders.i": {...}},
      "original_properties": {...}      # top level only, when present
    }

``from_dict`` restores an already namespaced tree as-is; it never renames.
It also accepts the camelCase field names ``datasetSpecs`` and
``originalProperties`` used by older catalog text. ``to_dict`` always emits the
snake_case names, so text re-serialized from such input differs from the
original bytes even though the decoded specs compare equal.

YAML input may not use anchors or aliases.
"""
from __future__ import annotations

import json
import logging
from hashlib import sha256
from typing import Any, Dict

import yaml
from yaml.composer import ComposerError

from dataspec.core.dataset.specification import DatasetSpecification
from dataspec.core.errors import SpecificationFormatError

_log = logging.getLogger("dataspec.serde")


def to_dict(spec: DatasetSpecification, *, include_original: bool = True) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "name": spec.name,
        "type": spec.type,
        "properties": dict(spec.properties),
        "dataset_specs": {
            key: to_dict(child, include_original=False) for key, child in spec.specifications.items()
        },
    }
    if include_original and spec.original_properties is not None:
        out["original_properties"] = dict(spec.original_properties)
    return out


def _string_map(raw: Any, field: str) -> Dict[str, str]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise SpecificationFormatError(f"{field} must be a mapping, got {type(raw).__name__}")
    out: Dict[str, str] = {}
    for k, v in raw.items():
        if not isinstance(k, str) or not isinstance(v, str):
            raise SpecificationFormatError(f"{field} entries must be strings: {k!r}={v!r}")
        out[k] = v
    return out


def _field(data: Dict[str, Any], name: str, legacy: str) -> Any:
    if name in data:
        return data[name]
    return data.get(legacy)


def _from_dict(data: Any, *, top_level: bool) -> DatasetSpecification:
    if not isinstance(data, dict):
        raise SpecificationFormatError(f"specification must be a mapping, got {type(data).__name__}")

    name = data.get("name")
    type_name = data.get("type")
    if not isinstance(name, str) or not isinstance(type_name, str):
        raise SpecificationFormatError("specification requires string 'name' and 'type'")

    raw_specs = _field(data, "dataset_specs", "datasetSpecs") or {}
    if not isinstance(raw_specs, dict):
        raise SpecificationFormatError("dataset_specs must be a mapping")
    children = {key: _from_dict(child, top_level=False) for key, child in raw_specs.items()}

    original = None
    raw_original = _field(data, "original_properties", "originalProperties")
    if raw_original is not None:
        if top_level:
            original = _string_map(raw_original, "original_properties")
        else:
            _log.warning("Dropping original_properties on embedded dataset %r", name)

    return DatasetSpecification(
        name,
        type_name,
        _string_map(data.get("properties"), "properties"),
        children,
        original,
    )


def from_dict(data: Any) -> DatasetSpecification:
    return _from_dict(data, top_level=True)


def to_json(spec: DatasetSpecification, *, include_original: bool = True) -> str:
    return json.dumps(
        to_dict(spec, include_original=include_original),
        sort_keys=True,
        separators=(",", ":"),
    )


def deterministic_hash(spec: DatasetSpecification) -> str:
    """Content hash over the fields that define equality."""
    return sha256(to_json(spec, include_original=False).encode()).hexdigest()


class _NoAliasLoader(yaml.SafeLoader):
    """SafeLoader that refuses anchors/aliases.

    An alias shares one node many times, so a small document can expand into
    an arbitrarily large tree once decoded.
    """

    def compose_node(self, parent, index):
        if self.check_event(yaml.AliasEvent):
            event = self.peek_event()
            raise ComposerError(
                None, None, "aliases are not allowed in specification documents", event.start_mark
            )
        return super().compose_node(parent, index)


def loads(text: str) -> DatasetSpecification:
    """Decode a spec from JSON, falling back to YAML (without aliases)."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        try:
            data = yaml.load(text, Loader=_NoAliasLoader)
        except yaml.YAMLError as exc:
            raise SpecificationFormatError(f"not valid JSON or YAML: {exc}") from exc
    return from_dict(data)
