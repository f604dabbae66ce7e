from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from dataspec.core.dataset.serde import to_dict
from dataspec.core.dataset.specification import DatasetSpecification


@dataclass(frozen=True)
class SpecificationDiff:
    changed: bool
    added: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
    modified: List[str] = field(default_factory=list)


def _dict_diff(a: Any, b: Any, prefix: str = "") -> Dict[str, List[str]]:
    changes: Dict[str, List[str]] = {"added": [], "removed": [], "modified": []}

    if isinstance(a, dict) and isinstance(b, dict):
        a_keys = set(a.keys())
        b_keys = set(b.keys())
        for k in sorted(b_keys - a_keys):
            changes["added"].append(prefix + k)
        for k in sorted(a_keys - b_keys):
            changes["removed"].append(prefix + k)
        for k in sorted(a_keys & b_keys):
            sub = _dict_diff(a[k], b[k], prefix + k + "/")
            for typ in ("added", "removed", "modified"):
                changes[typ].extend(sub[typ])
        return changes

    if a != b:
        changes["modified"].append(prefix.rstrip("/") or "$")
    return changes


def diff_specifications(old: DatasetSpecification, new: DatasetSpecification) -> SpecificationDiff:
    """Report whether a dataset's configuration changed, and where.

    Paths are ``/``-separated because dataset names already contain dots.
    Original properties are ignored, as they are for equality.
    """
    if old == new:
        return SpecificationDiff(changed=False)
    changes = _dict_diff(
        to_dict(old, include_original=False),
        to_dict(new, include_original=False),
    )
    return SpecificationDiff(
        changed=True,
        added=changes["added"],
        removed=changes["removed"],
        modified=changes["modified"],
    )
