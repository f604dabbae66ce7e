from __future__ import annotations

from typing import Optional


class DataspecError(Exception):
    pass


class PropertyFormatError(DataspecError, ValueError):
    """A stored property value could not be parsed as the requested integer width."""

    def __init__(self, key: str, raw: Optional[str], kind: str):
        self.key = key
        self.raw = raw
        self.kind = kind
        super().__init__(f"property {key!r} is not a valid {kind}: {raw!r}")


class SpecificationFormatError(DataspecError, ValueError):
    pass


class DuplicateDatasetError(DataspecError):
    def __init__(self, dataset_name: str, name: str):
        self.dataset_name = dataset_name
        self.name = name
        super().__init__(f"embedded dataset {name!r} already added to {dataset_name!r}")
