from .properties import DatasetProperties, DatasetPropertiesBuilder
from .specification import DatasetSpecification, DatasetSpecificationBuilder
from .namespacer import namespace
from .diff import SpecificationDiff, diff_specifications

__all__ = [
    "DatasetProperties",
    "DatasetPropertiesBuilder",
    "DatasetSpecification",
    "DatasetSpecificationBuilder",
    "SpecificationDiff",
    "diff_specifications",
    "namespace",
]
