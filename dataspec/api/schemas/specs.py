from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class SpecNode(BaseModel):
    """A dataset as the caller describes it: local names, children nested."""

    name: str
    type: str
    properties: Dict[str, str] = Field(default_factory=dict)
    datasets: List[SpecNode] = Field(default_factory=list)


SpecNode.model_rebuild()


class BuildRequest(BaseModel):
    spec: SpecNode
    original_properties: Optional[Dict[str, str]] = None
    strict: Optional[bool] = None


class SpecResponse(BaseModel):
    spec: Dict[str, Any]
    hash: str


class CompareRequest(BaseModel):
    old: Dict[str, Any]
    new: Dict[str, Any]


class CompareResponse(BaseModel):
    changed: bool
    added: List[str] = Field(default_factory=list)
    removed: List[str] = Field(default_factory=list)
    modified: List[str] = Field(default_factory=list)


class IsParentRequest(BaseModel):
    spec: Dict[str, Any]
    dataset_name: Optional[str] = None


class PropertyRequest(BaseModel):
    spec: Dict[str, Any]
    key: str
    kind: Literal["str", "int", "long"] = "str"
    default: Optional[Union[int, str]] = None
