from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, HTTPException, Request

from dataspec.api.observability.metrics import SPEC_BUILDS_TOTAL
from dataspec.api.schemas.specs import (
    BuildRequest,
    CompareRequest,
    CompareResponse,
    IsParentRequest,
    PropertyRequest,
    SpecNode,
    SpecResponse,
)
from dataspec.core.config import get_settings
from dataspec.core.dataset import DatasetSpecification, diff_specifications
from dataspec.core.dataset.serde import deterministic_hash, from_dict, loads, to_dict
from dataspec.core.errors import DuplicateDatasetError, PropertyFormatError, SpecificationFormatError
from dataspec.core.observability.metrics import inc_named

router = APIRouter(prefix="/api/v1/specs", tags=["specs"])

log = logging.getLogger("dataspec.api.specs")


def _build(node: SpecNode, strict) -> DatasetSpecification:
    children = [_build(child, strict) for child in node.datasets]
    return (
        DatasetSpecification.builder(node.name, node.type, strict=strict)
        .properties(node.properties)
        .datasets(children)
        .build()
    )


def _decode(data: Dict[str, Any]) -> DatasetSpecification:
    try:
        return from_dict(data)
    except SpecificationFormatError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _respond(spec: DatasetSpecification) -> SpecResponse:
    return SpecResponse(spec=to_dict(spec), hash=deterministic_hash(spec))


@router.post("/build", response_model=SpecResponse)
def build_spec(req: BuildRequest):
    try:
        spec = _build(req.spec, req.strict)
    except DuplicateDatasetError as e:
        SPEC_BUILDS_TOTAL.labels(outcome="duplicate").inc()
        raise HTTPException(status_code=409, detail=str(e))

    if req.original_properties is not None:
        spec = spec.set_original_properties(req.original_properties)

    SPEC_BUILDS_TOTAL.labels(outcome="ok").inc()
    inc_named("spec_build")
    log.info("built spec name=%s type=%s", spec.name, spec.type)
    return _respond(spec)


@router.post("/compare", response_model=CompareResponse)
def compare_specs(req: CompareRequest):
    result = diff_specifications(_decode(req.old), _decode(req.new))
    inc_named("spec_compare")
    return CompareResponse(
        changed=result.changed,
        added=result.added,
        removed=result.removed,
        modified=result.modified,
    )


@router.post("/is-parent")
def is_parent(req: IsParentRequest):
    spec = _decode(req.spec)
    return {"dataset_name": req.dataset_name, "is_parent": spec.is_parent(req.dataset_name)}


@router.post("/property")
def get_property(req: PropertyRequest):
    spec = _decode(req.spec)
    if req.kind in ("int", "long") and not isinstance(req.default, int):
        raise HTTPException(status_code=422, detail=f"default for kind {req.kind!r} must be an integer")
    if req.kind == "str" and isinstance(req.default, int):
        raise HTTPException(status_code=422, detail="default for kind 'str' must be a string")
    try:
        if req.kind == "int":
            value = spec.get_int_property(req.key, req.default)
        elif req.kind == "long":
            value = spec.get_long_property(req.key, req.default)
        else:
            value = spec.get_property(req.key, req.default)
    except PropertyFormatError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"key": req.key, "kind": req.kind, "value": value}


@router.post("/decode", response_model=SpecResponse)
async def decode_spec(request: Request):
    body = await request.body()
    limit = get_settings().max_document_bytes
    if len(body) > limit:
        raise HTTPException(status_code=413, detail=f"document exceeds {limit} bytes")
    try:
        spec = loads(body.decode("utf-8"))
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="document must be UTF-8")
    except SpecificationFormatError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _respond(spec)
