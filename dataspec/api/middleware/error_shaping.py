from __future__ import annotations

import logging
import traceback
from typing import Callable, Dict, Optional, Tuple, Type

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from dataspec.core.errors import (
    DataspecError,
    DuplicateDatasetError,
    PropertyFormatError,
    SpecificationFormatError,
)

log = logging.getLogger("dataspec.errors")

# Most specific first; DataspecError is the catch-all for the package.
ERROR_STATUS: Tuple[Tuple[Type[DataspecError], int, str], ...] = (
    (PropertyFormatError, 422, "property_format"),
    (SpecificationFormatError, 400, "specification_format"),
    (DuplicateDatasetError, 409, "duplicate_dataset"),
    (DataspecError, 400, "dataspec_error"),
)


def classify(exc: BaseException) -> Optional[Tuple[int, str]]:
    for exc_type, status, code in ERROR_STATUS:
        if isinstance(exc, exc_type):
            return status, code
    return None


class SafeErrorMiddleware(BaseHTTPMiddleware):
    """
    Shapes errors that escape the endpoints.

    - Dataspec errors become 4xx JSON with a stable ``error`` code and the
      exception message (messages name keys and values, never internals)
    - Anything else becomes a generic 500
    - Stack traces are logged server-side only, never returned
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            rid = getattr(request.state, "request_id", None) or request.headers.get("x-request-id")
            shaped = classify(e)

            payload: Dict[str, str]
            if shaped is not None:
                status, code = shaped
                log.warning("%s rid=%s path=%s: %s", code, rid, request.url.path, e)
                payload = {"detail": str(e), "error": code}
            else:
                status = 500
                log.error(
                    "Unhandled error: %s rid=%s path=%s\n%s",
                    str(e),
                    rid,
                    request.url.path,
                    traceback.format_exc(),
                )
                payload = {"detail": "Internal Server Error", "error": "internal"}

            if rid:
                payload["request_id"] = rid
            return JSONResponse(status_code=status, content=payload)
