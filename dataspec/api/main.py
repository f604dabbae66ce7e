from __future__ import annotations

from fastapi import FastAPI

from dataspec import __version__
from dataspec.api.endpoints import health
from dataspec.api.endpoints import metrics as metrics_ep
from dataspec.api.endpoints.specs import router as specs_router
from dataspec.api.middleware.error_shaping import SafeErrorMiddleware
from dataspec.api.middleware.request_context import RequestContextMiddleware
from dataspec.core.config import configure_logging

configure_logging()

app = FastAPI(
    title="Dataset Specification API",
    version=__version__,
)

# ------------------------------------------------------------
# Middleware stack (ORDER MATTERS)
# Starlette reverses add_middleware order: the LAST call = OUTERMOST wrapper.
#   SafeErrorMiddleware -> RequestContext -> handler
# ------------------------------------------------------------
app.add_middleware(RequestContextMiddleware)
app.add_middleware(SafeErrorMiddleware)

app.include_router(health.router)
app.include_router(metrics_ep.router)
app.include_router(specs_router)
