"""FastAPI application emulating the file storage control plane."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from fss.errors import ServiceError
from fss.repositories.memory import InMemoryStore
from fss.routes import export_sets_router, mount_targets_router
from fss.schemas.error import ErrorResponse

API_VERSION_PREFIX = "/20171215"

logger = logging.getLogger(__name__)


def create_app(store: InMemoryStore | None = None) -> FastAPI:
    app = FastAPI(title="File Storage Emulator", version="0.1.0")
    app.state.store = store if store is not None else InMemoryStore()

    @app.exception_handler(ServiceError)
    async def handle_service_error(_, exc: ServiceError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.payload.model_dump(mode="json", exclude_none=True),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        # The control plane reports every malformed request as InvalidParameter.
        fields = [".".join(str(part) for part in error.get("loc", ())) for error in exc.errors()]
        logger.warning(
            "request.rejected method=%s path=%s fields=%s",
            request.method,
            request.url.path,
            ",".join(fields),
        )
        payload = ErrorResponse(
            code="InvalidParameter",
            message="Invalid request parameters",
            details={"fields": fields},
        )
        return JSONResponse(status_code=400, content=payload.model_dump())

    app.include_router(mount_targets_router, prefix=API_VERSION_PREFIX)
    app.include_router(export_sets_router, prefix=API_VERSION_PREFIX)

    return app


app = create_app()
