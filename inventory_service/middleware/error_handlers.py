# inventory_service/middleware/error_handlers.py
from __future__ import annotations
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from inventory_service.middleware.correlation import HEADER_NAME
from inventory_service.models import error_body
from inventory_service.services.exceptions import (
    ConflictError,
    NotFoundError,
    ServiceError,
    ValidationError,
)
from inventory_service.services.validation import field_errors_from_pydantic

logger = logging.getLogger("inventory.errors")


def add_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(_: Request, exc: RequestValidationError):
        errors = field_errors_from_pydantic(exc.errors())
        logger.debug("Validation failed: %s", [e.field for e in errors])
        return JSONResponse(status_code=400, content=error_body("Validation failed", errors))

    @app.exception_handler(ValidationError)
    async def validation_handler(_: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content=error_body(exc.detail, exc.errors))

    @app.exception_handler(ConflictError)
    async def conflict_handler(_: Request, exc: ConflictError):
        return JSONResponse(status_code=400, content=error_body(exc.detail))

    @app.exception_handler(NotFoundError)
    async def not_found_handler(_: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content=error_body(exc.detail))

    @app.exception_handler(ServiceError)
    async def service_error_handler(_: Request, exc: ServiceError):
        return JSONResponse(status_code=400, content=error_body(exc.detail))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(_: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        # runs outside the middleware stack, so the id comes from request state
        corr = getattr(request.state, "correlation_id", None) or "-"
        logger.exception(
            "Unhandled exception on %s %s [correlation_id=%s]: %s",
            request.method, request.url.path, corr, exc,
        )
        return JSONResponse(
            status_code=500,
            content=error_body("Internal Server Error"),
            headers={HEADER_NAME: corr} if corr != "-" else None,
        )
