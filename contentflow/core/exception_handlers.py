"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to HTTP responses; every body has the shape
{"error", "message", "details"}.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from contentflow.core.config import get_settings
from contentflow.domain.exceptions import ContentFlowException

logger = logging.getLogger(__name__)

# Domain error_code -> HTTP status. Unlisted codes map to 400.
ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "WRONG_AMOUNT": 400,
    "AUTHENTICATION_ERROR": 401,
    "PERMISSION_DENIED": 403,
    "INVALID_USER": 403,
    "RESOURCE_NOT_FOUND": 404,
    "RESOURCE_IN_USE": 409,
    "ALREADY_APPROVED": 409,
    "ALREADY_EXISTS": 409,
    "UNPROCESSABLE_STATE": 422,
    "UNKNOWN_JOB_KIND": 500,
    "PAYMENT_GATEWAY_ERROR": 502,
    "SERVICE_UNAVAILABLE": 503,
}


def status_for(exc: ContentFlowException) -> int:
    """Return the HTTP status for a domain exception."""
    return ERROR_CODE_STATUS.get(exc.error_code, 400)


def _contentflow_exception_handler(
    request: Request, exc: ContentFlowException
) -> JSONResponse:
    """Return JSON from ContentFlowException.to_dict() with the mapped status code."""
    status = status_for(exc)
    if status >= 500:
        logger.error("%s on %s %s: %s", exc.error_code, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status, content=exc.to_dict())


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": jsonable_errors(exc),
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Validation errors without the raw ctx objects (which may not be JSON-serializable)."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail, "details": {}},
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail, "details": {}},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Handlers: ContentFlowException (and subclasses), RequestValidationError,
    StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(ContentFlowException, _contentflow_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
