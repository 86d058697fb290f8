"""Error Handlers — global exception handlers for the Dog Adoption API.

Invariants:
    - DogAdoptionError → its own http_status with the {message, error} envelope
    - RequestValidationError → 400 InvalidInput, field messages joined by ", "
    - Unmatched routes (404/405 from routing) → 404 "Route not found"
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Four-layer handler: domain, validation, routing, catch-all
    - Extracted from main.py to keep the app module to wiring only
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from dog_adoption.core.errors import (
    INTERNAL_ERROR_MESSAGE, DogAdoptionError, ErrorCategory, ErrorSeverity,
    InvalidInputError, ResourceNotFoundError,
)

logger = logging.getLogger(__name__)

ROUTE_NOT_FOUND = "Route not found"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_routing_error_handler(app)
    _register_generic_error_handler(app)


def _request_extra(request: Request, status_code: int) -> dict:
    return {
        "path": request.url.path,
        "method": request.method,
        "status_code": status_code,
    }


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register domain/infrastructure error handler."""

    @app.exception_handler(DogAdoptionError)
    async def domain_error_handler(request: Request, exc: DogAdoptionError):
        """Handle all Dog Adoption domain/infrastructure errors."""
        level = (
            logging.ERROR if exc.http_status >= 500 else logging.WARNING
        )
        logger.log(
            level,
            f"{type(exc).__name__}: {exc.detail}",
            extra={
                "error_code": exc.code,
                "user_id": exc.context.user_id,
                "dog_id": exc.context.dog_id,
                **_request_extra(request, exc.http_status),
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors as InvalidInput."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra=_request_extra(request, status.HTTP_400_BAD_REQUEST),
        )
        error = InvalidInputError(build_validation_message(exc))
        return JSONResponse(
            status_code=error.http_status, content=error.to_response(),
        )


def _register_routing_error_handler(app: FastAPI) -> None:
    """Register handler for routing-level HTTP errors."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        """Unknown paths and unsupported methods are both 'Route not found'."""
        if exc.status_code in (
            status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED,
        ):
            error = ResourceNotFoundError(ROUTE_NOT_FOUND)
            return JSONResponse(
                status_code=error.http_status, content=error.to_response(),
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra=_request_extra(
                request, status.HTTP_500_INTERNAL_SERVER_ERROR,
            ),
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "message": INTERNAL_ERROR_MESSAGE,
                "error": {
                    "code": "INTERNAL_ERROR",
                    "category": ErrorCategory.INTERNAL.value,
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def build_validation_message(exc: RequestValidationError) -> str:
    """Flatten pydantic errors into one client message."""
    messages = []
    for e in exc.errors():
        field = ".".join(
            str(loc) for loc in e["loc"] if loc not in ("body", "query", "path")
        )
        messages.append(f"{field}: {e['msg']}" if field else e["msg"])
    return ", ".join(messages)
