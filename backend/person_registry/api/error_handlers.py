"""Error Handlers — every failure leaves the API as a RegistryError envelope.

Invariants:
    - RegistryError → its own http_status and to_response() body
    - Request validation (body, path, query) → 400 VALIDATION_ERROR with one
      detail entry per offending field
    - Anything else → 500 INTERNAL_ERROR; the message never carries the cause
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from person_registry.core.errors import (
    ErrorCategory, ErrorSeverity, RecordValidationError, RegistryError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Attach the registry, validation and catch-all handlers to the app."""

    @app.exception_handler(RegistryError)
    async def registry_error_handler(request: Request, exc: RegistryError):
        return _respond(request, exc, cause=exc.__cause__)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        details = [
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in exc.errors()
        ]
        error = RecordValidationError(
            "Invalid request data",
            field=details[0]["field"] if details else "",
        )
        return _respond(request, error, details=details)

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        error = RegistryError(
            "An unexpected error occurred", "INTERNAL_ERROR",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        )
        return _respond(request, error, cause=exc)


def _respond(
    request: Request,
    error: RegistryError,
    cause: BaseException | None = None,
    details: list[dict] | None = None,
) -> JSONResponse:
    log = logger.error if error.http_status >= 500 else logger.warning
    log(
        f"{error.code} on {request.url.path}: {error.message}"
        + (f" (cause: {cause!r})" if cause else ""),
        exc_info=cause if error.code == "INTERNAL_ERROR" else None,
        extra={"error_code": error.code, "path": request.url.path},
    )
    body = error.to_response()
    if details is not None:
        body["error"]["details"] = details
    return JSONResponse(status_code=error.http_status, content=body)
