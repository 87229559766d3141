"""
Global exception handlers for the Todo API.

- TodoError -> its own status; InvalidTodoError renders as a bare 400
- RequestValidationError -> 400 with field-level details
- Exception (catch-all) -> 500 that never leaks internal details
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .errors import TodoError

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(TodoError)
    async def todo_error_handler(request: Request, exc: TodoError) -> Response:
        logger.info(
            "TodoError: %s",
            exc.message,
            extra={"error_code": exc.code, "path": request.url.path},
        )
        content = exc.to_response()
        if content is None:
            return Response(status_code=exc.http_status)
        return JSONResponse(status_code=exc.http_status, content=content)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Return a consistent JSON structure for request validation errors.

        Response format:
            {
                "error": "ValidationError",
                "message": "Request validation failed",
                "detail": [... pydantic/fastapi error details ...]
            }
        """
        logger.warning(
            "Validation error: %s",
            exc.errors(),
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "ValidationError",
                "message": "Request validation failed",
                "detail": _validation_details(exc),
            },
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled exception: %s",
            exc,
            exc_info=True,
            extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "InternalError", "message": "An unexpected error occurred"},
        )


def _validation_details(exc: RequestValidationError) -> list:
    """Reduce pydantic error entries to JSON-safe field/message/type triples."""
    return [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
