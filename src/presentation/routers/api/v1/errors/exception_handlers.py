"""Global exception handlers for FastAPI application.

Converts exceptions that escape routes into the error envelope.

Handlers:
    http_exception_handler: HTTPException (auth dependencies, 404, 405)
    validation_exception_handler: RequestValidationError (422)
    generic_exception_handler: Any other exception (500, no internals exposed)

Exports:
    register_exception_handlers: Register all exception handlers with FastAPI app
"""

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.core.container import get_logger
from src.presentation.routers.api.v1.errors.error_response_builder import (
    ErrorResponseBuilder,
)


async def http_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Convert HTTPException to an error envelope.

    Headers set on the exception (WWW-Authenticate) are preserved.
    """
    # Type narrowing: registered only for HTTPException
    assert isinstance(exc, StarletteHTTPException)

    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return ErrorResponseBuilder.build(
        exc.status_code,
        detail,
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Convert RequestValidationError to a 422 error envelope with field errors."""
    assert isinstance(exc, RequestValidationError)

    field_errors: list[dict[str, str]] = []
    for error in exc.errors():
        # ["body", "email"] -> "email"
        field_parts = [str(p) for p in error.get("loc", []) if p != "body"]
        field_errors.append(
            {
                "field": ".".join(field_parts) if field_parts else "unknown",
                "code": str(error.get("type", "validation_error")),
                "message": str(error.get("msg", "Validation failed")),
            }
        )

    return ErrorResponseBuilder.build(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Validation failed",
        details=field_errors or None,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected Python exceptions.

    The exception is logged; the client only sees a generic message.
    """
    get_logger().error(
        "unhandled_exception",
        error=exc,
        path=request.url.path,
        method=request.method,
        trace_id=getattr(request.state, "trace_id", None),
    )
    return ErrorResponseBuilder.build(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(HTTPException, http_exception_handler)
    # Routing errors (404/405) are raised as Starlette's HTTPException
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
