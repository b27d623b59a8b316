"""Envelope response builders.

Exports:
    ErrorResponseBuilder: Error envelope JSONResponse from a status and message
    success_response: Success envelope JSONResponse
"""

from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse

from src.schemas.common_schemas import ApiResponse, ErrorResponse


class ErrorResponseBuilder:
    """Build error envelope responses.

    Example:
        >>> response = ErrorResponseBuilder.build(401, "Invalid email or password")
        >>> # {"success": false, "error": "Invalid email or password", "data": null, ...}
    """

    @staticmethod
    def build(
        status_code: int,
        error: str,
        *,
        headers: dict[str, str] | None = None,
        details: list[dict[str, str]] | None = None,
    ) -> JSONResponse:
        """Build an error envelope.

        Args:
            status_code: HTTP status code.
            error: Generic, client-safe message.
            headers: Extra response headers (WWW-Authenticate, Retry-After).
            details: Field-level validation errors.

        Returns:
            JSONResponse with the error envelope.
        """
        body = ErrorResponse(error=error, details=details)
        return JSONResponse(
            status_code=status_code,
            content=body.to_content(),
            headers=headers,
        )


def success_response(
    message: str,
    data: dict[str, Any] | None = None,
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    """Build a success envelope."""
    body = ApiResponse(message=message, data=data)
    return JSONResponse(status_code=status_code, content=body.model_dump())
