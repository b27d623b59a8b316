"""Common response envelope shared by every endpoint.

Success:
    {"success": true, "message": "...", "data": {...}, "timestamp": "..."}
Error:
    {"success": false, "error": "...", "data": null, "timestamp": "..."}
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field


def _timestamp() -> str:
    return datetime.now(UTC).isoformat()


class ApiResponse(BaseModel):
    """Successful response envelope.

    Attributes:
        success: Always True.
        message: Human-readable summary.
        data: Endpoint payload.
        timestamp: ISO-8601 UTC time the response was built.
    """

    success: bool = Field(default=True, description="Always true")
    message: str = Field(..., description="Human-readable summary")
    data: dict[str, Any] | None = Field(default=None, description="Payload")
    timestamp: str = Field(default_factory=_timestamp, description="ISO-8601 UTC")


class ErrorResponse(BaseModel):
    """Error response envelope.

    ``details`` is only present for request validation failures.
    """

    success: bool = Field(default=False, description="Always false")
    error: str = Field(..., description="Generic error message")
    data: None = Field(default=None, description="Always null")
    details: list[dict[str, str]] | None = Field(
        default=None, description="Field-level validation errors"
    )
    timestamp: str = Field(default_factory=_timestamp, description="ISO-8601 UTC")

    def to_content(self) -> dict[str, Any]:
        """JSON body; ``details`` is dropped when empty."""
        content = self.model_dump()
        if content["details"] is None:
            del content["details"]
        return content
