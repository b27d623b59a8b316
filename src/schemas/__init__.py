"""Request/response schemas for API endpoints.

Schemas are kept separate from domain entities (HTTP-layer concerns only).

Usage:
    from src.schemas import LoginRequest, ApiResponse
"""

from src.schemas.auth_schemas import (
    ChangePasswordRequest,
    LoginRequest,
    RefreshRequest,
)
from src.schemas.common_schemas import ApiResponse, ErrorResponse

__all__ = [
    # Envelope
    "ApiResponse",
    "ErrorResponse",
    # Auth
    "ChangePasswordRequest",
    "LoginRequest",
    "RefreshRequest",
]
