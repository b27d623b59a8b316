"""Authentication request schemas.

Pydantic models for API request validation.
Kept separate from domain entities - these are HTTP-layer concerns.

Endpoints:
    POST /auth/login            - LoginRequest
    POST /auth/refresh          - RefreshRequest (optional body)
    POST /auth/change-password  - ChangePasswordRequest
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class LoginRequest(BaseModel):
    """Request schema for login.

    POST /auth/login
    Returns: 200 OK, sets session cookies
    """

    email: EmailStr = Field(
        ...,
        description="User's email address",
        examples=["user@example.com"],
    )
    password: str = Field(
        ...,
        min_length=1,
        max_length=128,
        description="User's password",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "user@example.com",
                "password": "SecurePass123!",
            }
        }
    )


class RefreshRequest(BaseModel):
    """Optional body for refresh.

    Browsers send the refresh cookie; the body field exists for older
    clients that keep the token themselves.
    """

    refresh_token: str | None = Field(
        default=None,
        alias="refreshToken",
        description="Refresh token (only when no cookie is sent)",
    )

    model_config = ConfigDict(populate_by_name=True)


class ChangePasswordRequest(BaseModel):
    """Request schema for password change.

    POST /auth/change-password
    Returns: 200 OK, clears session cookies (log in again)
    """

    current_password: str = Field(
        ...,
        alias="currentPassword",
        min_length=1,
        max_length=128,
    )
    # bcrypt only uses the first 72 bytes
    new_password: str = Field(
        ...,
        alias="newPassword",
        min_length=8,
        max_length=72,
    )

    model_config = ConfigDict(populate_by_name=True)
