"""API v1 routers.

Resources:
    /auth    - Session lifecycle (login, refresh, logout, password change)

The session API keeps the unprefixed /auth paths existing clients call.
"""

from fastapi import APIRouter

from src.presentation.routers.api.v1.auth import router as auth_router

v1_router = APIRouter()
v1_router.include_router(auth_router)

__all__ = [
    "v1_router",
]
