"""Routers mounted by the application.

- system_router: root and health endpoints
- v1_router: session API (/auth/...)
"""

from src.presentation.routers.api.v1 import v1_router
from src.presentation.routers.system import system_router

__all__ = ["system_router", "v1_router"]
