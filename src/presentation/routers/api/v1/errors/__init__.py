"""Error envelope builders and exception handlers.

Exports:
    ErrorResponseBuilder: Utility for building error envelope responses
    success_response: Success envelope response
    register_exception_handlers: Register global exception handlers with FastAPI
"""

from src.presentation.routers.api.v1.errors.error_response_builder import (
    ErrorResponseBuilder,
    success_response,
)
from src.presentation.routers.api.v1.errors.exception_handlers import (
    register_exception_handlers,
)

__all__ = [
    "ErrorResponseBuilder",
    "register_exception_handlers",
    "success_response",
]
