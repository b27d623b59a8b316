"""HTTP clients for the session API."""

from src.infrastructure.clients.auth_api_client import AuthApiClient

__all__ = ["AuthApiClient"]
