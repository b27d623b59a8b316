"""Application services."""

from src.application.services.refresh_token_store import RefreshTokenStore

__all__ = ["RefreshTokenStore"]
