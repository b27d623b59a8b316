"""HTTP client for the session API with transparent token refresh.

Used by Python consumers of the service (scripts, other services, tests).
Session cookies live in the httpx cookie jar, so the client behaves like a
browser: log in once, then call protected endpoints.

Refresh behaviour:
    - A 401 from any endpoint other than /auth/login and /auth/refresh
      triggers one refresh followed by one replay of the original request.
    - Concurrent 401s share a single in-flight refresh. Only one POST
      /auth/refresh is sent; every waiter gets its outcome.
    - If the refresh fails, each waiter returns its original 401 response.

Architecture:
    - Infrastructure layer (adapter for an HTTP API)
    - Uses httpx for async HTTP
"""

from __future__ import annotations

import asyncio
from types import TracebackType
from typing import Any

import httpx
import structlog

LOGIN_PATH = "/auth/login"
REFRESH_PATH = "/auth/refresh"
LOGOUT_PATH = "/auth/logout"

_NO_REFRESH_PATHS = frozenset({LOGIN_PATH, REFRESH_PATH})


class AuthApiClient:
    """Session-aware API client.

    Attributes:
        _client: Underlying httpx client (owns the cookie jar).
        _refresh_task: In-flight refresh shared by concurrent callers.

    Example:
        >>> async with AuthApiClient(base_url="http://localhost:8000") as api:
        ...     await api.login("user@example.com", "SecurePass123!")
        ...     response = await api.request("GET", "/auth/me")
    """

    def __init__(
        self,
        *,
        base_url: str = "",
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize client.

        Args:
            base_url: Service base URL (ignored when ``client`` is given).
            timeout: Request timeout in seconds.
            client: Pre-built httpx client (custom transport in tests).
        """
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)
        self._refresh_task: asyncio.Task[bool] | None = None
        self._logger = structlog.get_logger("auth_api_client")

    async def __aenter__(self) -> AuthApiClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @property
    def cookies(self) -> httpx.Cookies:
        return self._client.cookies

    async def login(self, email: str, password: str) -> httpx.Response:
        """Log in; session cookies are stored on success."""
        return await self._client.post(
            LOGIN_PATH, json={"email": email, "password": password}
        )

    async def logout(self) -> httpx.Response:
        response = await self._client.post(LOGOUT_PATH)
        self._client.cookies.clear()
        return response

    async def refresh(self) -> bool:
        """Refresh the session, sharing one in-flight attempt.

        Returns:
            True if the server issued a new token pair.
        """
        task = self._refresh_task
        if task is None:
            task = asyncio.create_task(self._perform_refresh())
            self._refresh_task = task
        # A cancelled waiter must not cancel the refresh for the others
        return await asyncio.shield(task)

    async def _perform_refresh(self) -> bool:
        try:
            response = await self._client.post(REFRESH_PATH)
        except httpx.RequestError as e:
            self._logger.warning("session_refresh_unreachable", error=str(e))
            return False
        finally:
            self._refresh_task = None

        if response.status_code != 200:
            self._logger.info(
                "session_refresh_rejected", status_code=response.status_code
            )
            return False
        return True

    async def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send a request, refreshing and replaying once on 401.

        Args:
            method: HTTP method.
            url: Path relative to the base URL, or absolute URL.
            **kwargs: Passed to ``httpx.AsyncClient.request``.

        Returns:
            The replayed response after a successful refresh, otherwise the
            original response.
        """
        response = await self._client.request(method, url, **kwargs)
        if response.status_code != 401 or _skips_refresh(url):
            return response

        if not await self.refresh():
            return response

        return await self._client.request(method, url, **kwargs)


def _skips_refresh(url: str) -> bool:
    return httpx.URL(url).path.rstrip("/") in _NO_REFRESH_PATHS
