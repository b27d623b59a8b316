"""Session cookie transport.

Maps tokens to and from HTTP cookies, with an ``Authorization: Bearer``
fallback for non-browser clients.

Cookies:
    auth_token      access token, max-age = access token lifetime
    refresh_token   refresh token, max-age = refresh token lifetime

Both are HttpOnly and scoped to "/". Secure and SameSite follow the
environment (production: Secure + strict, otherwise lax) unless
COOKIE_SECURE / COOKIE_SAME_SITE override them.
"""

from dataclasses import dataclass

from starlette.requests import Request
from starlette.responses import Response

from src.core.config import Settings
from src.schemas.auth_schemas import RefreshRequest

ACCESS_COOKIE_NAME = "auth_token"
REFRESH_COOKIE_NAME = "refresh_token"

_BEARER_PREFIX = "Bearer "


@dataclass(frozen=True, slots=True, kw_only=True)
class CookiePolicy:
    """Resolved cookie attributes."""

    secure: bool
    same_site: str
    access_max_age: int
    refresh_max_age: int
    path: str = "/"

    @classmethod
    def from_settings(cls, settings: Settings) -> "CookiePolicy":
        """Derive cookie attributes from the environment and overrides."""
        secure = (
            settings.cookie_secure
            if settings.cookie_secure is not None
            else settings.is_production
        )
        same_site = settings.cookie_same_site or (
            "strict" if settings.is_production else "lax"
        )
        return cls(
            secure=secure,
            same_site=same_site,
            access_max_age=settings.access_token_expire_minutes * 60,
            refresh_max_age=settings.refresh_token_expire_days * 24 * 60 * 60,
        )


def read_access_token(request: Request) -> str | None:
    """Access token from the cookie, then the Authorization header.

    A header without the ``Bearer `` prefix, or with nothing after it,
    yields None.
    """
    token = request.cookies.get(ACCESS_COOKIE_NAME)
    if token:
        return token

    header = request.headers.get("authorization")
    if not header or not header.startswith(_BEARER_PREFIX):
        return None
    return header[len(_BEARER_PREFIX) :].strip() or None


def read_refresh_token(
    request: Request, body: RefreshRequest | None = None
) -> str | None:
    """Refresh token from the cookie, then the ``refreshToken`` body field."""
    token = request.cookies.get(REFRESH_COOKIE_NAME)
    if token:
        return token
    if body is not None and body.refresh_token:
        return body.refresh_token
    return None


def write_access_cookie(
    response: Response, access_token: str, policy: CookiePolicy
) -> None:
    response.set_cookie(
        key=ACCESS_COOKIE_NAME,
        value=access_token,
        max_age=policy.access_max_age,
        path=policy.path,
        secure=policy.secure,
        httponly=True,
        samesite=policy.same_site,  # type: ignore[arg-type]
    )


def write_session_cookies(
    response: Response,
    access_token: str,
    refresh_token: str,
    policy: CookiePolicy,
) -> None:
    """Set both session cookies."""
    write_access_cookie(response, access_token, policy)
    response.set_cookie(
        key=REFRESH_COOKIE_NAME,
        value=refresh_token,
        max_age=policy.refresh_max_age,
        path=policy.path,
        secure=policy.secure,
        httponly=True,
        samesite=policy.same_site,  # type: ignore[arg-type]
    )


def clear_session_cookies(response: Response, policy: CookiePolicy) -> None:
    """Expire both session cookies (same attributes they were set with)."""
    for name in (ACCESS_COOKIE_NAME, REFRESH_COOKIE_NAME):
        response.delete_cookie(
            key=name,
            path=policy.path,
            secure=policy.secure,
            httponly=True,
            samesite=policy.same_site,  # type: ignore[arg-type]
        )
