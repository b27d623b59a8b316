"""Authentication and role authorization dependencies.

FastAPI dependencies that resolve the caller from the access token (cookie
first, Bearer header second) and gate routes on the closed ``Role`` set.

Usage:
    # Protected route (requires auth)
    @router.get("/auth/me")
    async def me(current_user: CurrentUser = Depends(get_current_user)):
        ...

    # Role-gated route
    @router.delete("/organizations/{id}")
    async def delete_org(
        current_user: CurrentUser = Depends(require_role(Role.OWNER, Role.ADMIN)),
    ):
        ...
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status

from src.core.container import get_logger, get_token_service
from src.core.result import Failure, Success
from src.domain.enums import Role
from src.domain.errors import AuthenticationError
from src.domain.protocols import LoggerProtocol, TokenGenerationProtocol
from src.presentation.routers.api.cookie_transport import read_access_token


@dataclass(frozen=True, slots=True, kw_only=True)
class CurrentUser:
    """Authenticated caller taken from a verified access token.

    Attributes:
        user_id: Token subject.
        role_id: Role id embedded at issuance.
        token_jti: JWT unique identifier.
    """

    user_id: UUID
    role_id: int
    token_jti: str | None = None

    @property
    def role(self) -> Role | None:
        return Role.from_id(self.role_id)


def _unauthenticated(detail: str, *, expired: bool = False) -> HTTPException:
    challenge = 'Bearer error="invalid_token"' if expired else "Bearer"
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": challenge},
    )


async def get_current_user(
    request: Request,
    token_service: Annotated[TokenGenerationProtocol, Depends(get_token_service)],
) -> CurrentUser:
    """Get current authenticated user from the access token.

    Args:
        request: Incoming request (cookie or Authorization header).
        token_service: JWT token service (injected).

    Returns:
        CurrentUser with identity from a valid token.

    Raises:
        HTTPException 401: If the token is missing, invalid, or expired.
    """
    token = read_access_token(request)
    if token is None:
        raise _unauthenticated(AuthenticationError.NOT_AUTHENTICATED)

    result = token_service.validate_access_token(token)

    match result:
        case Success(value=claims):
            return CurrentUser(
                user_id=claims.user_id,
                role_id=claims.role_id,
                token_jti=claims.jti,
            )
        case Failure(error=AuthenticationError.EXPIRED_TOKEN):
            raise _unauthenticated(AuthenticationError.EXPIRED_TOKEN, expired=True)
        case Failure(error=_):
            raise _unauthenticated(AuthenticationError.INVALID_TOKEN)

    raise _unauthenticated(AuthenticationError.INVALID_TOKEN)


def require_role(*allowed_roles: Role) -> Callable[..., Awaitable[CurrentUser]]:
    """Create a dependency that requires one of ``allowed_roles``.

    Role ids that do not map to a ``Role`` member are always denied. The
    403 detail is generic and never names the caller's or required role.

    Args:
        *allowed_roles: Roles permitted on the route.

    Returns:
        Dependency returning the CurrentUser when allowed.

    Raises:
        HTTPException 401: No valid identity (from get_current_user).
        HTTPException 403: Role not in the allow-list.
    """
    allowed = frozenset(allowed_roles)

    async def role_checker(
        request: Request,
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
        logger: Annotated[LoggerProtocol, Depends(get_logger)],
    ) -> CurrentUser:
        role = current_user.role
        if role is None or role not in allowed:
            logger.warning(
                "authorization_denied",
                user_id=str(current_user.user_id),
                role_id=current_user.role_id,
                path=request.url.path,
                method=request.method,
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=AuthenticationError.INSUFFICIENT_PERMISSIONS,
            )
        return current_user

    return role_checker
