"""Authentication session router.

Endpoints:
    POST /auth/login            - Log in, set session cookies
    POST /auth/refresh          - Rotate the refresh token, rewrite cookies
    POST /auth/logout           - Revoke the refresh token, clear cookies
    POST /auth/logout-all       - Revoke every session of the caller
    GET  /auth/me               - Current user
    POST /auth/change-password  - Change password, revoke every session

Every failure body is generic: no endpoint reveals whether an email exists
or why a refresh token was refused.
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from src.application.commands.auth_commands import (
    ChangePassword,
    LoginUser,
    LogoutAllSessions,
    LogoutUser,
    RefreshSession,
)
from src.application.commands.handlers.change_password_handler import (
    ChangePasswordError,
    ChangePasswordHandler,
)
from src.application.commands.handlers.login_user_handler import (
    LoginError,
    LoginUserHandler,
)
from src.application.commands.handlers.logout_all_sessions_handler import (
    LogoutAllSessionsHandler,
)
from src.application.commands.handlers.logout_user_handler import LogoutUserHandler
from src.application.commands.handlers.refresh_session_handler import (
    RefreshSessionHandler,
)
from src.core.config import settings
from src.core.container import (
    get_change_password_handler,
    get_login_user_handler,
    get_logout_all_sessions_handler,
    get_logout_user_handler,
    get_refresh_session_handler,
    get_user_repository,
)
from src.core.fingerprinting import get_client_ip
from src.core.result import Failure, Success
from src.domain.errors import AuthenticationError
from src.domain.protocols import UserRepository
from src.presentation.routers.api.cookie_transport import (
    CookiePolicy,
    clear_session_cookies,
    read_refresh_token,
    write_session_cookies,
)
from src.presentation.routers.api.middleware.auth_dependencies import (
    CurrentUser,
    get_current_user,
)
from src.presentation.routers.api.v1.errors import (
    ErrorResponseBuilder,
    success_response,
)
from src.schemas.auth_schemas import (
    ChangePasswordRequest,
    LoginRequest,
    RefreshRequest,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _cookie_policy() -> CookiePolicy:
    return CookiePolicy.from_settings(settings)


def _client_ip(request: Request) -> str:
    return get_client_ip(request, trust_proxy_headers=settings.trust_proxy_headers)


@router.post("/login", summary="Log in")
async def login(
    request: Request,
    data: LoginRequest,
    handler: LoginUserHandler = Depends(get_login_user_handler),
) -> JSONResponse:
    """Authenticate with email and password.

    Returns:
        200 with ``{accessToken, user}`` and both session cookies set.
        401 on bad credentials, 429 (with Retry-After) on lockout.
    """
    command = LoginUser(
        email=data.email,
        password=data.password,
        ip_address=_client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )
    result = await handler.handle(command)

    match result:
        case Success(value=session):
            response = success_response(
                "Login successful",
                {
                    "accessToken": session.access_token,
                    "user": session.user.to_public_dict(),
                },
            )
            write_session_cookies(
                response, session.access_token, session.refresh_token, _cookie_policy()
            )
            return response
        case Failure(error=failure) if failure.reason == LoginError.TOO_MANY_ATTEMPTS:
            return ErrorResponseBuilder.build(
                status.HTTP_429_TOO_MANY_REQUESTS,
                AuthenticationError.TOO_MANY_ATTEMPTS,
                headers={"Retry-After": str(failure.retry_after or 1)},
            )
        case Failure(error=_):
            return ErrorResponseBuilder.build(
                status.HTTP_401_UNAUTHORIZED,
                AuthenticationError.INVALID_CREDENTIALS,
            )


@router.post("/refresh", summary="Refresh session")
async def refresh(
    request: Request,
    data: RefreshRequest | None = None,
    handler: RefreshSessionHandler = Depends(get_refresh_session_handler),
) -> JSONResponse:
    """Exchange the refresh token for a new pair.

    Returns:
        200 with ``{accessToken}`` and both cookies rewritten.
        401 with both cookies cleared otherwise.
    """
    policy = _cookie_policy()
    refresh_token = read_refresh_token(request, data)
    if refresh_token is None:
        response = ErrorResponseBuilder.build(
            status.HTTP_401_UNAUTHORIZED, AuthenticationError.SESSION_EXPIRED
        )
        clear_session_cookies(response, policy)
        return response

    command = RefreshSession(
        refresh_token=refresh_token,
        ip_address=_client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )
    result = await handler.handle(command)

    match result:
        case Success(value=tokens):
            response = success_response(
                "Session refreshed", {"accessToken": tokens.access_token}
            )
            write_session_cookies(
                response, tokens.access_token, tokens.refresh_token, policy
            )
            return response
        case Failure(error=_):
            response = ErrorResponseBuilder.build(
                status.HTTP_401_UNAUTHORIZED, AuthenticationError.SESSION_EXPIRED
            )
            clear_session_cookies(response, policy)
            return response


@router.post("/logout", summary="Log out")
async def logout(
    request: Request,
    handler: LogoutUserHandler = Depends(get_logout_user_handler),
) -> JSONResponse:
    """Revoke the presented refresh token. Always 200, cookies cleared."""
    result = await handler.handle(LogoutUser(refresh_token=read_refresh_token(request)))

    message = "Logged out successfully"
    match result:
        case Success(value=outcome):
            message = outcome.message
        case Failure(error=_):
            pass

    response = success_response(message)
    clear_session_cookies(response, _cookie_policy())
    return response


@router.post("/logout-all", summary="Log out from all devices")
async def logout_all(
    current_user: CurrentUser = Depends(get_current_user),
    handler: LogoutAllSessionsHandler = Depends(get_logout_all_sessions_handler),
) -> JSONResponse:
    """Revoke every refresh token of the caller."""
    result = await handler.handle(LogoutAllSessions(user_id=current_user.user_id))

    revoked = 0
    match result:
        case Success(value=count):
            revoked = count
        case Failure(error=_):
            pass

    response = success_response(
        "Logged out from all sessions", {"revokedSessions": revoked}
    )
    clear_session_cookies(response, _cookie_policy())
    return response


@router.get("/me", summary="Current user")
async def me(
    current_user: CurrentUser = Depends(get_current_user),
    user_repo: UserRepository = Depends(get_user_repository),
) -> JSONResponse:
    """Profile of the authenticated caller."""
    user = await user_repo.find_by_id(current_user.user_id)
    if user is None or not user.is_active:
        return ErrorResponseBuilder.build(
            status.HTTP_401_UNAUTHORIZED,
            AuthenticationError.NOT_AUTHENTICATED,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return success_response("Current user", {"user": user.to_public_dict()})


@router.post("/change-password", summary="Change password")
async def change_password(
    data: ChangePasswordRequest,
    current_user: CurrentUser = Depends(get_current_user),
    handler: ChangePasswordHandler = Depends(get_change_password_handler),
) -> JSONResponse:
    """Change the caller's password and end every session.

    Returns:
        200 with cookies cleared (log in again).
        401 on a wrong current password, 400 if the password is unchanged.
    """
    command = ChangePassword(
        user_id=current_user.user_id,
        current_password=data.current_password,
        new_password=data.new_password,
    )
    result = await handler.handle(command)

    match result:
        case Success(value=revoked):
            response = success_response(
                "Password changed, please log in again", {"revokedSessions": revoked}
            )
            clear_session_cookies(response, _cookie_policy())
            return response
        case Failure(error=ChangePasswordError.SAME_PASSWORD):
            return ErrorResponseBuilder.build(
                status.HTTP_400_BAD_REQUEST,
                AuthenticationError.SAME_PASSWORD,
            )
        case Failure(error=_):
            return ErrorResponseBuilder.build(
                status.HTTP_401_UNAUTHORIZED,
                AuthenticationError.INCORRECT_CURRENT_PASSWORD,
            )
