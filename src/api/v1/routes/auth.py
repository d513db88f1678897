"""Auth API routes."""

from fastapi import APIRouter, Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials

from api.dependencies.auth import CurrentUser, get_auth_service, security
from api.v1.schemas.auth import (
    LoginRequest,
    PasswordResetRequest,
    RegisterRequest,
    SessionDetailResponse,
    SessionResponse,
    SessionStatusDetailResponse,
    SessionStatusResponse,
    UserResponse,
)
from api.v1.schemas.common import MessageResponse
from core.rate_limit import limiter
from domain.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=SessionDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
    responses={
        201: {"description": "Account created and signed in"},
        400: {"description": "Empty fields or passwords do not match"},
    },
)
@limiter.limit("5/minute")  # type: ignore[untyped-decorator]
async def register(
    request: Request,
    body: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> SessionDetailResponse:
    """Register with email and password. Returns an ID token for the new account."""
    session = await service.register(body.email, body.password, body.confirm_password)
    return SessionDetailResponse(data=SessionResponse.from_entity(session))


@router.post(
    "/login",
    response_model=SessionDetailResponse,
    summary="Sign in",
    responses={
        200: {"description": "Signed in"},
        400: {"description": "Email or password is empty"},
        401: {"description": "Incorrect email or password"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def login(
    request: Request,
    body: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> SessionDetailResponse:
    """Sign in with email and password."""
    session = await service.login(body.email, body.password)
    return SessionDetailResponse(data=SessionResponse.from_entity(session))


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Sign out everywhere",
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def logout(
    request: Request,
    user: CurrentUser,
    service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Revoke the user's refresh tokens."""
    await service.logout(user.id)
    return MessageResponse(message="Signed out")


@router.post(
    "/password-reset",
    response_model=MessageResponse,
    summary="Send a password reset email",
)
@limiter.limit("3/minute")  # type: ignore[untyped-decorator]
async def password_reset(
    request: Request,
    body: PasswordResetRequest,
    service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Ask the identity provider to email a password reset link."""
    await service.recover_password(body.email)
    return MessageResponse(message="Password reset email sent")


@router.get(
    "/session",
    response_model=SessionStatusDetailResponse,
    summary="Check whether the caller is signed in",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def session_status(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    service: AuthService = Depends(get_auth_service),
) -> SessionStatusDetailResponse:
    """Used on app start to choose between the sign-in and main flows."""
    token = credentials.credentials if credentials else None
    if not await service.is_user_logged_in(token):
        return SessionStatusDetailResponse(data=SessionStatusResponse(logged_in=False))
    user = await service.get_current_user(token)  # type: ignore[arg-type]
    return SessionStatusDetailResponse(
        data=SessionStatusResponse(logged_in=True, user=UserResponse.from_entity(user))
    )
