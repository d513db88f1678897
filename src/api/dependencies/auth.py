"""Authentication dependencies for FastAPI."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.exceptions import AuthenticationError, ErrorCode
from domain.entities.user import AuthUser
from domain.gateways.auth_gateway import IAuthGateway
from domain.services.auth_service import AuthService
from infrastructure.auth.firebase_auth_gateway import FirebaseAuthGateway

# Security scheme for OpenAPI docs
security = HTTPBearer(auto_error=False)


@lru_cache
def get_auth_gateway() -> IAuthGateway:
    """Get the auth gateway singleton."""
    return FirebaseAuthGateway()


def get_auth_service(
    gateway: IAuthGateway = Depends(get_auth_gateway),
) -> AuthService:
    return AuthService(gateway)


async def get_current_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ],
    service: AuthService = Depends(get_auth_service),
) -> AuthUser:
    """
    Dependency to get the current authenticated user.

    Raises:
        AuthenticationError: If no token provided or token is invalid
    """
    if not credentials:
        raise AuthenticationError(
            message="Authorization header required",
            error_code=ErrorCode.UNAUTHORIZED,
        )

    return await service.get_current_user(credentials.credentials)


# Type aliases for convenience in route handlers
CurrentUser = Annotated[AuthUser, Depends(get_current_user)]
