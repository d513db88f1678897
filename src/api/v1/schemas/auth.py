"""Pydantic schemas for the Auth API."""

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.user import AuthSession, AuthUser


class LoginRequest(BaseModel):
    """Schema for email/password sign-in.

    Empty values are accepted here and rejected by the auth service, so
    clients get the same message whether or not they validate locally.
    """

    email: str = Field("", max_length=320)
    password: str = Field("", max_length=128)


class RegisterRequest(LoginRequest):
    """Schema for account registration."""

    confirm_password: str = Field("", max_length=128)


class PasswordResetRequest(BaseModel):
    """Schema for requesting a password reset email."""

    email: str = Field("", max_length=320)


class UserResponse(BaseModel):
    """Schema for an authenticated user."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    display_name: str | None = None

    @classmethod
    def from_entity(cls, user: AuthUser) -> "UserResponse":
        return cls(id=user.id, email=user.email, display_name=user.display_name)


class SessionResponse(BaseModel):
    """Schema for a signed-in session."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "user": {"id": "Xk2rB7...", "email": "maria_ds@gmail.com"},
                "id_token": "eyJhbGciOiJSUzI1NiIs...",
                "refresh_token": "AMf-vBx...",
                "expires_in": 3600,
            }
        },
    )

    user: UserResponse
    id_token: str
    refresh_token: str | None = None
    expires_in: int | None = None

    @classmethod
    def from_entity(cls, session: AuthSession) -> "SessionResponse":
        return cls(
            user=UserResponse.from_entity(session.user),
            id_token=session.id_token,
            refresh_token=session.refresh_token,
            expires_in=session.expires_in,
        )


class SessionDetailResponse(BaseModel):
    data: SessionResponse


class SessionStatusResponse(BaseModel):
    """Schema for the logged-in check performed on app start."""

    logged_in: bool
    user: UserResponse | None = None


class SessionStatusDetailResponse(BaseModel):
    data: SessionStatusResponse
