"""Authenticated identity entities."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthUser:
    """A user as known to the identity provider."""

    id: str
    email: str
    display_name: str | None = None


@dataclass(frozen=True)
class AuthSession:
    """Result of a successful sign-in or sign-up."""

    user: AuthUser
    id_token: str
    refresh_token: str | None = None
    expires_in: int | None = None
