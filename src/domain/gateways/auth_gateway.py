"""Authentication gateway protocol."""

from typing import Protocol

from domain.entities.user import AuthSession, AuthUser


class IAuthGateway(Protocol):
    """Gateway to the identity provider.

    Every method either returns its success value or raises
    ``AuthenticationError`` / ``GatewayError``.
    """

    async def register_user(self, email: str, password: str) -> AuthSession:
        """Create an account and sign it in."""
        ...

    async def login(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password."""
        ...

    async def logout(self, user_id: str) -> None:
        """Invalidate the user's outstanding sessions."""
        ...

    async def recover_password(self, email: str) -> None:
        """Send a password reset email."""
        ...

    async def get_current_user(self, token: str) -> AuthUser | None:
        """Resolve an ID token to its user, or None if invalid or expired."""
        ...
