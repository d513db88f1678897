"""Auth service layer with credential validation."""

from core.exceptions import AuthenticationError, ErrorCode, ValidationError
from domain.entities.user import AuthSession, AuthUser
from domain.gateways.auth_gateway import IAuthGateway


class AuthService:
    """Validates credentials locally, then forwards to the auth gateway."""

    def __init__(self, gateway: IAuthGateway) -> None:
        self._gateway = gateway

    async def register(
        self, email: str, password: str, confirm_password: str
    ) -> AuthSession:
        """Create an account. Empty fields or mismatched passwords never reach the gateway."""
        email = email.strip()
        self._require_credentials(email, password)
        if password != confirm_password:
            raise ValidationError("Passwords do not match.", field="confirm_password")
        return await self._gateway.register_user(email, password)

    async def login(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password."""
        email = email.strip()
        self._require_credentials(email, password)
        return await self._gateway.login(email, password)

    async def logout(self, user_id: str) -> None:
        await self._gateway.logout(user_id)

    async def recover_password(self, email: str) -> None:
        """Send a password reset email."""
        email = email.strip()
        if not email:
            raise ValidationError("Email is empty.", field="email")
        await self._gateway.recover_password(email)

    async def is_user_logged_in(self, token: str | None) -> bool:
        if not token:
            return False
        return await self._gateway.get_current_user(token) is not None

    async def get_current_user(self, token: str) -> AuthUser:
        """Resolve a bearer token to its user.

        Raises:
            AuthenticationError: If the token is invalid or expired
        """
        user = await self._gateway.get_current_user(token)
        if user is None:
            raise AuthenticationError(
                message="Invalid or expired token",
                error_code=ErrorCode.INVALID_TOKEN,
            )
        return user

    @staticmethod
    def _require_credentials(email: str, password: str) -> None:
        if not email or not password:
            raise ValidationError("Email or password is empty.")
