"""Firebase Authentication gateway.

Password sign-up, sign-in and reset go through the Identity Toolkit REST API
(the Admin SDK cannot check passwords). Logout revokes refresh tokens through
the Admin SDK, and ID tokens are checked by ``TokenVerifier``.
"""

import asyncio
import logging
from typing import Any

import httpx
from firebase_admin import App
from firebase_admin import auth as firebase_auth
from firebase_admin.exceptions import FirebaseError

from core.config import settings
from core.exceptions import AuthenticationError, ErrorCode, GatewayError
from domain.entities.user import AuthSession, AuthUser
from infrastructure.auth.token_verifier import TokenVerifier

logger = logging.getLogger(__name__)

GATEWAY_NAME = "auth"

# Identity Toolkit error codes mapped to user-facing messages
_ERROR_MESSAGES = {
    "EMAIL_EXISTS": "An account with this email already exists.",
    "EMAIL_NOT_FOUND": "No account found for this email.",
    "INVALID_PASSWORD": "Incorrect email or password.",
    "INVALID_LOGIN_CREDENTIALS": "Incorrect email or password.",
    "INVALID_EMAIL": "The email address is badly formatted.",
    "USER_DISABLED": "This account has been disabled.",
    "WEAK_PASSWORD": "Password should be at least 6 characters.",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "Too many attempts. Try again later.",
}

_CREDENTIAL_ERRORS = {"EMAIL_NOT_FOUND", "INVALID_PASSWORD", "INVALID_LOGIN_CREDENTIALS"}


class FirebaseAuthGateway:
    """Auth gateway backed by Firebase Authentication."""

    def __init__(
        self,
        api_key: str = settings.firebase_web_api_key,
        verifier: TokenVerifier | None = None,
        http_client: httpx.AsyncClient | None = None,
        base_url: str = settings.identity_toolkit_url,
        app: App | None = None,
    ) -> None:
        self._api_key = api_key
        self._verifier = verifier or TokenVerifier()
        self._client = http_client or httpx.AsyncClient(timeout=10.0)
        self._base_url = base_url.rstrip("/")
        self._app = app

    async def register_user(self, email: str, password: str) -> AuthSession:
        data = await self._call(
            "accounts:signUp",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        logger.info("Registered Firebase user %s", data.get("localId"))
        return self._to_session(data)

    async def login(self, email: str, password: str) -> AuthSession:
        data = await self._call(
            "accounts:signInWithPassword",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        return self._to_session(data)

    async def logout(self, user_id: str) -> None:
        try:
            await asyncio.to_thread(
                firebase_auth.revoke_refresh_tokens, user_id, app=self._app
            )
        except FirebaseError as e:
            raise GatewayError(GATEWAY_NAME, str(e)) from e

    async def recover_password(self, email: str) -> None:
        await self._call(
            "accounts:sendOobCode",
            {"requestType": "PASSWORD_RESET", "email": email},
        )

    async def get_current_user(self, token: str) -> AuthUser | None:
        return await self._verifier.validate_token(token)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _call(self, method: str, body: dict[str, Any]) -> dict[str, Any]:
        """POST to an Identity Toolkit method, translating error payloads."""
        url = f"{self._base_url}/{method}"
        try:
            response = await self._client.post(url, params={"key": self._api_key}, json=body)
        except httpx.HTTPError as e:
            raise GatewayError(GATEWAY_NAME, f"Identity service unreachable: {e}") from e

        if response.is_success:
            return response.json()  # type: ignore[no-any-return]

        code = self._error_code(response)
        message = _ERROR_MESSAGES.get(code, code or f"Identity service error ({response.status_code})")
        logger.warning("Identity Toolkit %s failed: %s", method, code)
        if code in _CREDENTIAL_ERRORS:
            raise AuthenticationError(message=message, error_code=ErrorCode.INVALID_CREDENTIALS)
        raise GatewayError(GATEWAY_NAME, message)

    @staticmethod
    def _error_code(response: httpx.Response) -> str:
        try:
            raw = response.json().get("error", {}).get("message", "")
        except ValueError:
            return ""
        # e.g. "WEAK_PASSWORD : Password should be at least 6 characters"
        return str(raw).split(" : ")[0].strip()

    @staticmethod
    def _to_session(data: dict[str, Any]) -> AuthSession:
        expires_in = data.get("expiresIn")
        return AuthSession(
            user=AuthUser(
                id=data["localId"],
                email=data.get("email", ""),
                display_name=data.get("displayName") or None,
            ),
            id_token=data["idToken"],
            refresh_token=data.get("refreshToken"),
            expires_in=int(expires_in) if expires_in else None,
        )
