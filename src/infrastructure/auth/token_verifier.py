"""ID token verification.

Supports both Firebase-issued ID tokens (RS256 via Google's JWKS) and
locally-created tokens (HS256 for tests and local development, accepted only
when ``allow_local_tokens`` is set).

Firebase ID token payload structure:
    {
        "iss": "https://securetoken.google.com/<project-id>",
        "aud": "<project-id>",
        "sub": "<uid>",
        "user_id": "<uid>",
        "email": "user@example.com",
        "name": "Maria",
        "exp": 1234567890
    }
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import httpx
from jose import JWTError, jwk, jwt

from core.config import settings
from domain.entities.user import AuthUser

logger = logging.getLogger(__name__)

# Module-level JWKS cache (fetched once, reused across requests)
_jwks_cache: dict[str, Any] | None = None


async def _get_jwks_keys() -> dict[str, Any]:
    """Fetch and cache Google's securetoken JWKS keys."""
    global _jwks_cache
    if _jwks_cache is not None:
        return _jwks_cache

    jwks_url = settings.firebase_jwks_url
    if not jwks_url:
        return {}

    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(jwks_url, timeout=10.0)
            response.raise_for_status()
            jwks_data = response.json()
            _jwks_cache = {}
            for key_data in jwks_data.get("keys", []):
                kid = key_data.get("kid")
                if kid:
                    _jwks_cache[kid] = key_data
            logger.info("Fetched %d JWKS keys for Firebase ID tokens", len(_jwks_cache))
            return _jwks_cache
    except httpx.HTTPError:
        logger.exception("Failed to fetch JWKS from %s", jwks_url)
        return {}


class TokenVerifier:
    """Validates ID tokens and mints local test tokens."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
        project_id: str = settings.firebase_project_id,
        allow_local_tokens: bool = settings.allow_local_tokens,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes
        self._project_id = project_id
        self._allow_local_tokens = allow_local_tokens

    async def validate_token(self, token: str) -> Optional[AuthUser]:
        """
        Validate an ID token and extract the user.

        Detects the signing algorithm from the token header:
        - RS256 (Firebase): validated via JWKS public key, audience and issuer
        - HS256 (local/test): validated via shared secret, only when local
          tokens are allowed

        Returns:
            AuthUser if valid, None if invalid or expired
        """
        try:
            header = jwt.get_unverified_header(token)
            alg = header.get("alg", self._algorithm)

            if alg == "RS256":
                payload = await self._validate_rs256(token, header)
            elif not self._allow_local_tokens:
                logger.warning("Rejected %s token: local tokens are disabled", alg)
                return None
            else:
                payload = jwt.decode(
                    token,
                    self._secret_key,
                    algorithms=[self._algorithm],
                    options={"verify_aud": False},
                )

            if payload is None:
                return None

            user_id = payload.get("sub") or payload.get("user_id")
            email = payload.get("email")

            if not user_id or not email:
                return None

            return AuthUser(
                id=str(user_id),
                email=email,
                display_name=payload.get("name"),
            )

        except JWTError:
            return None

    async def _validate_rs256(self, token: str, header: dict) -> Optional[dict]:
        """Validate a Firebase-signed ID token against Google's JWKS."""
        kid = header.get("kid")
        if not kid or not self._project_id:
            return None

        jwks_keys = await _get_jwks_keys()
        key_data = jwks_keys.get(kid)
        if not key_data:
            # Key not found, refetch in case Google rotated its keys
            global _jwks_cache
            _jwks_cache = None
            jwks_keys = await _get_jwks_keys()
            key_data = jwks_keys.get(kid)
            if not key_data:
                logger.warning("JWKS key not found for kid=%s", kid)
                return None

        public_key = jwk.construct(key_data, algorithm="RS256")
        return jwt.decode(
            token,
            public_key,
            algorithms=["RS256"],
            audience=self._project_id,
            issuer=f"https://securetoken.google.com/{self._project_id}",
        )

    def create_token(self, user: AuthUser) -> str:
        """
        Create an HS256 token for a user (tests and local development).

        Returns:
            The generated JWT string
        """
        expire = datetime.now(timezone.utc) + timedelta(minutes=self._expire_minutes)

        payload: dict = {
            "sub": user.id,
            "user_id": user.id,
            "email": user.email,
            "name": user.display_name,
            "exp": expire,
        }

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
