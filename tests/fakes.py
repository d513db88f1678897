"""In-memory gateway doubles for API integration tests."""

from dataclasses import dataclass, field

from core.exceptions import (
    AuthenticationError,
    ErrorCode,
    GatewayError,
    ProfileNotFoundError,
    UsernameNotFoundError,
)
from domain.entities.profile import Profile
from domain.entities.user import AuthSession, AuthUser
from infrastructure.auth.token_verifier import TokenVerifier


class InMemoryProfileStore:
    """Profile store keeping documents in dicts, with the Firestore layout."""

    def __init__(self) -> None:
        self.profiles: dict[str, Profile] = {}
        self.users: dict[str, dict] = {}
        self.fail_saves = False
        self.save_calls: list[Profile] = []

    async def is_username_available(self, username: str) -> bool:
        return username not in self.profiles

    async def fetch_username_by_user_id(self, user_id: str) -> str:
        username = self.users.get(user_id, {}).get("username")
        if not username:
            raise UsernameNotFoundError(user_id)
        return str(username)

    async def fetch_user_info(self, username: str) -> Profile:
        if username not in self.profiles:
            raise ProfileNotFoundError(username)
        return self.profiles[username]

    async def fetch_user_profile(self, user_id: str) -> Profile:
        for profile in self.profiles.values():
            if profile.id == user_id:
                return profile
        raise ProfileNotFoundError(user_id)

    async def save_user_info(self, profile: Profile) -> None:
        self.save_calls.append(profile)
        if self.fail_saves:
            raise GatewayError("profile_store", "Firestore unavailable")
        self.profiles[profile.username] = profile
        self.users.setdefault(profile.id, {})["username"] = profile.username

    async def delete_user_profile(self, user_id: str, username: str) -> None:
        self.profiles.pop(username, None)
        self.users.get(user_id, {}).pop("username", None)

    async def update_has_profile_flag(self, user_id: str, has_profile: bool) -> None:
        self.users.setdefault(user_id, {})["hasProfile"] = has_profile

    async def check_user_has_profile(self, user_id: str) -> bool:
        return bool(self.users.get(user_id, {}).get("hasProfile", False))


class InMemoryMediaGateway:
    """Media gateway returning deterministic URLs."""

    def __init__(self) -> None:
        self.uploads: list[bytes] = []
        self.fail_uploads = False

    async def upload_image(self, data: bytes) -> str:
        if self.fail_uploads:
            raise GatewayError("media", "Storage unavailable")
        self.uploads.append(data)
        return f"https://storage.test/avatars/{len(self.uploads)}.png"


@dataclass
class _Account:
    user: AuthUser
    password: str


@dataclass
class InMemoryAuthGateway:
    """Auth gateway issuing locally signed tokens."""

    verifier: TokenVerifier
    accounts: dict[str, _Account] = field(default_factory=dict)
    reset_requests: list[str] = field(default_factory=list)
    logged_out: list[str] = field(default_factory=list)

    async def register_user(self, email: str, password: str) -> AuthSession:
        if email in self.accounts:
            raise GatewayError("auth", "An account with this email already exists.")
        user = AuthUser(id=f"uid-{len(self.accounts) + 1}", email=email)
        self.accounts[email] = _Account(user=user, password=password)
        return self._session(user)

    async def login(self, email: str, password: str) -> AuthSession:
        account = self.accounts.get(email)
        if account is None or account.password != password:
            raise AuthenticationError(
                message="Incorrect email or password.",
                error_code=ErrorCode.INVALID_CREDENTIALS,
            )
        return self._session(account.user)

    async def logout(self, user_id: str) -> None:
        self.logged_out.append(user_id)

    async def recover_password(self, email: str) -> None:
        self.reset_requests.append(email)

    async def get_current_user(self, token: str) -> AuthUser | None:
        return await self.verifier.validate_token(token)

    def _session(self, user: AuthUser) -> AuthSession:
        return AuthSession(user=user, id_token=self.verifier.create_token(user), expires_in=3600)
