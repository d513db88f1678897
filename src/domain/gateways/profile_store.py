"""Profile store gateway protocol."""

from typing import Protocol

from domain.entities.profile import Profile


class IProfileStore(Protocol):
    """Gateway to the document database holding profiles.

    Lookups raise ``ProfileNotFoundError`` / ``UsernameNotFoundError`` when the
    record is absent; backend failures raise ``GatewayError``.
    """

    async def is_username_available(self, username: str) -> bool:
        """Check whether no profile uses ``username``."""
        ...

    async def fetch_username_by_user_id(self, user_id: str) -> str:
        """Get the username registered for a user."""
        ...

    async def fetch_user_info(self, username: str) -> Profile:
        """Get a profile by username."""
        ...

    async def fetch_user_profile(self, user_id: str) -> Profile:
        """Get a profile by owner user ID."""
        ...

    async def save_user_info(self, profile: Profile) -> None:
        """Create or overwrite a profile."""
        ...

    async def delete_user_profile(self, user_id: str, username: str) -> None:
        """Delete a profile and release its username."""
        ...

    async def update_has_profile_flag(self, user_id: str, has_profile: bool) -> None:
        """Record whether the user has completed profile setup."""
        ...

    async def check_user_has_profile(self, user_id: str) -> bool:
        """Check whether the user has completed profile setup."""
        ...
