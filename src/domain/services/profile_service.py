"""Profile service layer: setup, lookup and deletion workflows."""

import re

import structlog

from core.exceptions import (
    ProfileAlreadyExistsError,
    ProfileNotFoundError,
    UsernameTakenError,
    ValidationError,
)
from domain.entities.profile import Profile, ProfileStatus
from domain.entities.user import AuthUser
from domain.gateways.profile_store import IProfileStore

logger = structlog.get_logger()

USERNAME_PATTERN = re.compile(r"^[a-z0-9_.]{3,30}$")


def normalize_username(username: str) -> str:
    """Lower-case and validate a username."""
    normalized = username.strip().lower()
    if not USERNAME_PATTERN.match(normalized):
        raise ValidationError(
            "Username must be 3-30 characters of letters, digits, '_' or '.'",
            field="username",
        )
    return normalized


class ProfileService:
    """Service layer for Profile business logic."""

    def __init__(self, store: IProfileStore) -> None:
        self._store = store

    async def is_username_available(self, username: str) -> bool:
        return await self._store.is_username_available(normalize_username(username))

    async def create_profile(
        self,
        user: AuthUser,
        username: str,
        name: str,
        role: str = "",
        bio: str = "",
        about: str = "",
        status: ProfileStatus = ProfileStatus.VISITOR,
    ) -> Profile:
        """Complete first-time profile setup for ``user``.

        Each step runs only after the previous one succeeded.
        """
        username = normalize_username(username)

        if await self._store.check_user_has_profile(user.id):
            raise ProfileAlreadyExistsError(user.id)
        if not await self._store.is_username_available(username):
            raise UsernameTakenError(username)

        profile = Profile.new(
            user_id=user.id,
            username=username,
            name=name or user.display_name or username,
            email=user.email,
            role=role,
            bio=bio,
            about=about,
            status=status,
        )
        await self._store.save_user_info(profile)
        await self._store.update_has_profile_flag(user.id, True)
        logger.info("profile_created", user_id=user.id, username=username)
        return profile

    async def get_own_profile(self, user_id: str) -> Profile:
        return await self._store.fetch_user_profile(user_id)

    async def get_public_profile(self, username: str) -> Profile:
        """Get a profile by username as seen by visitors.

        Hidden or inactive profiles are reported as not found.
        """
        username = username.strip().lower()
        profile = await self._store.fetch_user_info(username)
        if not (profile.visible and profile.active):
            raise ProfileNotFoundError(username)
        return profile

    async def has_profile(self, user_id: str) -> bool:
        return await self._store.check_user_has_profile(user_id)

    async def delete_profile(self, user_id: str) -> None:
        """Delete the user's profile, then clear their has-profile flag."""
        username = await self._store.fetch_username_by_user_id(user_id)
        await self._store.delete_user_profile(user_id, username)
        await self._store.update_has_profile_flag(user_id, False)
        logger.info("profile_deleted", user_id=user_id, username=username)
