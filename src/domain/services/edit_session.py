"""Profile edit sessions and the save workflow."""

from enum import StrEnum

import structlog

from core.exceptions import (
    EditSessionNotFoundError,
    SaveInProgressError,
    SessionNotReadyError,
    ValidationError,
)
from domain.entities.profile import Education, Experience, Profile, Project
from domain.gateways.media_gateway import IMediaGateway
from domain.gateways.profile_store import IProfileStore
from domain.services import profile_editor
from domain.services.profile_editor import KeyFactory, new_key

logger = structlog.get_logger()


async def save_profile(
    profile: Profile,
    pending_image: bytes | None,
    store: IProfileStore,
    media: IMediaGateway,
) -> Profile:
    """Persist ``profile``, uploading ``pending_image`` first when given.

    The uploaded URL is merged into ``avatar`` before the store is called. If
    the upload raises, the store is never called; if the store raises, the
    exception propagates. Returns the profile exactly as persisted.
    """
    if pending_image is not None:
        url = await media.upload_image(pending_image)
        logger.info("avatar_uploaded", user_id=profile.id, url=url)
        profile = profile_editor.set_field(profile, "avatar", url)

    await store.save_user_info(profile)
    logger.info("profile_saved", user_id=profile.id, username=profile.username)
    return profile


class EditSessionState(StrEnum):
    """Lifecycle of an edit session."""

    LOADING = "loading"
    EDITING = "editing"
    PERSISTING = "persisting"


class ProfileEditSession:
    """Owns one user's working copy of their profile.

    Edits are applied with the pure functions in ``profile_editor``. Edits are
    accepted while a save is outstanding; the save persists the snapshot taken
    when it started. Only one save may be outstanding at a time.
    """

    def __init__(
        self,
        user_id: str,
        store: IProfileStore,
        media: IMediaGateway,
        key_factory: KeyFactory = new_key,
    ) -> None:
        self.user_id = user_id
        self._store = store
        self._media = media
        self._key_factory = key_factory
        self._state = EditSessionState.LOADING
        self._profile: Profile | None = None
        self._pending_image: bytes | None = None

    @property
    def state(self) -> EditSessionState:
        return self._state

    @property
    def profile(self) -> Profile:
        """The working copy. Raises SessionNotReadyError until loaded."""
        if self._profile is None:
            raise SessionNotReadyError(self._state.value)
        return self._profile

    @property
    def has_pending_image(self) -> bool:
        return self._pending_image is not None

    async def load(self) -> Profile:
        """Fetch the username, then the profile by username.

        A failure of either lookup propagates and leaves the session loading.
        """
        username = await self._store.fetch_username_by_user_id(self.user_id)
        profile = await self._store.fetch_user_info(username)
        self._profile = profile
        self._state = EditSessionState.EDITING
        logger.info("edit_session_loaded", user_id=self.user_id, username=username)
        return profile

    def set_field(self, field_name: str, value: str | None) -> Profile:
        self._profile = profile_editor.set_field(self.profile, field_name, value)
        return self._profile

    def add_education(self, education: Education) -> str:
        self._profile, key = profile_editor.add_education(
            self.profile, education, self._key_factory
        )
        return key

    def update_education(self, key: str, education: Education) -> Profile:
        self._profile = profile_editor.update_education(self.profile, key, education)
        return self._profile

    def add_experience(self, experience: Experience) -> str:
        self._profile, key = profile_editor.add_experience(
            self.profile, experience, self._key_factory
        )
        return key

    def update_experience(self, key: str, experience: Experience) -> Profile:
        self._profile = profile_editor.update_experience(self.profile, key, experience)
        return self._profile

    def add_project(self, project: Project) -> str:
        self._profile, key = profile_editor.add_project(
            self.profile, project, self._key_factory
        )
        return key

    def update_project(self, key: str, project: Project) -> Profile:
        self._profile = profile_editor.update_project(self.profile, key, project)
        return self._profile

    def select_image(self, data: bytes, max_bytes: int | None = None) -> None:
        """Stage a new avatar image; it is uploaded on the next save.

        Raises:
            ValidationError: ``data`` is empty or larger than ``max_bytes``.
        """
        if not data:
            raise ValidationError("Image is empty", field="avatar")
        if max_bytes is not None and len(data) > max_bytes:
            raise ValidationError(f"Image exceeds {max_bytes} bytes", field="avatar")
        if self._profile is None:
            raise SessionNotReadyError(self._state.value)
        self._pending_image = data

    def clear_image(self) -> None:
        self._pending_image = None

    async def save(self) -> Profile:
        """Run the save workflow on the current snapshot.

        Raises:
            SaveInProgressError: a save is already outstanding.
            SessionNotReadyError: the profile has not been loaded.
        """
        if self._state is EditSessionState.PERSISTING:
            raise SaveInProgressError()
        snapshot = self.profile
        image = self._pending_image

        self._state = EditSessionState.PERSISTING
        try:
            saved = await save_profile(snapshot, image, self._store, self._media)
        except Exception as e:
            logger.warning(
                "profile_save_failed",
                user_id=self.user_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise
        else:
            if image is not None:
                # Keep edits made while persisting, but adopt the uploaded avatar
                self._profile = profile_editor.set_field(self.profile, "avatar", saved.avatar)
                if self._pending_image is image:
                    self._pending_image = None
            return saved
        finally:
            self._state = EditSessionState.EDITING


class EditSessionManager:
    """In-process registry holding at most one edit session per user."""

    def __init__(
        self,
        store: IProfileStore,
        media: IMediaGateway,
        key_factory: KeyFactory = new_key,
    ) -> None:
        self._store = store
        self._media = media
        self._key_factory = key_factory
        self._sessions: dict[str, ProfileEditSession] = {}

    async def open(self, user_id: str) -> ProfileEditSession:
        """Start a fresh session for the user, replacing any existing one."""
        session = ProfileEditSession(user_id, self._store, self._media, self._key_factory)
        await session.load()
        self._sessions[user_id] = session
        return session

    def get(self, user_id: str) -> ProfileEditSession:
        session = self._sessions.get(user_id)
        if session is None:
            raise EditSessionNotFoundError(user_id)
        return session

    def close(self, user_id: str) -> None:
        if self._sessions.pop(user_id, None) is None:
            raise EditSessionNotFoundError(user_id)
