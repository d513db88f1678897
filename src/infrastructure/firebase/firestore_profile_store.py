"""Profile store backed by Cloud Firestore.

Layout:
    profiles/{username}  -> ProfileDocument
    users/{userId}       -> {"username": str, "hasProfile": bool}
"""

import asyncio
import logging
from typing import Any, Callable, TypeVar

from google.api_core.exceptions import GoogleAPIError
from google.cloud import firestore as gcloud_firestore
from pydantic import ValidationError as PydanticValidationError

from core.config import settings
from core.exceptions import GatewayError, ProfileNotFoundError, UsernameNotFoundError
from domain.entities.profile import Profile
from infrastructure.firebase.documents import ProfileDocument

logger = logging.getLogger(__name__)

GATEWAY_NAME = "profile_store"

T = TypeVar("T")


class FirestoreProfileStore:
    """Profile store gateway using the synchronous Firestore client in worker threads."""

    def __init__(
        self,
        db: gcloud_firestore.Client,
        profiles_collection: str = settings.profiles_collection,
        users_collection: str = settings.users_collection,
    ) -> None:
        self.db = db
        self._profiles = profiles_collection
        self._users = users_collection

    async def is_username_available(self, username: str) -> bool:
        snapshot = await self._run(
            lambda: self.db.collection(self._profiles).document(username).get()
        )
        return not snapshot.exists

    async def fetch_username_by_user_id(self, user_id: str) -> str:
        snapshot = await self._run(
            lambda: self.db.collection(self._users).document(user_id).get()
        )
        data = snapshot.to_dict() if snapshot.exists else None
        username = (data or {}).get("username")
        if not username:
            raise UsernameNotFoundError(user_id)
        return str(username)

    async def fetch_user_info(self, username: str) -> Profile:
        snapshot = await self._run(
            lambda: self.db.collection(self._profiles).document(username).get()
        )
        if not snapshot.exists:
            raise ProfileNotFoundError(username)
        return self._to_profile(snapshot.to_dict())

    async def fetch_user_profile(self, user_id: str) -> Profile:
        def query() -> list[Any]:
            docs = (
                self.db.collection(self._profiles)
                .where("id", "==", user_id)
                .limit(1)
                .stream()
            )
            return list(docs)

        docs = await self._run(query)
        if not docs:
            raise ProfileNotFoundError(user_id)
        return self._to_profile(docs[0].to_dict())

    async def save_user_info(self, profile: Profile) -> None:
        document = ProfileDocument.from_entity(profile).to_firestore()

        def write() -> None:
            batch = self.db.batch()
            batch.set(self.db.collection(self._profiles).document(profile.username), document)
            batch.set(
                self.db.collection(self._users).document(profile.id),
                {"username": profile.username},
                merge=True,
            )
            batch.commit()

        await self._run(write)
        logger.info("Saved profile %s for user %s", profile.username, profile.id)

    async def delete_user_profile(self, user_id: str, username: str) -> None:
        def delete() -> None:
            batch = self.db.batch()
            batch.delete(self.db.collection(self._profiles).document(username))
            batch.set(
                self.db.collection(self._users).document(user_id),
                {"username": gcloud_firestore.DELETE_FIELD},
                merge=True,
            )
            batch.commit()

        await self._run(delete)
        logger.info("Deleted profile %s for user %s", username, user_id)

    async def update_has_profile_flag(self, user_id: str, has_profile: bool) -> None:
        await self._run(
            lambda: self.db.collection(self._users)
            .document(user_id)
            .set({"hasProfile": has_profile}, merge=True)
        )

    async def check_user_has_profile(self, user_id: str) -> bool:
        snapshot = await self._run(
            lambda: self.db.collection(self._users).document(user_id).get()
        )
        if not snapshot.exists:
            return False
        return bool((snapshot.to_dict() or {}).get("hasProfile", False))

    async def _run(self, fn: Callable[[], T]) -> T:
        """Run a blocking Firestore call off the event loop, wrapping SDK errors."""
        try:
            return await asyncio.to_thread(fn)
        except GoogleAPIError as e:
            logger.error("Firestore call failed: %s", e)
            raise GatewayError(GATEWAY_NAME, str(e)) from e

    @staticmethod
    def _to_profile(data: dict[str, Any] | None) -> Profile:
        try:
            return ProfileDocument.model_validate(data or {}).to_entity()
        except PydanticValidationError as e:
            raise GatewayError(GATEWAY_NAME, f"Malformed profile document: {e}") from e
