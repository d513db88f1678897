"""Dependency injection factories for API v1."""

from functools import lru_cache

from firebase_admin import storage

from core.config import settings
from domain.gateways.media_gateway import IMediaGateway
from domain.gateways.profile_store import IProfileStore
from domain.services.edit_session import EditSessionManager
from domain.services.profile_service import ProfileService
from infrastructure.firebase.app import get_firebase_app, get_firestore_client
from infrastructure.firebase.firestore_profile_store import FirestoreProfileStore
from infrastructure.firebase.storage_media_gateway import StorageMediaGateway


@lru_cache
def get_profile_store() -> IProfileStore:
    """Get the Firestore-backed profile store."""
    app = get_firebase_app()
    return FirestoreProfileStore(get_firestore_client(app))


@lru_cache
def get_media_gateway() -> IMediaGateway:
    """Get the Storage-backed media gateway."""
    app = get_firebase_app()
    bucket = storage.bucket(settings.storage_bucket_name or None, app=app)
    return StorageMediaGateway(bucket)


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(get_profile_store())


@lru_cache
def get_edit_session_manager() -> EditSessionManager:
    """Get the process-wide edit session registry."""
    return EditSessionManager(get_profile_store(), get_media_gateway())
