"""Firebase Admin SDK initialization."""

import logging
import os
from pathlib import Path

import firebase_admin
from firebase_admin import credentials
from google.cloud import firestore as gcloud_firestore

from core.config import settings

logger = logging.getLogger(__name__)


def get_firebase_app(credentials_path: str | None = None) -> firebase_admin.App:
    """Return the default Firebase app, initializing it on first use.

    Credentials come from ``credentials_path``, then ``FIREBASE_CREDENTIALS_PATH``,
    then ``GOOGLE_APPLICATION_CREDENTIALS``; with none set, application default
    credentials are used.
    """
    try:
        app = firebase_admin.get_app()
        logger.info("Using existing Firebase app")
        return app
    except ValueError:
        pass

    creds_path = (
        credentials_path
        or settings.firebase_credentials_path
        or os.getenv("GOOGLE_APPLICATION_CREDENTIALS")
    )
    options = {}
    if settings.firebase_project_id:
        options["projectId"] = settings.firebase_project_id
    if settings.storage_bucket_name:
        options["storageBucket"] = settings.storage_bucket_name

    if creds_path:
        if not Path(creds_path).exists():
            raise FileNotFoundError(f"Credentials file not found: {creds_path}")
        cred: credentials.Base = credentials.Certificate(creds_path)
    else:
        cred = credentials.ApplicationDefault()

    app = firebase_admin.initialize_app(cred, options or None)
    logger.info("Initialized new Firebase app for project %s", app.project_id)
    return app


def get_firestore_client(app: firebase_admin.App) -> gcloud_firestore.Client:
    """Create a Firestore client for the configured (possibly named) database."""
    project_id = app.project_id or settings.firebase_project_id
    credential = app.credential.get_credential()
    if settings.firestore_database == "(default)":
        client = gcloud_firestore.Client(project=project_id, credentials=credential)
    else:
        client = gcloud_firestore.Client(
            project=project_id,
            credentials=credential,
            database=settings.firestore_database,
        )
    logger.info(
        "Connected to Firestore database: %s in project %s",
        settings.firestore_database,
        project_id,
    )
    return client
