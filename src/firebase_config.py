"""Firebase Admin SDK initialization."""

import logging
import os
from functools import lru_cache

import firebase_admin
from firebase_admin import auth, credentials

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def initialize_firebase() -> firebase_admin.App:
    """Initialize the Firebase Admin SDK once per process.

    Uses the service account key at FIREBASE_SERVICE_ACCOUNT_KEY_PATH when it
    exists, Application Default Credentials otherwise.

    Raises:
        ValueError: If FIREBASE_PROJECT_ID is not set
    """
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass  # Not initialized yet

    project_id = os.environ.get("FIREBASE_PROJECT_ID")
    key_path = os.environ.get("FIREBASE_SERVICE_ACCOUNT_KEY_PATH")

    if not project_id:
        raise ValueError("FIREBASE_PROJECT_ID environment variable is required")

    if key_path and os.path.exists(key_path):
        logger.info("Initializing Firebase with service account %s", key_path)
        return firebase_admin.initialize_app(credentials.Certificate(key_path))

    logger.info("Initializing Firebase for project %s", project_id)
    return firebase_admin.initialize_app(
        credentials.ApplicationDefault(), {"projectId": project_id}
    )


def get_firebase_auth() -> auth:
    """Dependency function that returns the Firebase auth module."""
    initialize_firebase()
    return auth
