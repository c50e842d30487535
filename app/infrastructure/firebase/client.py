"""Firestore client (REST-based, no firebase-admin).

Initialized at app startup from FIREBASE_SERVICE_ACCOUNT_KEY (JSON string) or
FIREBASE_SERVICE_ACCOUNT_PATH (file path). Posts, categories and user
profiles all live in this one store.
"""

import json
import logging
from pathlib import Path

from app.core.config import get_settings
from app.infrastructure.firebase._rest_client import (
    FirestoreRESTClient,
    _get_credentials,
)

logger = logging.getLogger(__name__)

_firestore_client: FirestoreRESTClient | None = None


def _load_key_dict() -> dict | None:
    """Return service account dict from env key or file path."""
    settings = get_settings()
    key_json = (
        settings.firebase_service_account_key.get_secret_value()
        if settings.firebase_service_account_key
        else None
    )
    if key_json:
        try:
            return json.loads(key_json)
        except json.JSONDecodeError as e:
            raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY is not valid JSON") from e
    path = settings.firebase_service_account_path
    if not path:
        return None
    resolved = Path(path).expanduser().resolve()
    if not resolved.is_file():
        logger.warning("FIREBASE_SERVICE_ACCOUNT_PATH set but file not found: %s", resolved)
        return None
    with open(resolved, encoding="utf-8") as f:
        return json.load(f)


def init_firebase() -> bool:
    """Initialize the Firestore client.

    Safe to call when no credentials are configured (returns False and the
    post endpoints answer 503). Idempotent once initialized.
    """
    global _firestore_client
    if _firestore_client is not None:
        return True
    try:
        key_dict = _load_key_dict()
        if not key_dict:
            logger.warning("No Firebase credentials configured; content store disabled")
            return False
        project_id = key_dict.get("project_id")
        if not project_id:
            logger.error("Firebase service account JSON missing 'project_id'")
            return False
        _firestore_client = FirestoreRESTClient(project_id, _get_credentials(key_dict))
        logger.info("Firestore client initialized for project %s", project_id)
        return True
    except (ValueError, OSError):
        logger.exception("Firebase initialization failed")
        return False


def get_firestore_client() -> FirestoreRESTClient | None:
    """Return the Firestore client, or None if not configured."""
    return _firestore_client


async def close_firebase() -> None:
    """Close the Firestore client's HTTP connection pool. Call from app shutdown."""
    global _firestore_client
    if _firestore_client is not None:
        await _firestore_client.aclose()
        _firestore_client = None
        logger.info("Firestore HTTP client closed")
