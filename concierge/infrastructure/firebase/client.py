"""Document store client (Firestore REST or in-memory).

Initialized at app startup. With DATABASE_BACKEND=firestore the client is
built from FIREBASE_SERVICE_ACCOUNT_KEY (JSON string) or
FIREBASE_SERVICE_ACCOUNT_PATH (file path) and talks to the Firestore REST API
with google-auth. With DATABASE_BACKEND=memory an in-process store with the
same async surface is used instead.
"""

import json
import logging
from pathlib import Path
from typing import Union

from concierge.core.config import get_settings
from concierge.infrastructure.firebase._rest_client import (
    FirestoreRESTClient,
    _get_credentials,
)
from concierge.infrastructure.firebase.memory_client import MemoryFirestoreClient

logger = logging.getLogger(__name__)

DocumentClient = Union[FirestoreRESTClient, MemoryFirestoreClient]

_document_client: DocumentClient | None = None


def load_service_account_info() -> dict | None:
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
    if path:
        resolved = Path(path).expanduser().resolve()
        if not resolved.is_file():
            logger.warning(
                "FIREBASE_SERVICE_ACCOUNT_PATH set but file not found: %s (resolved: %s)",
                path,
                resolved,
            )
            return None
        with open(resolved, encoding="utf-8") as f:
            return json.load(f)
    return None


def init_firebase() -> bool:
    """Initialize the Firestore client (REST API + google-auth).

    Idempotent if already initialized. On invalid/malformed credentials or
    any initialization error, logs the exception and returns False so the app
    can still start (health endpoints report the database as unavailable).

    Returns:
        True if Firestore was initialized, False if disabled or on error.
    """
    global _document_client
    if _document_client is not None:
        return True
    try:
        key_dict = load_service_account_info()
        if not key_dict:
            return False

        project_id = key_dict.get("project_id")
        if not project_id:
            logger.error("Firebase service account JSON missing 'project_id'")
            return False

        cred = _get_credentials(key_dict)
        _document_client = FirestoreRESTClient(project_id, cred)
        logger.info("Firestore client initialized for project %s", project_id)
        return True
    except Exception:
        logger.exception("Firebase initialization failed")
        return False


def init_memory_store() -> MemoryFirestoreClient:
    """Install (or return the existing) in-memory document store."""
    global _document_client
    if not isinstance(_document_client, MemoryFirestoreClient):
        _document_client = MemoryFirestoreClient()
        logger.info("In-memory document store initialized")
    return _document_client


def init_document_store() -> bool:
    """Initialize the backend selected by settings.database_backend."""
    if get_settings().database_backend == "memory":
        init_memory_store()
        return True
    return init_firebase()


def get_firestore_client() -> DocumentClient | None:
    """Return the document client, or None if not configured.

    Operations used by repositories (all async):
    - await db.collection(name).document(id).get() -> DocumentSnapshot | None
    - await db.collection(name).document(id).set(data) / .update(data) / .delete()
    - await db.collection(name).add(data) -> new id
    - async for doc in db.collection(name).where(f, op, v).where(...).stream()
    - batch = db.batch(); batch.delete(ref); await batch.commit()
    """
    return _document_client


async def close_firebase() -> None:
    """Close the client's HTTP connection pool. Call from app shutdown."""
    global _document_client
    if _document_client is not None:
        await _document_client.aclose()
        _document_client = None
        logger.info("Document store client closed")
