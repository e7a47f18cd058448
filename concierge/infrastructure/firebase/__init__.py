"""Firestore integration (REST client, in-memory store, repositories)."""

from concierge.infrastructure.firebase.client import (
    DocumentClient,
    get_firestore_client,
    init_document_store,
    init_firebase,
    init_memory_store,
)

__all__ = [
    "DocumentClient",
    "get_firestore_client",
    "init_document_store",
    "init_firebase",
    "init_memory_store",
]
