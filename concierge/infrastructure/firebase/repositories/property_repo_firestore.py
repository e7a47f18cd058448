"""Firestore-backed villa and boat repositories (implement IDocumentRepository)."""

from __future__ import annotations

from concierge.infrastructure.firebase.collections import (
    COLLECTION_BOATS,
    COLLECTION_VILLAS,
)
from concierge.infrastructure.firebase.repositories._base import (
    FirestoreCompanyScopedRepository,
)


class FirestoreVillaRepository(FirestoreCompanyScopedRepository):
    """Villas with their photo lists (strings or {url, path} maps)."""

    collection_name = COLLECTION_VILLAS


class FirestoreBoatRepository(FirestoreCompanyScopedRepository):
    collection_name = COLLECTION_BOATS
