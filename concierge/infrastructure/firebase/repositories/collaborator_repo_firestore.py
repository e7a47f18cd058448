"""Firestore-backed collaborator repository (implements IDocumentRepository)."""

from __future__ import annotations

from concierge.infrastructure.firebase.collections import COLLECTION_COLLABORATORS
from concierge.infrastructure.firebase.repositories._base import (
    FirestoreCompanyScopedRepository,
)


class FirestoreCollaboratorRepository(FirestoreCompanyScopedRepository):
    """Partners who bring in reservations and earn a commission on them."""

    collection_name = COLLECTION_COLLABORATORS
