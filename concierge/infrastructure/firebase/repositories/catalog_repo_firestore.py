"""Firestore-backed service catalog (implements ICatalogRepository)."""

from __future__ import annotations

from concierge.application.dtos.document import StoredDocument
from concierge.infrastructure.firebase.client import DocumentClient
from concierge.infrastructure.firebase.collections import (
    CATEGORY_COLLECTIONS,
    COLLECTION_SERVICES,
)
from concierge.infrastructure.firebase.repositories._base import (
    FirestoreCompanyScopedRepository,
)


class FirestoreServiceRepository(FirestoreCompanyScopedRepository):
    """Generic catalog entries in the 'services' collection."""

    collection_name = COLLECTION_SERVICES


class FirestoreCatalogRepository:
    """Reads catalog items from 'services' plus the per-category collections."""

    def __init__(self, client: DocumentClient) -> None:
        self._client = client
        self._services = FirestoreServiceRepository(client)

    async def list_active_services(
        self, company_id: str, category: str
    ) -> list[StoredDocument]:
        """Return active entries of a category from the generic services collection."""
        return await self._services.list_for_company(
            company_id, category=category, active=True
        )

    async def list_category_items(
        self, company_id: str, category: str
    ) -> list[StoredDocument]:
        """Return items of the category's dedicated collection ([] when it has none)."""
        collection_name = CATEGORY_COLLECTIONS.get(category)
        if not collection_name:
            return []
        repo = FirestoreCompanyScopedRepository(self._client, collection_name)
        return await repo.list_for_company(company_id)
