"""Shared Firestore access for company-scoped collections."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from concierge.application.dtos.document import StoredDocument
from concierge.infrastructure.firebase.client import DocumentClient
from concierge.shared.utils.datetime import utc_now


class FirestoreCompanyScopedRepository:
    """CRUD over one collection whose documents carry a companyId field.

    Reads always filter on companyId server-side and check it again on the
    decoded document, so a mis-indexed or legacy document never leaks across
    companies. Subclasses set collection_name.
    """

    collection_name: str = ""

    def __init__(self, client: DocumentClient, collection_name: str | None = None) -> None:
        self._client = client
        if collection_name:
            self.collection_name = collection_name
        self._coll = client.collection(self.collection_name)

    @staticmethod
    def _to_document(snapshot: Any) -> StoredDocument:
        return StoredDocument(id=snapshot.id, data=dict(snapshot.to_dict() or {}))

    async def get(self, document_id: str) -> StoredDocument | None:
        """Return document by id regardless of company (callers check ownership)."""
        snapshot = await self._coll.document(document_id).get()
        if not snapshot:
            return None
        return self._to_document(snapshot)

    async def get_for_company(self, document_id: str, company_id: str) -> StoredDocument | None:
        """Return document by id only when it belongs to company_id."""
        doc = await self.get(document_id)
        if doc is None or doc.company_id != company_id:
            return None
        return doc

    async def list_for_company(self, company_id: str, **equals: Any) -> list[StoredDocument]:
        """Return all documents of a company, optionally narrowed by equality filters."""
        q = self._coll.where("companyId", "==", company_id)
        for field_name, value in equals.items():
            q = q.where(field_name, "==", value)
        results: list[StoredDocument] = []
        async for snapshot in q.stream():
            doc = self._to_document(snapshot)
            if doc.company_id == company_id:
                results.append(doc)
        return results

    async def list_all(self) -> list[StoredDocument]:
        """Return every document in the collection (maintenance sweeps only)."""
        return [self._to_document(snapshot) async for snapshot in self._coll.stream()]

    async def add(self, company_id: str, data: dict[str, Any]) -> StoredDocument:
        """Create a document with a generated id; stamps companyId and createdAt."""
        payload = {**data, "companyId": company_id}
        payload.setdefault("createdAt", utc_now())
        doc_id = await self._coll.add(payload)
        return StoredDocument(id=doc_id, data=payload)

    async def update(self, document_id: str, fields: dict[str, Any]) -> bool:
        """Merge fields into an existing document. Returns False when it does not exist."""
        return await self._coll.document(document_id).update(fields)

    async def delete(self, document_id: str) -> None:
        await self._coll.document(document_id).delete()

    async def delete_many(self, document_ids: Iterable[str]) -> int:
        """Delete documents in batched commits; returns the number of deletes sent."""
        batch = self._client.batch()
        for document_id in document_ids:
            batch.delete(self._coll.document(document_id))
        if not len(batch):
            return 0
        return await batch.commit()
