"""Firestore-backed company repository (implements ICompanyRepository)."""

from __future__ import annotations

from concierge.application.dtos.company import CompanyResult
from concierge.infrastructure.firebase.client import DocumentClient
from concierge.infrastructure.firebase.collections import COLLECTION_COMPANIES


class FirestoreCompanyRepository:
    """Companies are the tenants every other collection is partitioned by."""

    def __init__(self, client: DocumentClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_COMPANIES)

    async def get_by_id(self, company_id: str) -> CompanyResult | None:
        """Return company by ID."""
        doc = await self._coll.document(company_id).get()
        if not doc:
            return None
        d = doc.to_dict()
        return CompanyResult(
            id=doc.id,
            name=d.get("name") or doc.id,
            active=d.get("active", True) is not False,
        )

    async def list_all(self) -> list[CompanyResult]:
        """Return all companies (used by maintenance reports)."""
        results: list[CompanyResult] = []
        async for snapshot in self._coll.stream():
            d = snapshot.to_dict()
            results.append(
                CompanyResult(
                    id=snapshot.id,
                    name=d.get("name") or snapshot.id,
                    active=d.get("active", True) is not False,
                )
            )
        return results

    async def create(self, company_id: str, name: str) -> CompanyResult:
        """Create company with a caller-chosen id; DocumentExistsException when taken."""
        await self._coll.create(company_id, {"name": name, "active": True})
        return CompanyResult(id=company_id, name=name, active=True)
