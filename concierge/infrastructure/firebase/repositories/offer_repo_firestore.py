"""Firestore-backed offer repository (implements IOfferRepository)."""

from __future__ import annotations

from concierge.application.dtos.document import StoredDocument
from concierge.infrastructure.firebase.collections import COLLECTION_OFFERS
from concierge.infrastructure.firebase.repositories._base import (
    FirestoreCompanyScopedRepository,
)


class FirestoreOfferRepository(FirestoreCompanyScopedRepository):
    """Offers (quotes) sent to clients before they become reservations."""

    collection_name = COLLECTION_OFFERS

    async def list_for_client(self, company_id: str, client_id: str) -> list[StoredDocument]:
        return await self.list_for_company(company_id, clientId=client_id)
