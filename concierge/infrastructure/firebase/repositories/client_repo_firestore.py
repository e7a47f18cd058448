"""Firestore-backed client repository (implements IClientRepository)."""

from __future__ import annotations

from typing import Any

from concierge.application.dtos.document import StoredDocument
from concierge.infrastructure.firebase.collections import COLLECTION_CLIENTS
from concierge.infrastructure.firebase.repositories._base import (
    FirestoreCompanyScopedRepository,
)
from concierge.shared.utils.datetime import utc_now


class FirestoreClientRepository(FirestoreCompanyScopedRepository):
    """Clients of a company. Each keeps a denormalized upcomingReservations list."""

    collection_name = COLLECTION_CLIENTS

    async def map_for_company(self, company_id: str) -> dict[str, StoredDocument]:
        """Return {client_id: client} for every client of the company."""
        return {doc.id: doc for doc in await self.list_for_company(company_id)}

    async def append_upcoming_reservation(
        self, client_id: str, entry: dict[str, Any]
    ) -> bool:
        """Append a reservation summary to the client's upcomingReservations list.

        Read-modify-write: the REST API has no arrayUnion for plain maps.
        Returns False when the client no longer exists.
        """
        doc = await self.get(client_id)
        if doc is None:
            return False
        current = doc.get("upcomingReservations")
        upcoming = list(current) if isinstance(current, list) else []
        upcoming.append(entry)
        return await self.update(
            client_id, {"upcomingReservations": upcoming, "updatedAt": utc_now()}
        )
