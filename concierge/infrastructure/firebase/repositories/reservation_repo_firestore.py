"""Firestore-backed reservation repository (implements IReservationRepository)."""

from __future__ import annotations

from concierge.application.dtos.document import StoredDocument
from concierge.domain.enums import ReservationStatus
from concierge.infrastructure.firebase.collections import COLLECTION_RESERVATIONS
from concierge.infrastructure.firebase.repositories._base import (
    FirestoreCompanyScopedRepository,
)


class FirestoreReservationRepository(FirestoreCompanyScopedRepository):
    """Reservations (bookings). Field names vary by the client version that wrote them."""

    collection_name = COLLECTION_RESERVATIONS

    async def list_confirmed_for_collaborator(
        self, company_id: str, collaborator_id: str
    ) -> list[StoredDocument]:
        """Return confirmed reservations that credit the given collaborator."""
        return await self.list_for_company(
            company_id,
            collaboratorId=collaborator_id,
            status=ReservationStatus.CONFIRMED.value,
        )
