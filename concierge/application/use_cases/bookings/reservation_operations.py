"""Direct reservation creation and lookup for a client."""

from __future__ import annotations

from typing import Any

from concierge.application.dtos.caller import Caller
from concierge.application.dtos.document import StoredDocument
from concierge.application.interfaces.repositories import (
    IClientRepository,
    IReservationRepository,
)
from concierge.domain.enums import ReservationStatus
from concierge.domain.exceptions import ResourceNotFoundException, ValidationException
from concierge.shared.telemetry.logging import get_logger
from concierge.shared.utils.numbers import to_int

logger = get_logger(__name__)


class ReservationService:
    """Create reservations without an offer and keep the client's upcoming list current."""

    def __init__(
        self,
        reservation_repo: IReservationRepository,
        client_repo: IClientRepository,
    ) -> None:
        self.reservation_repo = reservation_repo
        self.client_repo = client_repo

    async def create_reservation(
        self,
        caller: Caller,
        client_id: str,
        *,
        check_in: str,
        check_out: str,
        accommodation_type: str,
        adults: Any = 1,
        children: Any = 0,
        transport: str = "",
        notes: str = "",
    ) -> StoredDocument:
        """Create a confirmed reservation and add it to the client's upcomingReservations."""
        if not check_in or not check_out or not accommodation_type:
            raise ValidationException(
                "Check-in, check-out and accommodation type are required"
            )
        client = await self.client_repo.get_for_company(client_id, caller.company_id)
        if client is None:
            raise ResourceNotFoundException("client", client_id)
        reservation = await self.reservation_repo.add(
            caller.company_id,
            {
                "clientId": client_id,
                "checkIn": check_in,
                "checkOut": check_out,
                "adults": to_int(adults) or 1,
                "children": to_int(children),
                "accommodationType": accommodation_type,
                "transport": transport or "",
                "notes": notes or "",
                "createdBy": caller.actor,
                "status": ReservationStatus.CONFIRMED.value,
            },
        )
        await self.client_repo.append_upcoming_reservation(
            client_id,
            {
                "id": reservation.id,
                "checkIn": check_in,
                "checkOut": check_out,
                "accommodationType": accommodation_type,
            },
        )
        logger.info(
            "Reservation created",
            extra={"reservation_id": reservation.id, "client_id": client_id},
        )
        return reservation

    async def get_reservation(self, company_id: str, reservation_id: str) -> StoredDocument:
        reservation = await self.reservation_repo.get_for_company(reservation_id, company_id)
        if reservation is None:
            raise ResourceNotFoundException("reservation", reservation_id)
        return reservation

    async def list_reservations(
        self, company_id: str, client_id: str | None = None
    ) -> list[StoredDocument]:
        if client_id:
            return await self.reservation_repo.list_for_company(company_id, clientId=client_id)
        return await self.reservation_repo.list_for_company(company_id)
