"""Offer operations: drafting, the follow-up overview, and conversion to a reservation."""

from __future__ import annotations

from typing import Any

from concierge.application.dtos.caller import Caller
from concierge.application.dtos.document import StoredDocument
from concierge.application.dtos.offer import OfferOverviewItem, OfferStats
from concierge.application.interfaces.repositories import (
    IClientRepository,
    IOfferRepository,
    IReservationRepository,
)
from concierge.application.services.offer_conversion import (
    build_reservation_from_offer,
    default_stay,
    upcoming_entry,
)
from concierge.application.services.offer_pricing import (
    DEFAULT_FOLLOW_UP_DAYS,
    build_overview,
    offer_stats,
    offer_total,
)
from concierge.domain.enums import OfferStatus
from concierge.domain.exceptions import (
    OfferAlreadyBookedException,
    ResourceNotFoundException,
    ValidationException,
)
from concierge.shared.telemetry.logging import get_logger
from concierge.shared.utils.datetime import utc_now

logger = get_logger(__name__)


class OfferService:
    """Offers sent to clients: priced item lists that can become reservations."""

    def __init__(
        self,
        offer_repo: IOfferRepository,
        client_repo: IClientRepository,
        reservation_repo: IReservationRepository,
        follow_up_days: int = DEFAULT_FOLLOW_UP_DAYS,
    ) -> None:
        self.offer_repo = offer_repo
        self.client_repo = client_repo
        self.reservation_repo = reservation_repo
        self.follow_up_days = follow_up_days

    async def _client(self, company_id: str, client_id: str) -> StoredDocument:
        client = await self.client_repo.get_for_company(client_id, company_id)
        if client is None:
            raise ResourceNotFoundException("client", client_id)
        return client

    async def get_offer(self, company_id: str, offer_id: str) -> StoredDocument:
        offer = await self.offer_repo.get_for_company(offer_id, company_id)
        if offer is None:
            raise ResourceNotFoundException("offer", offer_id)
        return offer

    @staticmethod
    def _priced_fields(
        items: list[dict[str, Any]],
        notes: str | None,
        discount_type: str | None,
        discount_value: float | None,
    ) -> dict[str, Any]:
        if not items:
            raise ValidationException("Please add at least one service to the offer", field="items")
        subtotal, total = offer_total(items, discount_type, discount_value)
        return {
            "items": items,
            "subtotal": subtotal,
            "totalValue": total,
            "discountType": discount_type,
            "discountValue": discount_value or 0,
            "notes": notes or "",
        }

    async def create_offer(
        self,
        caller: Caller,
        client_id: str,
        items: list[dict[str, Any]],
        *,
        notes: str | None = None,
        discount_type: str | None = None,
        discount_value: float | None = None,
    ) -> StoredDocument:
        """Create a draft offer for a client of the caller's company."""
        client = await self._client(caller.company_id, client_id)
        fields = self._priced_fields(items, notes, discount_type, discount_value)
        offer = await self.offer_repo.add(
            caller.company_id,
            {
                **fields,
                "clientId": client_id,
                "clientName": client.get("name"),
                "clientEmail": client.get("email"),
                "status": OfferStatus.DRAFT.value,
                "createdBy": caller.actor,
            },
        )
        logger.info("Offer created", extra={"offer_id": offer.id, "client_id": client_id})
        return offer

    async def update_offer(
        self,
        caller: Caller,
        offer_id: str,
        items: list[dict[str, Any]],
        *,
        notes: str | None = None,
        discount_type: str | None = None,
        discount_value: float | None = None,
    ) -> StoredDocument:
        """Replace an offer's items and pricing; it goes back to draft, createdAt is kept."""
        offer = await self.get_offer(caller.company_id, offer_id)
        if offer.get("status") == OfferStatus.BOOKED.value:
            raise OfferAlreadyBookedException(offer_id)
        fields = {
            **self._priced_fields(items, notes, discount_type, discount_value),
            "status": OfferStatus.DRAFT.value,
            "updatedAt": utc_now(),
            "updatedBy": caller.actor,
        }
        await self.offer_repo.update(offer_id, fields)
        return StoredDocument(id=offer_id, data={**offer.data, **fields})

    async def set_status(self, caller: Caller, offer_id: str, status: OfferStatus) -> StoredDocument:
        """Move an offer through its lifecycle (booking happens only through conversion)."""
        offer = await self.get_offer(caller.company_id, offer_id)
        if offer.get("status") == OfferStatus.BOOKED.value or status == OfferStatus.BOOKED:
            raise OfferAlreadyBookedException(offer_id)
        fields = {"status": status.value, "updatedAt": utc_now(), "updatedBy": caller.actor}
        await self.offer_repo.update(offer_id, fields)
        return StoredDocument(id=offer_id, data={**offer.data, **fields})

    async def delete_offer(self, caller: Caller, offer_id: str) -> None:
        """Delete an offer; booked offers are kept because a reservation points at them."""
        offer = await self.get_offer(caller.company_id, offer_id)
        if offer.get("status") == OfferStatus.BOOKED.value:
            raise OfferAlreadyBookedException(offer_id)
        await self.offer_repo.delete(offer_id)

    async def list_offers(self, company_id: str, client_id: str | None = None) -> list[StoredDocument]:
        if client_id:
            return await self.offer_repo.list_for_client(company_id, client_id)
        return await self.offer_repo.list_for_company(company_id)

    async def overview(self, company_id: str) -> tuple[OfferStats, list[OfferOverviewItem]]:
        """Counts plus every offer with its next action, most urgent first."""
        offers = await self.offer_repo.list_for_company(company_id)
        return offer_stats(offers), build_overview(offers, follow_up_days=self.follow_up_days)

    async def convert_to_reservation(
        self,
        caller: Caller,
        offer_id: str,
        *,
        check_in: str | None = None,
        check_out: str | None = None,
        adults: int = 2,
        children: int = 0,
        notes: str = "",
        overrides: dict[int, dict[str, Any]] | None = None,
        language: str = "en",
    ) -> StoredDocument:
        """Create a confirmed reservation from an offer and mark the offer booked.

        Dates default to today and a week later. The reservation is also
        appended to the client's upcomingReservations.
        """
        offer = await self.get_offer(caller.company_id, offer_id)
        if offer.get("status") == OfferStatus.BOOKED.value:
            raise OfferAlreadyBookedException(offer_id)
        client_id = offer.get("clientId")
        if not client_id:
            raise ValidationException("Offer has no client", field="clientId")
        await self._client(caller.company_id, client_id)

        default_in, default_out = default_stay()
        fields = build_reservation_from_offer(
            offer_id,
            offer.data,
            client_id,
            check_in=check_in or default_in,
            check_out=check_out or default_out,
            adults=adults,
            children=children,
            notes=notes,
            overrides=overrides,
            language=language,
        )
        fields["createdBy"] = caller.actor
        reservation = await self.reservation_repo.add(caller.company_id, fields)
        await self.offer_repo.update(
            offer_id,
            {
                "status": OfferStatus.BOOKED.value,
                "updatedAt": utc_now(),
                "updatedBy": caller.actor,
            },
        )
        await self.client_repo.append_upcoming_reservation(
            client_id, upcoming_entry(reservation.id, offer_id, reservation.data)
        )
        logger.info(
            "Offer converted to reservation",
            extra={"offer_id": offer_id, "reservation_id": reservation.id},
        )
        return reservation
