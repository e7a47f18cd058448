"""Client-grouped bookings: listing, service and payment edits, deletion.

Every mutation writes one reservation and then re-reads the client's
reservations, so the returned ClientGroup always reflects persisted state.
"""

from __future__ import annotations

from typing import Any

from concierge.application.dtos.booking import ClientGroup
from concierge.application.dtos.caller import Caller
from concierge.application.dtos.document import StoredDocument
from concierge.application.interfaces.repositories import (
    IClientRepository,
    IReservationRepository,
)
from concierge.application.services.booking_aggregator import (
    UNKNOWN_CLIENT_ID,
    filter_and_sort_groups,
    group_bookings_by_client,
)
from concierge.application.services.booking_ledger import (
    add_service_fields,
    booking_for_payment,
    build_payment,
    build_service_entry,
    build_shopping_entry,
    find_service_index,
    latest_booking,
    payment_fields,
    remove_service_fields,
)
from concierge.domain.enums import BookingSort, TimeFilter
from concierge.domain.exceptions import (
    AuthorizationException,
    NoBookingForClientException,
    ResourceNotFoundException,
    ServiceNotFoundInBookingException,
)
from concierge.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class BookingService:
    """Bookings grouped by client, with their services and payments."""

    def __init__(
        self,
        reservation_repo: IReservationRepository,
        client_repo: IClientRepository,
    ) -> None:
        self.reservation_repo = reservation_repo
        self.client_repo = client_repo

    async def _groups(self, company_id: str, **equals: Any) -> dict[str, ClientGroup]:
        bookings = await self.reservation_repo.list_for_company(company_id, **equals)
        clients = await self.client_repo.map_for_company(company_id)
        return group_bookings_by_client(bookings, clients, company_id)

    async def list_groups(
        self,
        company_id: str,
        time_filter: TimeFilter = TimeFilter.ALL,
        search: str | None = None,
        sort: BookingSort = BookingSort.DATE,
    ) -> list[ClientGroup]:
        """Return the company's client groups filtered and ordered."""
        groups = await self._groups(company_id)
        return filter_and_sort_groups(groups.values(), time_filter, search, sort)

    async def get_group(self, company_id: str, client_id: str) -> ClientGroup | None:
        """Return one client's group; None when the client has no bookings."""
        if client_id == UNKNOWN_CLIENT_ID:
            groups = await self._groups(company_id)
        else:
            groups = await self._groups(company_id, clientId=client_id)
        return groups.get(client_id)

    async def _client_bookings(self, company_id: str, client_id: str) -> list[StoredDocument]:
        group = await self.get_group(company_id, client_id)
        if group is None or not group.bookings:
            raise NoBookingForClientException(client_id)
        return group.bookings

    async def _owned_booking(self, caller: Caller, booking_id: str, action: str) -> StoredDocument:
        booking = await self.reservation_repo.get(booking_id)
        if booking is None:
            raise ResourceNotFoundException("reservation", booking_id)
        if booking.company_id != caller.company_id:
            logger.warning(
                "Blocked cross-company booking access",
                extra={"booking_id": booking_id, "action": action},
            )
            raise AuthorizationException("reservation", action)
        return booking

    async def _regroup(self, company_id: str, booking: StoredDocument) -> ClientGroup | None:
        return await self.get_group(company_id, booking.get("clientId") or UNKNOWN_CLIENT_ID)

    async def _require_group(self, company_id: str, client_id: str) -> ClientGroup:
        group = await self.get_group(company_id, client_id)
        if group is None:
            raise NoBookingForClientException(client_id)
        return group

    async def delete_booking(self, caller: Caller, booking_id: str) -> ClientGroup | None:
        """Delete a reservation; returns the client's remaining group or None when empty."""
        booking = await self._owned_booking(caller, booking_id, "delete")
        await self.reservation_repo.delete(booking_id)
        logger.info("Booking deleted", extra={"booking_id": booking_id})
        return await self._regroup(caller.company_id, booking)

    async def add_service(
        self, caller: Caller, client_id: str, data: dict[str, Any]
    ) -> ClientGroup:
        """Append a service to the client's most recently created booking."""
        booking = latest_booking(await self._client_bookings(caller.company_id, client_id))
        if booking is None:
            raise NoBookingForClientException(client_id)
        entry = build_service_entry(data, caller.company_id)
        await self.reservation_repo.update(booking.id, add_service_fields(booking.data, entry))
        logger.info(
            "Service added to booking",
            extra={"booking_id": booking.id, "service_id": entry["id"]},
        )
        return await self._require_group(caller.company_id, client_id)

    async def add_shopping(
        self,
        caller: Caller,
        client_id: str,
        *,
        store: str,
        items: str,
        price: float,
        date: str | None = None,
        has_receipt: bool = False,
        notes: str = "",
    ) -> ClientGroup:
        """Record a shopping expense as a service on the client's latest booking."""
        entry = build_shopping_entry(
            store,
            items,
            price,
            caller.company_id,
            date=date,
            has_receipt=has_receipt,
            notes=notes,
        )
        booking = latest_booking(await self._client_bookings(caller.company_id, client_id))
        if booking is None:
            raise NoBookingForClientException(client_id)
        await self.reservation_repo.update(booking.id, add_service_fields(booking.data, entry))
        return await self._require_group(caller.company_id, client_id)

    async def delete_service(
        self, caller: Caller, booking_id: str, service_ref: dict[str, Any]
    ) -> ClientGroup | None:
        """Remove an embedded service; total is reduced by its line price."""
        booking = await self._owned_booking(caller, booking_id, "modify")
        services = booking.get("services") or []
        index = find_service_index(services, service_ref)
        if index < 0:
            raise ServiceNotFoundInBookingException(
                booking_id, str(service_ref.get("id") or service_ref.get("name") or "")
            )
        await self.reservation_repo.update(booking_id, remove_service_fields(booking.data, index))
        return await self._regroup(caller.company_id, booking)

    async def record_payment(
        self,
        caller: Caller,
        client_id: str,
        amount: float,
        *,
        method: str | None = None,
        notes: str | None = None,
        receipt_number: str | None = None,
        booking_id: str | None = None,
    ) -> ClientGroup:
        """Record a client payment against one of their bookings.

        Without booking_id the payment goes to the earliest check-in that
        still has a balance, else to the client's first booking.
        """
        payment = build_payment(
            amount,
            caller.company_id,
            method=method,
            notes=notes,
            receipt_number=receipt_number,
        )
        bookings = await self._client_bookings(caller.company_id, client_id)
        booking = booking_for_payment(bookings, booking_id)
        if booking is None:
            raise ResourceNotFoundException("reservation", booking_id or client_id)
        await self.reservation_repo.update(booking.id, payment_fields(booking.data, payment))
        logger.info(
            "Payment recorded",
            extra={"booking_id": booking.id, "amount": amount, "method": payment["method"]},
        )
        return await self._require_group(caller.company_id, client_id)
