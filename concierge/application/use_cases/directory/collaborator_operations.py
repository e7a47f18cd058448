"""Collaborators: partners credited on reservations and paid a commission."""

from __future__ import annotations

from typing import Any

from concierge.application.dtos.caller import Caller
from concierge.application.dtos.collaborator import CollaboratorStats, CommissionBreakdown
from concierge.application.dtos.document import StoredDocument
from concierge.application.interfaces.repositories import (
    IDocumentRepository,
    IReservationRepository,
)
from concierge.application.services.commission import (
    commission_breakdown,
    rate_of,
    total_commission,
)
from concierge.application.use_cases.directory.directory_operations import DirectoryService
from concierge.domain.exceptions import ResourceNotFoundException, ValidationException
from concierge.domain.value_objects import CommissionRate
from concierge.shared.telemetry.logging import get_logger
from concierge.shared.utils.datetime import utc_now
from concierge.shared.utils.numbers import to_float

logger = get_logger(__name__)


class CollaboratorService(DirectoryService):
    """Collaborator CRUD plus commission stats over their confirmed reservations.

    commissionRate is given in percent by callers and stored as a fraction.
    """

    def __init__(
        self,
        collaborator_repo: IDocumentRepository,
        reservation_repo: IReservationRepository,
        default_rate_percent: float = 15.0,
    ) -> None:
        super().__init__(collaborator_repo, "collaborator", search_fields=("name", "email", "phone"))
        self.reservation_repo = reservation_repo
        self.default_rate_percent = default_rate_percent

    def _with_rate(self, data: dict[str, Any], default: float | None) -> dict[str, Any]:
        fields = dict(data)
        percent = fields.pop("commissionRatePercent", None)
        if percent is None:
            percent = default
        if percent is not None:
            try:
                fields["commissionRate"] = CommissionRate.from_percent(to_float(percent)).fraction
            except ValueError as e:
                raise ValidationException(str(e), field="commissionRate") from e
        return fields

    async def create(self, caller: Caller, data: dict[str, Any]) -> StoredDocument:
        if not str(data.get("name") or "").strip():
            raise ValidationException("Collaborator name is required", field="name")
        return await super().create(caller, self._with_rate(data, self.default_rate_percent))

    async def update(self, caller: Caller, document_id: str, data: dict[str, Any]) -> StoredDocument:
        return await super().update(caller, document_id, self._with_rate(data, None))

    async def _rate(self, company_id: str, collaborator_id: str) -> tuple[StoredDocument, CommissionRate]:
        collaborator = await self.get(company_id, collaborator_id)
        return collaborator, rate_of(collaborator.data, self.default_rate_percent)

    async def list_with_stats(
        self, company_id: str, search: str | None = None
    ) -> list[CollaboratorStats]:
        """Collaborators with booking count and earned commission."""
        stats = []
        for collaborator in await self.list_documents(company_id, search):
            rate = rate_of(collaborator.data, self.default_rate_percent)
            bookings = await self.reservation_repo.list_confirmed_for_collaborator(
                company_id, collaborator.id
            )
            stats.append(
                CollaboratorStats(
                    collaborator=collaborator,
                    commission_rate_percent=rate.percent,
                    booking_count=len(bookings),
                    total_commission=total_commission(bookings, rate),
                )
            )
        return stats

    async def bookings_with_commission(
        self, company_id: str, collaborator_id: str
    ) -> list[CommissionBreakdown]:
        _, rate = await self._rate(company_id, collaborator_id)
        bookings = await self.reservation_repo.list_confirmed_for_collaborator(
            company_id, collaborator_id
        )
        return [commission_breakdown(b, rate) for b in bookings]

    async def set_booking_commission(
        self, caller: Caller, booking_id: str, amount: float | None
    ) -> CommissionBreakdown:
        """Override the commission on one reservation; None goes back to the rate."""
        if amount is not None and amount < 0:
            raise ValidationException("Commission amount must be zero or more", field="amount")
        booking = await self.reservation_repo.get_for_company(booking_id, caller.company_id)
        if booking is None:
            raise ResourceNotFoundException("reservation", booking_id)
        collaborator_id = booking.get("collaboratorId")
        if not collaborator_id:
            raise ValidationException("Reservation has no collaborator", field="collaboratorId")
        _, rate = await self._rate(caller.company_id, collaborator_id)
        fields = {"customCommissionAmount": amount, "updatedAt": utc_now()}
        await self.reservation_repo.update(booking_id, fields)
        logger.info(
            "Booking commission updated",
            extra={"booking_id": booking_id, "custom": amount is not None},
        )
        return commission_breakdown(
            StoredDocument(id=booking_id, data={**booking.data, **fields}), rate
        )
