"""DTOs for collaborators and their commissions."""

from dataclasses import dataclass

from concierge.application.dtos.document import StoredDocument


@dataclass(frozen=True)
class CollaboratorStats:
    """A collaborator with totals over their confirmed reservations."""

    collaborator: StoredDocument
    commission_rate_percent: float
    booking_count: int
    total_commission: float


@dataclass(frozen=True)
class CommissionBreakdown:
    """Commission on one reservation: the rate-based default versus the effective amount."""

    booking_id: str
    total_amount: float
    default_commission: float
    default_rate_percent: float
    custom_amount: float | None
    effective_amount: float
    effective_rate_percent: float
    difference: float

    @property
    def is_custom(self) -> bool:
        return self.custom_amount is not None
