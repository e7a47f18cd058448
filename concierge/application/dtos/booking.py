"""DTOs for the client-grouped bookings view."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from concierge.application.dtos.document import StoredDocument
from concierge.domain.enums import PaymentStatus


@dataclass
class ClientGroup:
    """All bookings of one client with their payment roll-up.

    total_value / paid_amount sum the per-booking totals; due_amount sums the
    per-booking outstanding balances (overpayment on one booking does not
    offset another). payment_history and services are flattened across
    bookings and tagged with bookingId.
    """

    client_id: str
    client_name: str
    client_details: dict[str, Any] | None
    bookings: list[StoredDocument] = field(default_factory=list)
    total_value: float = 0.0
    paid_amount: float = 0.0
    due_amount: float = 0.0
    payment_status: PaymentStatus = PaymentStatus.NOT_PAID
    last_activity: datetime | None = None
    payment_history: list[dict[str, Any]] = field(default_factory=list)
    services: list[dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class DaysLeft:
    """Relative day label for a check-in date ("today", "in 3 days", "2 days ago")."""

    days: int
    label: str
