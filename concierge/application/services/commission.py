"""Collaborator commission on reservations.

The rate is stored on the collaborator as a fraction; a reservation may
override the amount with customCommissionAmount (null means use the rate).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from concierge.application.dtos.collaborator import CommissionBreakdown
from concierge.application.dtos.document import StoredDocument
from concierge.domain.value_objects import CommissionRate
from concierge.shared.utils.numbers import to_float


def rate_of(collaborator: Mapping[str, Any], default_percent: float = 15.0) -> CommissionRate:
    """Stored fraction, or default_percent when the collaborator has none."""
    raw = collaborator.get("commissionRate")
    if raw is None:
        return CommissionRate.from_percent(default_percent)
    value = to_float(raw)
    # Older documents stored the rate as a percent.
    if value > 1:
        return CommissionRate.from_percent(min(value, 100.0))
    return CommissionRate(fraction=max(value, 0.0))


def commission_breakdown(
    booking: StoredDocument, rate: CommissionRate
) -> CommissionBreakdown:
    total = to_float(booking.get("totalAmount"))
    default = rate.commission_for(total)
    raw_custom = booking.get("customCommissionAmount")
    custom = to_float(raw_custom) if raw_custom is not None else None
    effective = custom if custom is not None else default
    return CommissionBreakdown(
        booking_id=booking.id,
        total_amount=total,
        default_commission=default,
        default_rate_percent=rate.percent,
        custom_amount=custom,
        effective_amount=effective,
        effective_rate_percent=(effective / total * 100) if total > 0 else 0.0,
        difference=effective - default,
    )


def total_commission(bookings: Iterable[StoredDocument], rate: CommissionRate) -> float:
    """Sum of effective commissions (custom amount where set)."""
    return sum(commission_breakdown(b, rate).effective_amount for b in bookings)
