"""Offer pricing and the follow-up overview.

Pure functions over offer field maps: item and offer totals with
percentage/fixed discounts, and the "what needs doing" status shown on the
offers overview.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from concierge.application.dtos.document import StoredDocument
from concierge.application.dtos.offer import OfferAction, OfferOverviewItem, OfferStats
from concierge.domain.enums import ActionPriority, OfferStatus
from concierge.domain.value_objects import Discount
from concierge.shared.utils.datetime import parse_datetime, utc_now
from concierge.shared.utils.numbers import to_float, to_int

DEFAULT_FOLLOW_UP_DAYS = 7
_SECONDS_PER_DAY = 86400


def item_base(item: Mapping[str, Any]) -> float:
    """price * quantity before any discount (quantity defaults to 1)."""
    return to_float(item.get("price")) * to_int(item.get("quantity"), default=1)


def item_price(item: Mapping[str, Any]) -> float:
    """Line price after the item's own discount, floored at zero."""
    discount = Discount.from_fields(item.get("discountType"), to_float(item.get("discountValue")))
    return discount.apply(item_base(item))


def offer_subtotal(items: Iterable[Mapping[str, Any]]) -> float:
    """Sum of price * quantity over all items (item discounts not applied)."""
    return sum(item_base(item) for item in items)


def offer_total(
    items: Iterable[Mapping[str, Any]],
    discount_type: str | None = None,
    discount_value: Any = None,
) -> tuple[float, float]:
    """Return (subtotal, total) with the offer-level discount applied to the subtotal."""
    subtotal = offer_subtotal(items)
    discount = Discount.from_fields(discount_type, to_float(discount_value))
    return subtotal, discount.apply(subtotal)


def action_status(
    offer: Mapping[str, Any],
    now: datetime | None = None,
    follow_up_days: int = DEFAULT_FOLLOW_UP_DAYS,
) -> OfferAction:
    """What the team should do next with an offer, and how urgently.

    Drafts must be completed and sent; sent offers older than follow_up_days
    need a follow-up; expired offers need updating or closing. Anything else
    needs no action.
    """
    created = parse_datetime(offer.get("createdAt"))
    current = now or utc_now()
    days_ago = (
        math.floor(abs((current - created).total_seconds()) / _SECONDS_PER_DAY)
        if created
        else 0
    )
    status = offer.get("status")
    if status == OfferStatus.DRAFT.value:
        return OfferAction(True, "Complete and send offer", ActionPriority.HIGH, days_ago)
    if status == OfferStatus.SENT.value:
        if days_ago > follow_up_days:
            return OfferAction(True, "Follow up recommended", ActionPriority.MEDIUM, days_ago)
        return OfferAction(True, "Awaiting client response", ActionPriority.LOW, days_ago)
    if status == OfferStatus.EXPIRED.value:
        return OfferAction(True, "Needs update or closure", ActionPriority.MEDIUM, days_ago)
    return OfferAction(False, None, ActionPriority.NONE, days_ago)


def offer_stats(offers: Iterable[StoredDocument]) -> OfferStats:
    total = pending = booked = 0
    for offer in offers:
        total += 1
        status = offer.get("status")
        if status in OfferStatus.pending():
            pending += 1
        elif status == OfferStatus.BOOKED.value:
            booked += 1
    return OfferStats(total=total, pending=pending, booked=booked)


def build_overview(
    offers: Iterable[StoredDocument],
    now: datetime | None = None,
    follow_up_days: int = DEFAULT_FOLLOW_UP_DAYS,
) -> list[OfferOverviewItem]:
    """Offers with their action status, most urgent first, newest first within a priority."""
    current = now or utc_now()
    rows = [
        OfferOverviewItem(offer=offer, action=action_status(offer.data, current, follow_up_days))
        for offer in offers
    ]
    rows.sort(
        key=lambda row: (
            row.action.priority.rank,
            (parse_datetime(row.offer.get("createdAt")) or datetime.min.replace(tzinfo=current.tzinfo)),
        ),
        reverse=True,
    )
    return rows
