"""Turning an accepted offer into a reservation document."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date, timedelta
from typing import Any

from concierge.application.services.offer_pricing import item_price
from concierge.domain.enums import PaymentStatus
from concierge.shared.utils.datetime import today_utc
from concierge.shared.utils.localization import localized_text
from concierge.shared.utils.numbers import to_float

DEFAULT_STAY_DAYS = 7
VARIOUS_SERVICES = "Various Services"
_ACCOMMODATION_WORDS = ("villa", "room", "apartment")


def default_stay(today: date | None = None) -> tuple[str, str]:
    """(checkIn, checkOut) days used when the caller gives none: today and a week later."""
    start = today or today_utc()
    return start.isoformat(), (start + timedelta(days=DEFAULT_STAY_DAYS)).isoformat()


def is_accommodation(item: Mapping[str, Any]) -> bool:
    if (item.get("category") or "other") == "villas":
        return True
    name = item.get("name")
    return isinstance(name, str) and any(word in name.lower() for word in _ACCOMMODATION_WORDS)


def accommodation_type(items: Iterable[Mapping[str, Any]], language: str = "en") -> str:
    """Name of the first accommodation item, or 'Various Services'."""
    for item in items:
        if is_accommodation(item):
            return localized_text(item.get("name"), language) or VARIOUS_SERVICES
    return VARIOUS_SERVICES


def reservation_services(
    offer_items: Iterable[Mapping[str, Any]],
    check_in: str,
    check_out: str,
    overrides: Mapping[int, Mapping[str, Any]] | None = None,
) -> list[dict[str, Any]]:
    """Included offer items as reservation services with payment tracking.

    overrides maps an item's index in the offer to {included, amountPaid,
    startDate, endDate, paymentStatus}; items default to included and unpaid
    for the whole stay.
    """
    services: list[dict[str, Any]] = []
    for index, item in enumerate(offer_items):
        override = (overrides or {}).get(index, {})
        if override.get("included", True) is False:
            continue
        services.append(
            {
                **item,
                "included": True,
                "startDate": override.get("startDate") or check_in,
                "endDate": override.get("endDate") or check_out,
                "paymentStatus": override.get("paymentStatus") or "unpaid",
                "amountPaid": to_float(override.get("amountPaid")),
            }
        )
    return services


def conversion_status(total_paid: float, total_amount: float) -> PaymentStatus:
    """Payment status of a freshly converted reservation (paid once nothing is owed)."""
    if total_paid >= total_amount:
        return PaymentStatus.PAID
    if total_paid > 0:
        return PaymentStatus.PARTIALLY_PAID
    return PaymentStatus.NOT_PAID


def build_reservation_from_offer(
    offer_id: str,
    offer: Mapping[str, Any],
    client_id: str,
    *,
    check_in: str,
    check_out: str,
    adults: int = 2,
    children: int = 0,
    notes: str = "",
    overrides: Mapping[int, Mapping[str, Any]] | None = None,
    language: str = "en",
) -> dict[str, Any]:
    """Reservation fields for a converted offer (without companyId/createdAt/createdBy)."""
    services = reservation_services(offer.get("items") or [], check_in, check_out, overrides)
    total_paid = sum(s["amountPaid"] for s in services)
    total_amount = sum(item_price(s) for s in services)
    return {
        "clientId": client_id,
        "offerId": offer_id,
        "checkIn": check_in,
        "checkOut": check_out,
        "adults": adults or 2,
        "children": children or 0,
        "accommodationType": accommodation_type(services, language),
        "notes": notes or "",
        "status": "confirmed",
        "baseAmount": total_amount,
        "totalAmount": total_amount,
        "totalPaid": total_paid,
        "paymentStatus": conversion_status(total_paid, total_amount).value,
        "services": services,
    }


def upcoming_entry(reservation_id: str, offer_id: str, reservation: Mapping[str, Any]) -> dict[str, Any]:
    """Summary appended to the client's upcomingReservations list."""
    return {
        "id": reservation_id,
        "checkIn": reservation.get("checkIn"),
        "checkOut": reservation.get("checkOut"),
        "accommodationType": reservation.get("accommodationType"),
        "offerReference": offer_id[-5:],
        "totalAmount": reservation.get("totalAmount"),
        "paymentStatus": reservation.get("paymentStatus"),
        "totalPaid": reservation.get("totalPaid"),
    }
