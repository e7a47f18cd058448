"""Pure edits to a reservation's embedded services and payments.

Each function takes the stored field map of one reservation and returns the
fields to write back. paidAmount is never touched by service edits, so an
added service shows up as a larger balance, not as a payment change.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import UTC, datetime
from typing import Any

from concierge.application.dtos.document import StoredDocument
from concierge.application.services.booking_aggregator import (
    booking_due,
    booking_paid,
    booking_total,
)
from concierge.domain.enums import PaymentStatus
from concierge.domain.exceptions import ValidationException
from concierge.shared.utils.datetime import parse_datetime, utc_now
from concierge.shared.utils.generators import generate_embedded_id
from concierge.shared.utils.numbers import to_float, to_int

# Services created within this window of the reference are the same entry.
_CREATED_AT_TOLERANCE_SECONDS = 1.0
_EARLIEST = datetime.min.replace(tzinfo=UTC)


def latest_booking(bookings: Iterable[StoredDocument]) -> StoredDocument | None:
    """Most recently created booking (missing createdAt sorts oldest)."""
    return max(
        bookings,
        key=lambda b: parse_datetime(b.get("createdAt")) or _EARLIEST,
        default=None,
    )


def booking_for_payment(
    bookings: Sequence[StoredDocument], booking_id: str | None = None
) -> StoredDocument | None:
    """Pick the booking a client-level payment is applied to.

    An explicit booking_id wins. Otherwise the earliest check-in with an
    outstanding balance, else the first booking.
    """
    if booking_id:
        return next((b for b in bookings if b.id == booking_id), None)
    outstanding = [b for b in bookings if booking_due(b.data) > 0]
    if outstanding:
        return min(
            outstanding,
            key=lambda b: parse_datetime(b.get("checkIn")) or _EARLIEST,
        )
    return bookings[0] if bookings else None


def service_line_total(service: Mapping[str, Any]) -> float:
    return to_float(service.get("price")) * to_int(service.get("quantity"), default=1)


def find_service_index(services: Sequence[Any], ref: Mapping[str, Any]) -> int:
    """Locate an embedded service by id, else by name plus creation time or line values.

    Returns -1 when nothing matches.
    """
    ref_id = ref.get("id")
    if ref_id:
        for index, service in enumerate(services):
            if isinstance(service, dict) and service.get("id") == ref_id:
                return index
    ref_created = parse_datetime(ref.get("createdAt"))
    for index, service in enumerate(services):
        if not isinstance(service, dict) or service.get("name") != ref.get("name"):
            continue
        created = parse_datetime(service.get("createdAt"))
        if (
            created
            and ref_created
            and abs((created - ref_created).total_seconds()) < _CREATED_AT_TOLERANCE_SECONDS
        ):
            return index
        if (
            service.get("type") == ref.get("type")
            and service.get("price") == ref.get("price")
            and service.get("quantity") == ref.get("quantity")
        ):
            return index
    return -1


def build_service_entry(
    data: Mapping[str, Any], company_id: str, now: datetime | None = None
) -> dict[str, Any]:
    """Embedded service for a booking: generated id, createdAt, line total."""
    created = now or utc_now()
    price = to_float(data.get("price"))
    quantity = to_int(data.get("quantity"), default=1)
    if quantity <= 0:
        raise ValidationException("Quantity must be at least 1", field="quantity")
    service_type = data.get("type") or data.get("category") or "custom"
    entry = {k: v for k, v in data.items() if v is not None}
    entry.update(
        {
            "type": service_type,
            "id": generate_embedded_id(service_type),
            "createdAt": created,
            "companyId": company_id,
            "status": data.get("status") or "confirmed",
            "price": price,
            "quantity": quantity,
            "totalValue": price * quantity,
        }
    )
    return entry


def build_shopping_entry(
    store: str,
    items: str,
    price: float,
    company_id: str,
    *,
    date: str | None = None,
    has_receipt: bool = False,
    notes: str = "",
    now: datetime | None = None,
) -> dict[str, Any]:
    """Embedded shopping expense: one 'item' priced at the receipt total."""
    if not store.strip():
        raise ValidationException("Please enter a store name", field="store")
    if not items.strip():
        raise ValidationException("Please enter items purchased", field="items")
    if price <= 0:
        raise ValidationException("Please enter a valid amount", field="price")
    created = now or utc_now()
    return {
        "type": "shopping",
        "id": generate_embedded_id("shopping"),
        "name": f"Shopping at {store.strip()}",
        "description": items.strip(),
        "date": date or created.date().isoformat(),
        "price": price,
        "quantity": 1,
        "unit": "item",
        "store": store.strip(),
        "hasReceipt": has_receipt,
        "notes": notes or "",
        "totalValue": price,
        "status": "confirmed",
        "createdAt": created,
        "companyId": company_id,
    }


def add_service_fields(booking: Mapping[str, Any], entry: Mapping[str, Any]) -> dict[str, Any]:
    """Fields to write after appending entry to the booking's services."""
    services = list(booking.get("services") or [])
    services.append(dict(entry))
    return {
        "services": services,
        "totalValue": booking_total(booking) + to_float(entry.get("totalValue")),
        "updatedAt": utc_now(),
    }


def remove_service_fields(booking: Mapping[str, Any], index: int) -> dict[str, Any]:
    """Fields to write after removing services[index]; total floors at zero."""
    services = list(booking.get("services") or [])
    removed = services.pop(index)
    return {
        "services": services,
        "totalValue": max(0.0, booking_total(booking) - service_line_total(removed)),
        "updatedAt": utc_now(),
    }


def build_payment(
    amount: float,
    company_id: str,
    *,
    method: str | None = None,
    notes: str | None = None,
    receipt_number: str | None = None,
    now: datetime | None = None,
) -> dict[str, Any]:
    if amount <= 0:
        raise ValidationException("Payment amount must be greater than zero", field="amount")
    return {
        "amount": amount,
        "method": method or "cash",
        "notes": notes or "",
        "receiptNumber": receipt_number or "",
        "date": now or utc_now(),
        "companyId": company_id,
    }


def payment_fields(booking: Mapping[str, Any], payment: Mapping[str, Any]) -> dict[str, Any]:
    """Fields to write after recording payment against booking.

    The booking counts as paid once the new paid total reaches its total.
    """
    new_paid = booking_paid(booking) + to_float(payment.get("amount"))
    total = booking_total(booking)
    if new_paid >= total:
        status = PaymentStatus.PAID
    elif new_paid > 0:
        status = PaymentStatus.PARTIALLY_PAID
    else:
        status = PaymentStatus.NOT_PAID
    history = list(booking.get("paymentHistory") or [])
    history.append(dict(payment))
    return {
        "paidAmount": new_paid,
        "paymentStatus": status.value,
        "lastPaymentDate": payment.get("date") or utc_now(),
        "lastPaymentMethod": payment.get("method"),
        "paymentHistory": history,
    }
