"""Client-grouped view over a company's reservations.

Reservations were written by several generations of the web client, so the
same concept lives under different field names (totalValue / totalAmount,
paidAmount / totalPaid) and dates arrive as timestamps, maps or strings.
Everything here is pure: it takes decoded documents and returns ClientGroup
DTOs, so it is tested without a store.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import UTC, date, datetime
from typing import Any

from concierge.application.dtos.booking import ClientGroup, DaysLeft
from concierge.application.dtos.document import StoredDocument
from concierge.domain.enums import BookingSort, PaymentStatus, TimeFilter
from concierge.shared.utils.datetime import parse_datetime, parse_day, today_utc, utc_now
from concierge.shared.utils.localization import localized_text
from concierge.shared.utils.numbers import first_amount

UNKNOWN_CLIENT_ID = "unknown"
UNKNOWN_CLIENT_NAME = "Unknown Client"

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_FAR_FUTURE = datetime(9999, 12, 31, tzinfo=UTC)


def booking_total(booking: Mapping[str, Any]) -> float:
    """Total value of a booking (totalValue, else totalAmount, else 0)."""
    return first_amount(booking.get("totalValue"), booking.get("totalAmount"))


def booking_paid(booking: Mapping[str, Any]) -> float:
    """Amount paid on a booking (paidAmount, else totalPaid, else 0)."""
    return first_amount(booking.get("paidAmount"), booking.get("totalPaid"))


def booking_due(booking: Mapping[str, Any]) -> float:
    return max(0.0, booking_total(booking) - booking_paid(booking))


def _later(current: datetime | None, candidate: datetime | None) -> datetime | None:
    if candidate is None:
        return current
    if current is None or candidate > current:
        return candidate
    return current


def group_bookings_by_client(
    bookings: Iterable[StoredDocument],
    clients: Mapping[str, StoredDocument],
    company_id: str,
) -> dict[str, ClientGroup]:
    """Group a company's bookings by clientId and roll up their payments.

    Bookings whose companyId differs from company_id are skipped, and so is
    client data from another company: the name then falls back to the
    booking's own clientName. Bookings without a clientId share the
    'unknown' group.
    """
    groups: dict[str, ClientGroup] = {}
    for booking in bookings:
        if booking.company_id != company_id:
            continue
        client_id = booking.get("clientId") or UNKNOWN_CLIENT_ID
        client = clients.get(client_id)
        if client is not None and client.company_id != company_id:
            client = None

        group = groups.get(client_id)
        if group is None:
            name = (
                localized_text(client.get("name")) if client is not None else ""
            ) or localized_text(booking.get("clientName")) or UNKNOWN_CLIENT_NAME
            group = ClientGroup(
                client_id=client_id,
                client_name=name,
                client_details=client.as_dict() if client is not None else None,
            )
            groups[client_id] = group

        total = booking_total(booking.data)
        paid = booking_paid(booking.data)

        for payment in booking.get("paymentHistory") or []:
            if isinstance(payment, dict):
                group.payment_history.append(
                    {**payment, "date": parse_datetime(payment.get("date")) or payment.get("date"), "bookingId": booking.id}
                )
        for service in booking.get("services") or []:
            if isinstance(service, dict):
                group.services.append(
                    {
                        **service,
                        "date": parse_datetime(service.get("date")) or service.get("date"),
                        "createdAt": parse_datetime(service.get("createdAt")) or utc_now(),
                        "bookingId": booking.id,
                    }
                )

        group.bookings.append(booking)
        group.total_value += total
        group.paid_amount += paid
        group.due_amount += max(0.0, total - paid)

        activity = parse_datetime(booking.get("createdAt")) or parse_datetime(booking.get("checkIn"))
        group.last_activity = _later(group.last_activity, activity)
        group.last_activity = _later(group.last_activity, parse_datetime(booking.get("lastPaymentDate")))

    for group in groups.values():
        group.payment_status = PaymentStatus.from_amounts(group.paid_amount, group.total_value)
        group.payment_history.sort(key=lambda p: _as_datetime(p.get("date")) or _EPOCH, reverse=True)
        group.services.sort(
            key=lambda s: _as_datetime(s.get("date")) or _as_datetime(s.get("createdAt")) or _EPOCH,
            reverse=True,
        )
    return groups


def _as_datetime(value: Any) -> datetime | None:
    return value if isinstance(value, datetime) else parse_datetime(value)


def _matches_time_filter(group: ClientGroup, time_filter: TimeFilter, today: date) -> bool:
    if time_filter == TimeFilter.ALL:
        return True
    for booking in group.bookings:
        check_in = parse_day(booking.get("checkIn"))
        check_out = parse_day(booking.get("checkOut"))
        if time_filter == TimeFilter.UPCOMING and check_in and check_in >= today:
            return True
        if (
            time_filter == TimeFilter.ACTIVE
            and check_in
            and check_out
            and check_in <= today <= check_out
        ):
            return True
        if time_filter == TimeFilter.PAST and check_out and check_out < today:
            return True
    return False


def _matches_search(group: ClientGroup, query: str) -> bool:
    needle = query.lower()
    if needle in group.client_name.lower():
        return True
    for booking in group.bookings:
        if needle in localized_text(booking.get("accommodationType")).lower():
            return True
        if needle in localized_text(booking.get("status")).lower():
            return True
    for service in group.services:
        if needle in localized_text(service.get("name")).lower():
            return True
        if needle in localized_text(service.get("type")).lower():
            return True
    return False


def _earliest_check_in(group: ClientGroup) -> datetime:
    dates = [d for d in (parse_datetime(b.get("checkIn")) for b in group.bookings) if d]
    return min(dates, default=_FAR_FUTURE)


def filter_and_sort_groups(
    groups: Iterable[ClientGroup],
    time_filter: TimeFilter = TimeFilter.ALL,
    search: str | None = None,
    sort: BookingSort = BookingSort.DATE,
    today: date | None = None,
) -> list[ClientGroup]:
    """Apply the time bucket and search text, then order the groups.

    A group is upcoming when any booking checks in today or later, active
    when any booking spans today, past when any booking checked out before
    today. Search is case-insensitive over the client name, booking
    accommodation type and status, and service names and types.
    """
    day = today or today_utc()
    query = (search or "").strip()
    selected = [
        g
        for g in groups
        if _matches_time_filter(g, time_filter, day) and (not query or _matches_search(g, query))
    ]
    if sort == BookingSort.DATE:
        selected.sort(key=_earliest_check_in)
    elif sort == BookingSort.CLIENT:
        selected.sort(key=lambda g: g.client_name.casefold())
    elif sort == BookingSort.LAST_ACTIVITY:
        selected.sort(key=lambda g: g.last_activity or _EPOCH, reverse=True)
    elif sort == BookingSort.TOTAL_VALUE:
        selected.sort(key=lambda g: g.total_value, reverse=True)
    return selected


def days_left(value: Any, today: date | None = None) -> DaysLeft | None:
    """Label how far a check-in day is from today; None when the date is unreadable."""
    day = parse_day(value)
    if day is None:
        return None
    diff = (day - (today or today_utc())).days
    if diff == 0:
        label = "today"
    elif diff == 1:
        label = "tomorrow"
    elif diff > 1:
        label = f"in {diff} days"
    elif diff == -1:
        label = "yesterday"
    else:
        label = f"{abs(diff)} days ago"
    return DaysLeft(days=diff, label=label)


def next_check_in(group: ClientGroup, today: date | None = None) -> DaysLeft | None:
    """Days until the group's nearest check-in that is today or later."""
    day = today or today_utc()
    upcoming = [
        d for d in (parse_day(b.get("checkIn")) for b in group.bookings) if d and d >= day
    ]
    if not upcoming:
        return None
    return days_left(min(upcoming), day)
