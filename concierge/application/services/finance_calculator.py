"""Finance ledger: one record per booking service, plus provider payments and expenses.

Records are derived from reservations by plan_sync() and pruned when their
booking or client disappears. Everything in this module is pure; the
FinanceService use case does the reads and writes.
"""

from __future__ import annotations

import csv
import io
from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence
from datetime import date
from typing import Any

from concierge.application.dtos.caller import Caller
from concierge.application.dtos.document import StoredDocument
from concierge.application.dtos.finance import (
    ExportRow,
    FinanceFilters,
    FinanceRecordView,
    FinanceSummary,
    LedgerEntry,
    MonthlySnapshot,
    ServiceBreakdownRow,
    SyncPlan,
)
from concierge.domain.enums import FinanceRecordStatus, ReservationStatus
from concierge.shared.utils.datetime import iso_day, month_bounds, parse_day, today_utc, utc_now
from concierge.shared.utils.localization import DEFAULT_LANGUAGE, localized_text
from concierge.shared.utils.numbers import first_number, to_float

EXPORT_COLUMNS = ("Date", "Type", "Category", "Description", "AmountIn", "AmountOut", "Status", "Source")
UNKNOWN_SERVICE = "Unknown"


def _coalesce(*values: Any) -> Any:
    """First value that is not None (JavaScript '??')."""
    for value in values:
        if value is not None:
            return value
    return None


def client_display_name(
    client: StoredDocument | Mapping[str, Any] | None,
    language: str = DEFAULT_LANGUAGE,
    fallback: str = "Client",
) -> str:
    """Name of a client: name (plain or localized), fullName, companyName, first + last."""
    if client is None:
        return fallback
    name = client.get("name")
    if isinstance(name, str) and name:
        return name
    full = (
        (localized_text(name, language) if isinstance(name, dict) else "")
        or client.get("fullName")
        or client.get("companyName")
    )
    if full:
        return full
    composed = " ".join(p for p in (client.get("firstName"), client.get("lastName")) if p)
    return composed or fallback


# Reservations as seen by finance


def finance_reservations(reservations: Iterable[StoredDocument]) -> list[StoredDocument]:
    """Reservations that can produce revenue (cancelled and declined excluded)."""
    excluded = ReservationStatus.excluded_from_finance()
    return [r for r in reservations if r.get("status") not in excluded]


def reservation_income(booking: Mapping[str, Any]) -> float:
    """What the client brought in: paidAmount, else totalValue, else totalAmount."""
    return to_float(
        _coalesce(booking.get("paidAmount"), booking.get("totalValue"), booking.get("totalAmount"))
    )


def reservation_service_items(booking: Mapping[str, Any]) -> list[Any]:
    items = _coalesce(
        booking.get("services"), booking.get("selectedServices"), booking.get("bookingServices")
    )
    return list(items) if isinstance(items, list) else []


def service_key(item: Mapping[str, Any] | None, index: int) -> str:
    """Stable key of a booking service inside its booking."""
    if item:
        for key in ("id", "serviceId", "type", "name", "title"):
            value = item.get(key)
            if value:
                return localized_text(value) or f"service-{index}"
    return f"service-{index}"


def service_label(
    item: Mapping[str, Any] | None,
    booking: Mapping[str, Any],
    language: str = DEFAULT_LANGUAGE,
) -> str:
    candidates: list[Any] = []
    if item:
        candidates.extend(item.get(k) for k in ("name", "title", "type", "serviceType", "service"))
    candidates.extend((booking.get("service"), booking.get("accommodationType")))
    value = next((c for c in candidates if c), None)
    return localized_text(value, language, fallback=UNKNOWN_SERVICE)


def service_amount(item: Mapping[str, Any] | None, booking: Mapping[str, Any]) -> float:
    """First numeric price-like field of the service, else the booking's income, else 0."""
    values: list[Any] = []
    if item:
        values.extend(
            item.get(k) for k in ("price", "total", "amount", "clientPrice", "clientAmount", "rate")
        )
    values.append(reservation_income(booking))
    amount = first_number(*values)
    return amount if amount is not None else 0.0


def _booking_description(booking: Mapping[str, Any], language: str) -> str:
    label = localized_text(
        booking.get("accommodationType") or booking.get("serviceType") or "Booking", language
    )
    start = iso_day(booking.get("checkIn") or booking.get("startDate")) or "N/A"
    end = iso_day(booking.get("checkOut") or booking.get("endDate")) or "N/A"
    return f"{label} - {start} to {end}"


def record_match_key(booking_id: str | None, key: str | None) -> str:
    return f"{booking_id or 'none'}::{key or UNKNOWN_SERVICE}"


# Reading stored records


def normalize_record(
    doc: StoredDocument,
    clients: Mapping[str, StoredDocument] | None = None,
    language: str = DEFAULT_LANGUAGE,
) -> FinanceRecordView:
    """Resolve legacy field names of a stored finance record."""
    data = doc.data
    client_amount = to_float(
        _coalesce(data.get("clientAmount"), data.get("clientIncome"), data.get("amount"))
    )
    raw_cost = data.get("providerCost")
    provider_cost = to_float(raw_cost) if raw_cost is not None else None
    status = data.get("status") or (
        FinanceRecordStatus.SETTLED.value if provider_cost is not None else FinanceRecordStatus.PENDING.value
    )
    client_id = data.get("clientId")
    client = (clients or {}).get(client_id) if client_id else None
    profit = data.get("profit")
    return FinanceRecordView(
        id=doc.id,
        booking_id=data.get("bookingId"),
        client_id=client_id,
        client_name=localized_text(data.get("clientName"), language) or client_display_name(client, language, ""),
        service_key=localized_text(
            data.get("serviceKey") or data.get("bookingServiceKey") or data.get("service") or data.get("category")
        )
        or None,
        service=localized_text(data.get("service") or data.get("category"), language, UNKNOWN_SERVICE),
        client_amount=client_amount,
        provider_cost=provider_cost,
        profit=to_float(profit) if profit is not None else client_amount - (provider_cost or 0.0),
        status=status,
        date=iso_day(data.get("date")),
        description=data.get("description") or "",
        created_by=data.get("createdBy"),
        created_by_email=data.get("createdByEmail"),
    )


def normalize_ledger_entry(
    doc: StoredDocument, default_category: str = UNKNOWN_SERVICE, language: str = DEFAULT_LANGUAGE
) -> LedgerEntry:
    """Category payment or expense with defaults applied."""
    return LedgerEntry(
        id=doc.id,
        category=localized_text(doc.get("category"), language) or default_category,
        amount=to_float(doc.get("amount")),
        date=iso_day(doc.get("date")),
        description=doc.get("description") or "",
        status=doc.get("status") or "",
        created_by=doc.get("createdBy"),
        created_by_email=doc.get("createdByEmail"),
    )


def is_visible_to(created_by: str | None, created_by_email: str | None, caller: Caller) -> bool:
    """Admins see everything; otherwise only own entries plus legacy ones without owner."""
    if caller.is_admin:
        return True
    if created_by or created_by_email:
        return bool(
            (created_by and caller.user_id and created_by == caller.user_id)
            or (created_by_email and caller.email and created_by_email == caller.email)
        )
    return True


# Sync and prune


def plan_sync(
    reservations: Sequence[StoredDocument],
    existing: Sequence[FinanceRecordView],
    clients: Mapping[str, StoredDocument],
    caller: Caller,
    language: str = DEFAULT_LANGUAGE,
    today: date | None = None,
) -> SyncPlan:
    """Work out which finance records to create or refresh for the given reservations.

    Each booking service gets one record keyed bookingId::serviceKey (a
    booking without services gets one record for the booking itself).
    Existing records are refreshed when the client amount or client name
    changed; their provider cost and status are left alone. Bookings whose
    client was deleted are skipped.

    Services sharing a key within one booking (two chefs without ids) each
    claim their own record, an exact amount match first.
    """
    plan = SyncPlan()
    by_key: dict[str, list[FinanceRecordView]] = defaultdict(list)
    for record in existing:
        by_key[record_match_key(record.booking_id, record.service_key or record.service)].append(record)
    day = (today or today_utc()).isoformat()
    for booking in reservations:
        client_id = booking.get("clientId")
        if client_id and client_id not in clients:
            continue
        items: list[Any] = reservation_service_items(booking.data) or [None]
        client_name = localized_text(booking.get("clientName"), language) or client_display_name(
            clients.get(client_id) if client_id else None, language, ""
        )
        entries = []
        for index, raw_item in enumerate(items):
            item = raw_item if isinstance(raw_item, dict) else None
            key = service_key(item, index)
            entries.append((item, key, service_amount(item, booking.data)))
        matched = _claim_records(booking.id, entries, by_key)
        for (item, key, amount), current in zip(entries, matched):
            label = service_label(item, booking.data, language)
            if current is not None:
                if current.client_amount != amount or (client_name and current.client_name != client_name):
                    fields: dict[str, Any] = {
                        "clientAmount": amount,
                        "service": label,
                        "updatedAt": utc_now(),
                    }
                    if client_name:
                        fields["clientName"] = client_name
                    plan.updates.append((current.id, fields))
                continue
            provider_cost = item.get("providerCost") if item else None
            plan.creates.append(
                {
                    "bookingId": booking.id,
                    "clientId": client_id,
                    "clientName": client_name,
                    "bookingServiceKey": key,
                    "serviceKey": key,
                    "service": label,
                    "clientAmount": amount,
                    "providerCost": provider_cost,
                    "status": (
                        FinanceRecordStatus.SETTLED.value
                        if provider_cost
                        else FinanceRecordStatus.PENDING.value
                    ),
                    "date": iso_day(booking.get("createdAt")) or day,
                    "description": (item.get("description") if item else None)
                    or booking.get("description")
                    or _booking_description(booking.data, language),
                    "createdBy": caller.user_id,
                    "createdByEmail": caller.email,
                    "createdAt": utc_now(),
                }
            )
    return plan


def _claim_records(
    booking_id: str,
    entries: Sequence[tuple[dict[str, Any] | None, str, float]],
    by_key: Mapping[str, list[FinanceRecordView]],
) -> list[FinanceRecordView | None]:
    """Pair each service entry with at most one existing record of the same key."""
    matched: list[FinanceRecordView | None] = [None] * len(entries)
    for exact in (True, False):
        for i, (_, key, amount) in enumerate(entries):
            if matched[i] is not None:
                continue
            candidates = by_key.get(record_match_key(booking_id, key))
            if not candidates:
                continue
            for record in candidates:
                if not exact or record.client_amount == amount:
                    candidates.remove(record)
                    matched[i] = record
                    break
    return matched


def find_orphan_records(
    records: Iterable[FinanceRecordView],
    reservations: Iterable[StoredDocument],
    client_ids: Iterable[str],
) -> list[str]:
    """Ids of records whose booking, client, or booking's client is gone.

    With no reservations and no clients at all every record is an orphan.
    """
    booking_map = {r.id: r for r in reservations}
    known_clients = set(client_ids)
    wipe_all = not booking_map and not known_clients
    orphans: list[str] = []
    for record in records:
        if wipe_all:
            orphans.append(record.id)
            continue
        if record.booking_id and record.booking_id not in booking_map:
            orphans.append(record.id)
            continue
        if record.client_id and record.client_id not in known_clients:
            orphans.append(record.id)
            continue
        booking = booking_map.get(record.booking_id) if record.booking_id else None
        booking_client = booking.get("clientId") if booking else None
        if booking_client and booking_client not in known_clients:
            orphans.append(record.id)
    return orphans


# Reporting


def _in_range(day: str, filters: FinanceFilters) -> bool:
    parsed = parse_day(day)
    start = parse_day(filters.start_date)
    end = parse_day(filters.end_date)
    if start and (parsed is None or parsed < start):
        return False
    if end and (parsed is None or parsed > end):
        return False
    return True


def filter_records(
    records: Iterable[FinanceRecordView], filters: FinanceFilters
) -> list[FinanceRecordView]:
    needle = (filters.client or "").lower()
    return [
        r
        for r in records
        if (not filters.service or filters.service == "all" or r.service == filters.service)
        and _in_range(r.date, filters)
        and (not needle or needle in r.client_name.lower())
    ]


def filter_entries(entries: Iterable[LedgerEntry], filters: FinanceFilters) -> list[LedgerEntry]:
    return [e for e in entries if _in_range(e.date, filters)]


def service_breakdown(records: Iterable[FinanceRecordView]) -> list[ServiceBreakdownRow]:
    """Revenue, cost and margin per service label, highest profit first."""
    totals: dict[str, list[float]] = {}
    for record in records:
        row = totals.setdefault(record.service or UNKNOWN_SERVICE, [0.0, 0.0, 0])
        row[0] += record.client_amount
        row[1] += record.provider_cost or 0.0
        row[2] += 1
    rows = []
    for service, (revenue, cost, count) in totals.items():
        profit = revenue - cost
        rows.append(
            ServiceBreakdownRow(
                service=service,
                revenue=revenue,
                cost=cost,
                count=int(count),
                profit=profit,
                margin=(profit / revenue * 100) if revenue > 0 else 0.0,
            )
        )
    rows.sort(key=lambda r: r.profit, reverse=True)
    return rows


def summarize(
    records: Sequence[FinanceRecordView],
    category_payments: Iterable[LedgerEntry],
    expenses: Iterable[LedgerEntry],
) -> FinanceSummary:
    revenue = sum(r.client_amount for r in records)
    costs = sum(r.provider_cost or 0.0 for r in records) + sum(p.amount for p in category_payments)
    expense_total = sum(e.amount for e in expenses)
    gross = revenue - costs
    return FinanceSummary(
        client_revenue=revenue,
        provider_costs=costs,
        gross_profit=gross,
        expenses=expense_total,
        net_profit=gross - expense_total,
        pending_count=sum(
            1
            for r in records
            if r.status == FinanceRecordStatus.PENDING.value or r.provider_cost is None
        ),
        record_count=len(records),
    )


def monthly_snapshots(
    records: Iterable[FinanceRecordView], expenses: Iterable[LedgerEntry]
) -> list[MonthlySnapshot]:
    """Per-month income and provider payments, with that month's expenses, oldest first.

    Only months that have finance records appear.
    """
    months: dict[str, list[float]] = {}
    for record in records:
        if not record.date:
            continue
        row = months.setdefault(record.date[:7], [0.0, 0.0])
        row[0] += record.client_amount
        row[1] += record.provider_cost or 0.0
    expense_by_month: dict[str, float] = {}
    for expense in expenses:
        if expense.date:
            expense_by_month[expense.date[:7]] = expense_by_month.get(expense.date[:7], 0.0) + expense.amount
    snapshots = []
    for month in sorted(months):
        income, payments = months[month]
        revenue = income - payments
        spent = expense_by_month.get(month, 0.0)
        snapshots.append(
            MonthlySnapshot(
                month=month,
                income=income,
                payments=payments,
                revenue=revenue,
                expenses=spent,
                profit=revenue - spent,
            )
        )
    return snapshots


def export_rows(
    month: str,
    records: Iterable[FinanceRecordView],
    category_payments: Iterable[LedgerEntry],
    expenses: Iterable[LedgerEntry],
) -> list[ExportRow]:
    """All ledger movements dated inside month ('YYYY-MM'), sorted by date."""
    bounds = month_bounds(month)
    if bounds is None:
        return []
    start, end = bounds

    def in_month(value: str) -> bool:
        day = parse_day(value)
        return day is not None and start <= day < end

    rows: list[ExportRow] = []
    for r in records:
        if in_month(r.date):
            rows.append(
                ExportRow(
                    date=r.date,
                    type="financeRecord",
                    category=r.service if r.service != UNKNOWN_SERVICE else "Finance",
                    description=r.description,
                    amount_in=r.client_amount,
                    amount_out=r.provider_cost or 0.0,
                    status=r.status,
                    source="financeRecords",
                )
            )
    for p in category_payments:
        if in_month(p.date):
            rows.append(
                ExportRow(p.date, "categoryPayment", p.category or "Payment", p.description, 0.0, p.amount, p.status, "categoryPayments")
            )
    for e in expenses:
        if in_month(e.date):
            rows.append(
                ExportRow(e.date, "expense", e.category or "Expense", e.description, 0.0, e.amount, "expense", "expenses")
            )
    rows.sort(key=lambda row: parse_day(row.date) or date.min)
    return rows


def _cell(value: float | str) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def rows_to_csv(rows: Iterable[ExportRow]) -> str:
    """CSV text: plain header line, then every cell quoted with '"' doubled."""
    buffer = io.StringIO()
    buffer.write(",".join(EXPORT_COLUMNS) + "\n")
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for row in rows:
        writer.writerow(
            _cell(v)
            for v in (
                row.date,
                row.type,
                row.category,
                row.description,
                row.amount_in,
                row.amount_out,
                row.status,
                row.source,
            )
        )
    return buffer.getvalue().rstrip("\n")


def export_filename(month: str) -> str:
    return f"finance-{month or 'all'}.csv"


def provider_cost_writeback(
    record: FinanceRecordView, booking: Mapping[str, Any], cost: float
) -> dict[str, Any] | None:
    """Booking fields to update so the booking carries the confirmed provider cost.

    Services whose own key is part of the record's serviceKey get the cost;
    a record without serviceKey (or keyed 'booking') sets it on the booking
    itself. None when there is nothing to write.
    """
    services = booking.get("services")
    if record.service_key and isinstance(services, list):
        updated = []
        for srv in services:
            if isinstance(srv, dict):
                key = next(
                    (srv.get(k) for k in ("id", "serviceId", "type", "name", "title") if srv.get(k)),
                    None,
                )
                key_text = localized_text(key) if key else ""
                if key_text and key_text in record.service_key:
                    srv = {**srv, "providerCost": cost}
            updated.append(srv)
        return {"services": updated}
    if not record.service_key or record.service_key == "booking":
        return {"providerCost": cost}
    return None
