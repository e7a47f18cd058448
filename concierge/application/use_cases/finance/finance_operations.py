"""Finance use cases: keep finance records in step with reservations and report on them."""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from concierge.application.dtos.caller import Caller
from concierge.application.dtos.finance import (
    FinanceFilters,
    FinanceLedger,
    FinanceRecordView,
    FinanceSummary,
    LedgerEntry,
    MonthlySnapshot,
    ServiceBreakdownRow,
    SyncResult,
)
from concierge.application.interfaces.repositories import (
    IClientRepository,
    IDocumentRepository,
    IFinanceRecordRepository,
    IReservationRepository,
)
from concierge.application.services.finance_calculator import (
    export_filename,
    export_rows,
    filter_entries,
    filter_records,
    finance_reservations,
    find_orphan_records,
    is_visible_to,
    monthly_snapshots,
    normalize_ledger_entry,
    normalize_record,
    plan_sync,
    provider_cost_writeback,
    rows_to_csv,
    service_breakdown,
    summarize,
)
from concierge.domain.enums import FinanceRecordStatus
from concierge.domain.exceptions import (
    ConciergeException,
    ResourceNotFoundException,
    ValidationException,
)
from concierge.shared.telemetry.logging import get_logger
from concierge.shared.utils.datetime import parse_datetime, utc_now
from concierge.shared.utils.localization import DEFAULT_LANGUAGE
from concierge.shared.utils.numbers import to_float

logger = get_logger(__name__)


class FinanceService:
    """Finance records per booking service, provider payments and expenses of a company.

    Reading the ledger prunes records whose booking or client is gone, and
    wipes records and category payments entirely when the company has no
    reservations and no clients left.
    """

    def __init__(
        self,
        reservation_repo: IReservationRepository,
        client_repo: IClientRepository,
        finance_repo: IFinanceRecordRepository,
        category_payment_repo: IDocumentRepository,
        expense_repo: IDocumentRepository,
        language: str = DEFAULT_LANGUAGE,
    ) -> None:
        self.reservation_repo = reservation_repo
        self.client_repo = client_repo
        self.finance_repo = finance_repo
        self.category_payment_repo = category_payment_repo
        self.expense_repo = expense_repo
        self.language = language

    async def _prune(self, company_id: str) -> tuple[list[FinanceRecordView], list[LedgerEntry], int]:
        """Delete orphaned records; return surviving records, category payments and the count pruned."""
        reservations = finance_reservations(await self.reservation_repo.list_for_company(company_id))
        clients = await self.client_repo.map_for_company(company_id)
        records = [
            normalize_record(doc, clients, self.language)
            for doc in await self.finance_repo.list_for_company(company_id)
        ]
        payments = [
            normalize_ledger_entry(doc, language=self.language)
            for doc in await self.category_payment_repo.list_for_company(company_id)
        ]

        orphan_ids = set(find_orphan_records(records, reservations, clients.keys()))
        pruned = 0
        if orphan_ids:
            pruned = await self.finance_repo.delete_many(orphan_ids)
            logger.info("Pruned orphan finance records", extra={"count": pruned})
            records = [r for r in records if r.id not in orphan_ids]
        if not reservations and not clients and payments:
            await self.category_payment_repo.delete_many(p.id for p in payments)
            logger.info("Wiped category payments of empty company", extra={"count": len(payments)})
            payments = []
        return records, payments, pruned

    async def ledger(self, caller: Caller) -> FinanceLedger:
        """Records, category payments and expenses the caller is allowed to see."""
        records, payments, _ = await self._prune(caller.company_id)
        expenses = [
            normalize_ledger_entry(doc, default_category="other", language=self.language)
            for doc in await self.expense_repo.list_for_company(caller.company_id)
        ]
        return FinanceLedger(
            records=[r for r in records if is_visible_to(r.created_by, r.created_by_email, caller)],
            category_payments=[
                p for p in payments if is_visible_to(p.created_by, p.created_by_email, caller)
            ],
            expenses=[e for e in expenses if is_visible_to(e.created_by, e.created_by_email, caller)],
        )

    async def sync(self, caller: Caller) -> SyncResult:
        """Create missing records for booking services and refresh changed amounts."""
        records, _, pruned = await self._prune(caller.company_id)
        reservations = finance_reservations(
            await self.reservation_repo.list_for_company(caller.company_id)
        )
        clients = await self.client_repo.map_for_company(caller.company_id)
        plan = plan_sync(reservations, records, clients, caller, self.language)
        if not plan.is_empty:
            await self.finance_repo.apply_sync(caller.company_id, plan.creates, plan.updates)
        logger.info(
            "Finance sync finished",
            extra={"created": len(plan.creates), "updated": len(plan.updates), "pruned": pruned},
        )
        return SyncResult(created=len(plan.creates), updated=len(plan.updates), pruned=pruned)

    async def summary(
        self, caller: Caller, filters: FinanceFilters | None = None
    ) -> tuple[FinanceSummary, list[ServiceBreakdownRow]]:
        """Totals and per-service breakdown over the filtered records."""
        ledger = await self.ledger(caller)
        active = filters or FinanceFilters()
        records = filter_records(ledger.records, active)
        expenses = filter_entries(ledger.expenses, active)
        return summarize(records, ledger.category_payments, expenses), service_breakdown(records)

    async def monthly(self, caller: Caller) -> list[MonthlySnapshot]:
        ledger = await self.ledger(caller)
        return monthly_snapshots(ledger.records, ledger.expenses)

    async def export_csv(self, caller: Caller, month: str) -> tuple[str, str]:
        """Return (filename, csv text) of every ledger movement in month ('YYYY-MM')."""
        ledger = await self.ledger(caller)
        rows = export_rows(month, ledger.records, ledger.category_payments, ledger.expenses)
        return export_filename(month), rows_to_csv(rows)

    async def update_provider_cost(
        self, caller: Caller, record_id: str, cost: Any
    ) -> FinanceRecordView:
        """Confirm what the provider was paid; the record becomes settled.

        The cost is also written back to the booking (on the matching
        service, or on the booking itself for single-service records). A
        failed write-back is logged and does not fail the update.
        """
        try:
            numeric_cost = float(cost)
        except (TypeError, ValueError) as e:
            raise ValidationException("Provider cost must be a number", field="providerCost") from e
        doc = await self.finance_repo.get_for_company(record_id, caller.company_id)
        if doc is None:
            raise ResourceNotFoundException("financeRecord", record_id)
        record = normalize_record(doc, language=self.language)
        profit = record.client_amount - numeric_cost
        await self.finance_repo.update(
            record_id,
            {
                "providerCost": numeric_cost,
                "status": FinanceRecordStatus.SETTLED.value,
                "profit": profit,
                "updatedAt": utc_now(),
            },
        )
        if record.booking_id:
            await self._write_back_cost(caller.company_id, record.booking_id, record, numeric_cost)
        return replace(
            record,
            provider_cost=numeric_cost,
            status=FinanceRecordStatus.SETTLED.value,
            profit=profit,
        )

    async def _write_back_cost(
        self, company_id: str, booking_id: str, record: FinanceRecordView, cost: float
    ) -> None:
        try:
            booking = await self.reservation_repo.get_for_company(booking_id, company_id)
            if booking is None:
                return
            fields = provider_cost_writeback(record, booking.data, cost)
            if fields:
                await self.reservation_repo.update(booking.id, fields)
        except ConciergeException as e:
            logger.warning(
                "Provider cost write-back failed",
                extra={"record_id": record.id, "booking_id": booking_id, "error": str(e)},
            )

    @staticmethod
    def _entry_fields(caller: Caller, data: dict[str, Any]) -> dict[str, Any]:
        category = str(data.get("category") or "").strip()
        amount = to_float(data.get("amount"))
        if not category or not amount:
            raise ValidationException("Category and amount are required")
        return {
            "category": category,
            "amount": amount,
            "date": parse_datetime(data.get("date")) or utc_now(),
            "description": data.get("description") or "",
            "createdBy": caller.user_id,
            "createdByEmail": caller.email,
        }

    async def add_category_payment(self, caller: Caller, data: dict[str, Any]) -> LedgerEntry:
        """Record a payment to a provider category (not tied to a booking)."""
        doc = await self.category_payment_repo.add(caller.company_id, self._entry_fields(caller, data))
        return normalize_ledger_entry(doc, language=self.language)

    async def add_expense(self, caller: Caller, data: dict[str, Any]) -> LedgerEntry:
        doc = await self.expense_repo.add(caller.company_id, self._entry_fields(caller, data))
        return normalize_ledger_entry(doc, default_category="other", language=self.language)

    async def _delete_entry(self, repo: IDocumentRepository, kind: str, caller: Caller, entry_id: str) -> None:
        doc = await repo.get_for_company(entry_id, caller.company_id)
        if doc is None:
            raise ResourceNotFoundException(kind, entry_id)
        await repo.delete(entry_id)

    async def delete_category_payment(self, caller: Caller, payment_id: str) -> None:
        await self._delete_entry(self.category_payment_repo, "categoryPayment", caller, payment_id)

    async def delete_expense(self, caller: Caller, expense_id: str) -> None:
        await self._delete_entry(self.expense_repo, "expense", caller, expense_id)
