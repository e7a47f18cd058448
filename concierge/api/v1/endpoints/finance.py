"""Finance API: per-service ledger synced from reservations, summaries and CSV export.

Non-admin callers only see records, payments and expenses they created.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from concierge.api.v1.dependencies import CallerDep, get_finance_service
from concierge.application.dtos.finance import FinanceFilters
from concierge.application.use_cases import FinanceService
from concierge.core.limiter import limit_writes
from concierge.schemas.finance import (
    FinanceLedgerResponse,
    FinanceRecordResponse,
    FinanceReportResponse,
    FinanceSummaryResponse,
    LedgerEntryCreate,
    LedgerEntryResponse,
    MonthlySnapshotResponse,
    ProviderCostUpdate,
    ServiceBreakdownResponse,
    SyncResponse,
)

router = APIRouter()

MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"
DAY_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


@router.get("/ledger", response_model=FinanceLedgerResponse)
async def get_ledger(
    caller: CallerDep,
    finance_svc: Annotated[FinanceService, Depends(get_finance_service)],
):
    """Finance records, category payments and expenses (orphaned records are pruned first)."""
    return FinanceLedgerResponse.model_validate(await finance_svc.ledger(caller))


@router.post("/sync", response_model=SyncResponse)
@limit_writes
async def sync_finance(
    request: Request,
    caller: CallerDep,
    finance_svc: Annotated[FinanceService, Depends(get_finance_service)],
):
    """Create or refresh one finance record per reservation service."""
    return SyncResponse.model_validate(await finance_svc.sync(caller))


@router.get("/summary", response_model=FinanceReportResponse)
async def finance_summary(
    caller: CallerDep,
    finance_svc: Annotated[FinanceService, Depends(get_finance_service)],
    service: str | None = Query(None, max_length=200),
    start_date: str | None = Query(None, pattern=DAY_PATTERN),
    end_date: str | None = Query(None, pattern=DAY_PATTERN),
    client: str | None = Query(None, max_length=200),
):
    """Revenue, costs and profit over the filtered records, with a per-service breakdown."""
    filters = FinanceFilters(
        service=service, start_date=start_date, end_date=end_date, client=client
    )
    summary, breakdown = await finance_svc.summary(caller, filters)
    return FinanceReportResponse(
        summary=FinanceSummaryResponse.model_validate(summary),
        breakdown=[ServiceBreakdownResponse.model_validate(row) for row in breakdown],
    )


@router.get("/monthly", response_model=list[MonthlySnapshotResponse])
async def finance_monthly(
    caller: CallerDep,
    finance_svc: Annotated[FinanceService, Depends(get_finance_service)],
):
    """Income, payments, expenses and profit per month, oldest first."""
    return [MonthlySnapshotResponse.model_validate(s) for s in await finance_svc.monthly(caller)]


@router.get("/export")
async def export_finance(
    caller: CallerDep,
    finance_svc: Annotated[FinanceService, Depends(get_finance_service)],
    month: str = Query(..., pattern=MONTH_PATTERN),
):
    """Every ledger movement of a month as CSV."""
    filename, content = await finance_svc.export_csv(caller, month)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.patch("/records/{record_id}/provider-cost", response_model=FinanceRecordResponse)
@limit_writes
async def update_provider_cost(
    request: Request,
    record_id: str,
    body: ProviderCostUpdate,
    caller: CallerDep,
    finance_svc: Annotated[FinanceService, Depends(get_finance_service)],
):
    """Confirm what the provider was paid; the record is settled."""
    record = await finance_svc.update_provider_cost(caller, record_id, body.provider_cost)
    return FinanceRecordResponse.model_validate(record)


@router.post("/payments", response_model=LedgerEntryResponse, status_code=201)
@limit_writes
async def add_category_payment(
    request: Request,
    body: LedgerEntryCreate,
    caller: CallerDep,
    finance_svc: Annotated[FinanceService, Depends(get_finance_service)],
):
    entry = await finance_svc.add_category_payment(caller, body.model_dump())
    return LedgerEntryResponse.model_validate(entry)


@router.delete("/payments/{payment_id}", status_code=204)
@limit_writes
async def delete_category_payment(
    request: Request,
    payment_id: str,
    caller: CallerDep,
    finance_svc: Annotated[FinanceService, Depends(get_finance_service)],
):
    await finance_svc.delete_category_payment(caller, payment_id)
    return None


@router.post("/expenses", response_model=LedgerEntryResponse, status_code=201)
@limit_writes
async def add_expense(
    request: Request,
    body: LedgerEntryCreate,
    caller: CallerDep,
    finance_svc: Annotated[FinanceService, Depends(get_finance_service)],
):
    entry = await finance_svc.add_expense(caller, body.model_dump())
    return LedgerEntryResponse.model_validate(entry)


@router.delete("/expenses/{expense_id}", status_code=204)
@limit_writes
async def delete_expense(
    request: Request,
    expense_id: str,
    caller: CallerDep,
    finance_svc: Annotated[FinanceService, Depends(get_finance_service)],
):
    await finance_svc.delete_expense(caller, expense_id)
    return None
