"""Maintenance API: admin-only reconciliation sweeps.

Sweeps run against the caller's company; all_companies widens the offer
and photo sweeps to every company.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from concierge.api.v1.dependencies import get_reconciliation_service, require_admin
from concierge.application.dtos.caller import Caller
from concierge.application.use_cases import ReconciliationService
from concierge.core.limiter import limit_maintenance
from concierge.schemas.maintenance import (
    CollaboratorResetResponse,
    FinanceWipeReportResponse,
    OrphanedOffersReportResponse,
    PayoutCleanupReportResponse,
    PhotoFixReportResponse,
)

router = APIRouter()

AdminDep = Annotated[Caller, Depends(require_admin)]
ReconciliationDep = Annotated[ReconciliationService, Depends(get_reconciliation_service)]


def _scope(caller: Caller, all_companies: bool) -> str | None:
    return None if all_companies else caller.company_id


@router.get("/orphaned-offers", response_model=OrphanedOffersReportResponse)
@limit_maintenance
async def find_orphaned_offers(
    request: Request,
    caller: AdminDep,
    svc: ReconciliationDep,
    all_companies: bool = Query(False),
):
    """Offers whose client is missing or deleted (dry run)."""
    report = await svc.find_orphaned_offers(_scope(caller, all_companies))
    return OrphanedOffersReportResponse.model_validate(report)


@router.post("/orphaned-offers/prune", response_model=OrphanedOffersReportResponse)
@limit_maintenance
async def prune_orphaned_offers(
    request: Request,
    caller: AdminDep,
    svc: ReconciliationDep,
    all_companies: bool = Query(False),
):
    report = await svc.prune_orphaned_offers(_scope(caller, all_companies))
    return OrphanedOffersReportResponse.model_validate(report)


@router.post("/villa-photos/fix", response_model=PhotoFixReportResponse)
@limit_maintenance
async def fix_villa_photos(
    request: Request,
    caller: AdminDep,
    svc: ReconciliationDep,
    all_companies: bool = Query(False),
):
    """Repoint villa photo URLs at files moved in storage; drop those that are gone."""
    report = await svc.fix_photo_paths(_scope(caller, all_companies))
    return PhotoFixReportResponse.model_validate(report)


@router.post("/villa-photos/remove-broken", response_model=PhotoFixReportResponse)
@limit_maintenance
async def remove_broken_villa_photos(
    request: Request,
    caller: AdminDep,
    svc: ReconciliationDep,
    all_companies: bool = Query(False),
):
    """Drop villa photos whose storage object is gone.

    Only a 404 removes a photo. When the lookup itself fails (timeout,
    permission, 5xx) the photo is kept and a warning is logged.
    """
    report = await svc.remove_broken_photos(_scope(caller, all_companies))
    return PhotoFixReportResponse.model_validate(report)


@router.post("/collaborator-payments/dedupe", response_model=PayoutCleanupReportResponse)
@limit_maintenance
async def remove_duplicate_collaborator_payments(
    request: Request,
    caller: AdminDep,
    svc: ReconciliationDep,
):
    """Delete category payments that duplicate collaborator payout records."""
    report = await svc.remove_duplicate_collaborator_payments(caller.company_id)
    return PayoutCleanupReportResponse.model_validate(report)


@router.post("/collaborator-payouts/remove", response_model=PayoutCleanupReportResponse)
@limit_maintenance
async def remove_collaborator_payouts(
    request: Request,
    caller: AdminDep,
    svc: ReconciliationDep,
):
    report = await svc.remove_orphaned_collaborator_payouts(caller.company_id)
    return PayoutCleanupReportResponse.model_validate(report)


@router.post("/collaborators/reset-payments", response_model=CollaboratorResetResponse)
@limit_maintenance
async def reset_collaborator_payments(
    request: Request,
    caller: AdminDep,
    svc: ReconciliationDep,
):
    return CollaboratorResetResponse(
        collaborators_reset=await svc.reset_collaborator_payments(caller.company_id)
    )


@router.get("/finance/inventory", response_model=dict[str, dict[str, int]])
@limit_maintenance
async def finance_inventory(
    request: Request,
    caller: AdminDep,
    svc: ReconciliationDep,
):
    """Finance records, category payments and expenses counted per company."""
    return await svc.finance_inventory()


@router.post("/finance/wipe", response_model=FinanceWipeReportResponse)
@limit_maintenance
async def wipe_finance(
    request: Request,
    caller: AdminDep,
    svc: ReconciliationDep,
):
    """Delete every finance record, payment and expense of the company."""
    return FinanceWipeReportResponse.model_validate(await svc.wipe_finance(caller.company_id))
