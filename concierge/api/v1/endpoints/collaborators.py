"""Collaborators API: referral partners and their commission on reservations."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request

from concierge.api.v1.dependencies import CallerDep, get_collaborator_service, get_company_id
from concierge.application.use_cases import CollaboratorService
from concierge.core.limiter import limit_writes
from concierge.schemas.directory import (
    CollaboratorStatsResponse,
    CollaboratorWriteRequest,
    CommissionResponse,
    CommissionUpdateRequest,
)

router = APIRouter()


@router.get("", response_model=list[CollaboratorStatsResponse])
async def list_collaborators(
    company_id: Annotated[str, Depends(get_company_id)],
    collaborator_svc: Annotated[CollaboratorService, Depends(get_collaborator_service)],
    search: str | None = Query(None, max_length=200),
):
    """Collaborators with confirmed booking count and total commission."""
    stats = await collaborator_svc.list_with_stats(company_id, search)
    return [CollaboratorStatsResponse.model_validate(s) for s in stats]


@router.get("/{collaborator_id}", response_model=dict[str, Any])
async def get_collaborator(
    collaborator_id: str,
    company_id: Annotated[str, Depends(get_company_id)],
    collaborator_svc: Annotated[CollaboratorService, Depends(get_collaborator_service)],
):
    return (await collaborator_svc.get(company_id, collaborator_id)).as_dict()


@router.get("/{collaborator_id}/bookings", response_model=list[CommissionResponse])
async def collaborator_bookings(
    collaborator_id: str,
    company_id: Annotated[str, Depends(get_company_id)],
    collaborator_svc: Annotated[CollaboratorService, Depends(get_collaborator_service)],
):
    """Confirmed reservations referred by the collaborator with their commission."""
    rows = await collaborator_svc.bookings_with_commission(company_id, collaborator_id)
    return [CommissionResponse.model_validate(r) for r in rows]


@router.post("", response_model=dict[str, Any], status_code=201)
@limit_writes
async def create_collaborator(
    request: Request,
    body: CollaboratorWriteRequest,
    caller: CallerDep,
    collaborator_svc: Annotated[CollaboratorService, Depends(get_collaborator_service)],
):
    return (await collaborator_svc.create(caller, body.fields())).as_dict()


@router.put("/{collaborator_id}", response_model=dict[str, Any])
@limit_writes
async def update_collaborator(
    request: Request,
    collaborator_id: str,
    body: CollaboratorWriteRequest,
    caller: CallerDep,
    collaborator_svc: Annotated[CollaboratorService, Depends(get_collaborator_service)],
):
    return (await collaborator_svc.update(caller, collaborator_id, body.fields())).as_dict()


@router.delete("/{collaborator_id}", status_code=204)
@limit_writes
async def delete_collaborator(
    request: Request,
    collaborator_id: str,
    caller: CallerDep,
    collaborator_svc: Annotated[CollaboratorService, Depends(get_collaborator_service)],
):
    await collaborator_svc.delete(caller, collaborator_id)
    return None


@router.put("/commissions/{booking_id}", response_model=CommissionResponse)
@limit_writes
async def set_booking_commission(
    request: Request,
    booking_id: str,
    body: CommissionUpdateRequest,
    caller: CallerDep,
    collaborator_svc: Annotated[CollaboratorService, Depends(get_collaborator_service)],
):
    """Set a custom commission on a reservation (null goes back to the collaborator's rate)."""
    row = await collaborator_svc.set_booking_commission(caller, booking_id, body.amount)
    return CommissionResponse.model_validate(row)
