"""Reservations API: direct reservation entry and lookup."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request

from concierge.api.v1.dependencies import CallerDep, get_company_id, get_reservation_service
from concierge.application.use_cases import ReservationService
from concierge.core.limiter import limit_writes
from concierge.schemas.booking import ReservationCreateRequest
from concierge.schemas.directory import DocumentListResponse

router = APIRouter()


@router.post("", response_model=dict[str, Any], status_code=201)
@limit_writes
async def create_reservation(
    request: Request,
    body: ReservationCreateRequest,
    caller: CallerDep,
    reservation_svc: Annotated[ReservationService, Depends(get_reservation_service)],
):
    """Create a confirmed reservation for a client of the company."""
    reservation = await reservation_svc.create_reservation(
        caller,
        body.client_id,
        check_in=body.check_in,
        check_out=body.check_out,
        accommodation_type=body.accommodation_type,
        adults=body.adults,
        children=body.children,
        transport=body.transport,
        notes=body.notes,
    )
    return reservation.as_dict()


@router.get("", response_model=DocumentListResponse)
async def list_reservations(
    company_id: Annotated[str, Depends(get_company_id)],
    reservation_svc: Annotated[ReservationService, Depends(get_reservation_service)],
    client_id: str | None = Query(None),
):
    reservations = await reservation_svc.list_reservations(company_id, client_id)
    return DocumentListResponse(items=reservations, total=len(reservations))


@router.get("/{reservation_id}", response_model=dict[str, Any])
async def get_reservation(
    reservation_id: str,
    company_id: Annotated[str, Depends(get_company_id)],
    reservation_svc: Annotated[ReservationService, Depends(get_reservation_service)],
):
    reservation = await reservation_svc.get_reservation(company_id, reservation_id)
    return reservation.as_dict()
