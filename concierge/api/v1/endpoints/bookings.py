"""Bookings API: reservations grouped per client, with services, shopping and payments.

Every mutation answers with the client's re-aggregated group so the caller
sees the new totals and payment status without a second request.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request

from concierge.api.v1.dependencies import CallerDep, get_booking_service, get_company_id
from concierge.application.dtos.booking import ClientGroup
from concierge.application.services.booking_aggregator import next_check_in
from concierge.application.use_cases import BookingService
from concierge.core.limiter import limit_writes
from concierge.domain.enums import BookingSort, TimeFilter
from concierge.domain.exceptions import NoBookingForClientException
from concierge.schemas.booking import (
    BookingDeleteResponse,
    ClientGroupListResponse,
    ClientGroupResponse,
    DaysLeftResponse,
    PaymentCreateRequest,
    ServiceCreateRequest,
    ServiceReference,
    ShoppingCreateRequest,
)

router = APIRouter()


def _group_response(group: ClientGroup) -> ClientGroupResponse:
    response = ClientGroupResponse.model_validate(group)
    upcoming = next_check_in(group)
    if upcoming is not None:
        response.next_check_in = DaysLeftResponse.model_validate(upcoming)
    return response


@router.get("", response_model=ClientGroupListResponse)
async def list_client_groups(
    company_id: Annotated[str, Depends(get_company_id)],
    booking_svc: Annotated[BookingService, Depends(get_booking_service)],
    time_filter: TimeFilter = Query(TimeFilter.ALL, alias="filter"),
    search: str | None = Query(None, max_length=200),
    sort: BookingSort = Query(BookingSort.DATE),
):
    """Client groups in an upcoming/active/past bucket, searched and sorted."""
    groups = await booking_svc.list_groups(company_id, time_filter, search, sort)
    return ClientGroupListResponse(
        items=[_group_response(g) for g in groups],
        total=len(groups),
    )


@router.get("/clients/{client_id}", response_model=ClientGroupResponse)
async def get_client_group(
    client_id: str,
    company_id: Annotated[str, Depends(get_company_id)],
    booking_svc: Annotated[BookingService, Depends(get_booking_service)],
):
    """One client's bookings and payment roll-up ('unknown' for unassigned bookings)."""
    group = await booking_svc.get_group(company_id, client_id)
    if group is None:
        raise NoBookingForClientException(client_id)
    return _group_response(group)


@router.delete("/{booking_id}", response_model=BookingDeleteResponse)
@limit_writes
async def delete_booking(
    request: Request,
    booking_id: str,
    caller: CallerDep,
    booking_svc: Annotated[BookingService, Depends(get_booking_service)],
):
    """Delete a reservation; returns what is left of the client's group."""
    group = await booking_svc.delete_booking(caller, booking_id)
    return BookingDeleteResponse(
        deleted_id=booking_id,
        group=_group_response(group) if group else None,
    )


@router.post("/clients/{client_id}/services", response_model=ClientGroupResponse, status_code=201)
@limit_writes
async def add_service(
    request: Request,
    client_id: str,
    body: ServiceCreateRequest,
    caller: CallerDep,
    booking_svc: Annotated[BookingService, Depends(get_booking_service)],
):
    """Add a service to the client's most recently created booking."""
    data: dict[str, Any] = body.model_dump(by_alias=True, exclude_none=True)
    group = await booking_svc.add_service(caller, client_id, data)
    return _group_response(group)


@router.post("/clients/{client_id}/shopping", response_model=ClientGroupResponse, status_code=201)
@limit_writes
async def add_shopping(
    request: Request,
    client_id: str,
    body: ShoppingCreateRequest,
    caller: CallerDep,
    booking_svc: Annotated[BookingService, Depends(get_booking_service)],
):
    """Record a shopping receipt on the client's latest booking."""
    group = await booking_svc.add_shopping(
        caller,
        client_id,
        store=body.store,
        items=body.items,
        price=body.price,
        date=body.date,
        has_receipt=body.has_receipt,
        notes=body.notes,
    )
    return _group_response(group)


@router.post("/{booking_id}/services/remove", response_model=BookingDeleteResponse)
@limit_writes
async def remove_service(
    request: Request,
    booking_id: str,
    body: ServiceReference,
    caller: CallerDep,
    booking_svc: Annotated[BookingService, Depends(get_booking_service)],
):
    """Remove one embedded service from a booking."""
    group = await booking_svc.delete_service(caller, booking_id, body.as_ref())
    return BookingDeleteResponse(
        deleted_id=booking_id,
        group=_group_response(group) if group else None,
    )


@router.post("/clients/{client_id}/payments", response_model=ClientGroupResponse, status_code=201)
@limit_writes
async def record_payment(
    request: Request,
    client_id: str,
    body: PaymentCreateRequest,
    caller: CallerDep,
    booking_svc: Annotated[BookingService, Depends(get_booking_service)],
):
    """Record a client payment (against booking_id, else the earliest booking with a balance)."""
    group = await booking_svc.record_payment(
        caller,
        client_id,
        body.amount,
        method=body.method,
        notes=body.notes,
        receipt_number=body.receipt_number,
        booking_id=body.booking_id,
    )
    return _group_response(group)
