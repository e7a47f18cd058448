"""Offers API: priced proposals, their follow-up overview and conversion to reservations."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request

from concierge.api.v1.dependencies import CallerDep, get_company_id, get_offer_service
from concierge.application.use_cases import OfferService
from concierge.core.limiter import limit_writes
from concierge.domain.enums import OfferStatus
from concierge.domain.exceptions import ValidationException
from concierge.schemas.directory import DocumentListResponse
from concierge.schemas.offer import (
    OfferConvertRequest,
    OfferOverviewItemResponse,
    OfferOverviewResponse,
    OfferStatsResponse,
    OfferStatusUpdate,
    OfferWriteRequest,
)

router = APIRouter()


@router.post("", response_model=dict[str, Any], status_code=201)
@limit_writes
async def create_offer(
    request: Request,
    body: OfferWriteRequest,
    caller: CallerDep,
    offer_svc: Annotated[OfferService, Depends(get_offer_service)],
):
    """Create a draft offer for a client; totals are computed from the items."""
    if not body.client_id:
        raise ValidationException("Client is required", field="client_id")
    offer = await offer_svc.create_offer(
        caller,
        body.client_id,
        body.item_dicts(),
        notes=body.notes,
        discount_type=body.discount_type,
        discount_value=body.discount_value,
    )
    return offer.as_dict()


@router.get("", response_model=DocumentListResponse)
async def list_offers(
    company_id: Annotated[str, Depends(get_company_id)],
    offer_svc: Annotated[OfferService, Depends(get_offer_service)],
    client_id: str | None = Query(None),
):
    offers = await offer_svc.list_offers(company_id, client_id)
    return DocumentListResponse(items=offers, total=len(offers))


@router.get("/overview", response_model=OfferOverviewResponse)
async def offers_overview(
    company_id: Annotated[str, Depends(get_company_id)],
    offer_svc: Annotated[OfferService, Depends(get_offer_service)],
):
    """Offer counts and the next action per offer, most urgent first."""
    stats, items = await offer_svc.overview(company_id)
    return OfferOverviewResponse(
        stats=OfferStatsResponse.model_validate(stats),
        items=[OfferOverviewItemResponse.model_validate(item) for item in items],
    )


@router.get("/{offer_id}", response_model=dict[str, Any])
async def get_offer(
    offer_id: str,
    company_id: Annotated[str, Depends(get_company_id)],
    offer_svc: Annotated[OfferService, Depends(get_offer_service)],
):
    offer = await offer_svc.get_offer(company_id, offer_id)
    return offer.as_dict()


@router.put("/{offer_id}", response_model=dict[str, Any])
@limit_writes
async def update_offer(
    request: Request,
    offer_id: str,
    body: OfferWriteRequest,
    caller: CallerDep,
    offer_svc: Annotated[OfferService, Depends(get_offer_service)],
):
    """Replace an offer's items and pricing; the offer returns to draft."""
    offer = await offer_svc.update_offer(
        caller,
        offer_id,
        body.item_dicts(),
        notes=body.notes,
        discount_type=body.discount_type,
        discount_value=body.discount_value,
    )
    return offer.as_dict()


@router.patch("/{offer_id}/status", response_model=dict[str, Any])
@limit_writes
async def update_offer_status(
    request: Request,
    offer_id: str,
    body: OfferStatusUpdate,
    caller: CallerDep,
    offer_svc: Annotated[OfferService, Depends(get_offer_service)],
):
    offer = await offer_svc.set_status(caller, offer_id, OfferStatus(body.status))
    return offer.as_dict()


@router.delete("/{offer_id}", status_code=204)
@limit_writes
async def delete_offer(
    request: Request,
    offer_id: str,
    caller: CallerDep,
    offer_svc: Annotated[OfferService, Depends(get_offer_service)],
):
    await offer_svc.delete_offer(caller, offer_id)
    return None


@router.post("/{offer_id}/convert", response_model=dict[str, Any], status_code=201)
@limit_writes
async def convert_offer(
    request: Request,
    offer_id: str,
    body: OfferConvertRequest,
    caller: CallerDep,
    offer_svc: Annotated[OfferService, Depends(get_offer_service)],
):
    """Turn an offer into a confirmed reservation; the offer is marked booked."""
    reservation = await offer_svc.convert_to_reservation(
        caller,
        offer_id,
        check_in=body.check_in,
        check_out=body.check_out,
        adults=body.adults,
        children=body.children,
        notes=body.notes,
        overrides={index: o.as_fields() for index, o in body.services.items()},
        language=body.language,
    )
    return reservation.as_dict()
