"""Catalog API: services offered per category and provider stats."""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends

from concierge.api.v1.dependencies import get_catalog_service, get_company_id
from concierge.application.use_cases import CatalogService
from concierge.schemas.directory import CatalogResponse, DocumentListResponse

router = APIRouter()


@router.get("/offers", response_model=dict[str, CatalogResponse])
async def offer_catalog(
    company_id: Annotated[str, Depends(get_company_id)],
    catalog_svc: Annotated[CatalogService, Depends(get_catalog_service)],
):
    """Priced items per category for building offers."""
    catalog = await catalog_svc.offer_catalog(company_id)
    return {
        category: CatalogResponse(items=items, total=len(items))
        for category, items in catalog.items()
    }


@router.get("/providers/{category}/stats", response_model=DocumentListResponse)
async def provider_stats(
    category: Literal["chefs", "security"],
    company_id: Annotated[str, Depends(get_company_id)],
    catalog_svc: Annotated[CatalogService, Depends(get_catalog_service)],
):
    """Chefs or security staff with confirmed booking count and revenue."""
    rows = await catalog_svc.provider_stats(company_id, category)
    return DocumentListResponse(items=rows, total=len(rows))


@router.get("/{category}", response_model=CatalogResponse)
async def booking_services(
    category: str,
    company_id: Annotated[str, Depends(get_company_id)],
    catalog_svc: Annotated[CatalogService, Depends(get_catalog_service)],
):
    """Services that can be added to a booking for one category."""
    items = await catalog_svc.booking_services(company_id, category)
    return CatalogResponse(items=items, total=len(items))
