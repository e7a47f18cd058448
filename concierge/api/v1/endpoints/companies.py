"""Company API: registry of tenants. Creating and listing companies is admin-only."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request

from concierge.api.v1.dependencies import (
    get_company_id,
    get_company_service,
    require_admin_role,
)
from concierge.application.use_cases import CompanyService
from concierge.core.limiter import limit_writes
from concierge.schemas.company import CompanyCreateRequest, CompanyResponse

router = APIRouter()


@router.post("", response_model=CompanyResponse, status_code=201)
@limit_writes
async def create_company(
    request: Request,
    body: CompanyCreateRequest,
    company_svc: Annotated[CompanyService, Depends(get_company_service)],
    _: Annotated[str, Depends(require_admin_role)],
):
    """Create a company under the given id (409 when the id is taken)."""
    created = await company_svc.create_company(body.id, body.name)
    return CompanyResponse.model_validate(created)


@router.get("", response_model=list[CompanyResponse])
async def list_companies(
    company_svc: Annotated[CompanyService, Depends(get_company_service)],
    _: Annotated[str, Depends(require_admin_role)],
):
    """All companies, for admins switching between them."""
    return [CompanyResponse.model_validate(c) for c in await company_svc.list_companies()]


@router.get("/{company_id}", response_model=CompanyResponse)
async def get_company(
    company_id: str,
    company_id_header: Annotated[str, Depends(get_company_id)],
    company_svc: Annotated[CompanyService, Depends(get_company_service)],
):
    """Get the current company. Path company_id must match the company header."""
    if company_id != company_id_header:
        raise HTTPException(status_code=403, detail="Forbidden")
    return CompanyResponse.model_validate(await company_svc.get_company(company_id))
