"""Clients API: the company's client directory."""

from typing import Annotated, Any, Literal

from fastapi import APIRouter, Depends, Query, Request

from concierge.api.v1.dependencies import CallerDep, get_client_service, get_company_id
from concierge.application.use_cases import ClientService
from concierge.core.limiter import limit_writes
from concierge.schemas.directory import ClientWriteRequest, DocumentListResponse

router = APIRouter()


@router.get("", response_model=DocumentListResponse)
async def list_clients(
    company_id: Annotated[str, Depends(get_company_id)],
    client_svc: Annotated[ClientService, Depends(get_client_service)],
    search: str | None = Query(None, max_length=200),
    status_filter: Literal["all", "active", "inactive", "vip"] = Query("all", alias="filter"),
):
    """Clients matching search (name, email, phone) and the status/VIP filter."""
    clients = await client_svc.list_clients(company_id, search, status_filter)
    return DocumentListResponse(items=clients, total=len(clients))


@router.get("/{client_id}", response_model=dict[str, Any])
async def get_client(
    client_id: str,
    company_id: Annotated[str, Depends(get_company_id)],
    client_svc: Annotated[ClientService, Depends(get_client_service)],
):
    return (await client_svc.get(company_id, client_id)).as_dict()


@router.post("", response_model=dict[str, Any], status_code=201)
@limit_writes
async def create_client(
    request: Request,
    body: ClientWriteRequest,
    caller: CallerDep,
    client_svc: Annotated[ClientService, Depends(get_client_service)],
):
    return (await client_svc.create(caller, body.fields())).as_dict()


@router.put("/{client_id}", response_model=dict[str, Any])
@limit_writes
async def update_client(
    request: Request,
    client_id: str,
    body: ClientWriteRequest,
    caller: CallerDep,
    client_svc: Annotated[ClientService, Depends(get_client_service)],
):
    return (await client_svc.update(caller, client_id, body.fields())).as_dict()


@router.delete("/{client_id}", status_code=204)
@limit_writes
async def delete_client(
    request: Request,
    client_id: str,
    caller: CallerDep,
    client_svc: Annotated[ClientService, Depends(get_client_service)],
):
    """Delete a client. Their offers are left behind; see the maintenance sweep."""
    await client_svc.delete(caller, client_id)
    return None
