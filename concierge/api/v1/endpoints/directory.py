"""CRUD routes shared by the plain directory collections (villas, boats, cars, chefs, security).

Each collection gets its own router built around the DirectoryService
dependency that knows its repository and search fields.
"""

from collections.abc import Awaitable, Callable
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request

from concierge.api.v1.dependencies import CallerDep, get_company_id
from concierge.application.use_cases import DirectoryService
from concierge.core.limiter import limit_writes
from concierge.schemas.directory import DocumentListResponse, DocumentWriteRequest

Endpoint = Callable[..., Awaitable[Any]]


def _named(endpoint: Endpoint, name: str) -> Endpoint:
    # Rate limits and OpenAPI operation ids are keyed by function name.
    endpoint.__name__ = name
    endpoint.__qualname__ = name
    return endpoint


def build_directory_router(
    resource: str,
    get_service: Callable[..., Awaitable[DirectoryService]],
) -> APIRouter:
    """Router with list/get/create/update/delete for one company-scoped collection."""
    router = APIRouter()
    ServiceDep = Annotated[DirectoryService, Depends(get_service)]

    async def list_documents(
        company_id: Annotated[str, Depends(get_company_id)],
        svc: ServiceDep,
        search: str | None = Query(None, max_length=200),
    ):
        docs = await svc.list_documents(company_id, search)
        return DocumentListResponse(items=docs, total=len(docs))

    async def get_document(
        document_id: str,
        company_id: Annotated[str, Depends(get_company_id)],
        svc: ServiceDep,
    ):
        return (await svc.get(company_id, document_id)).as_dict()

    async def create_document(
        request: Request,
        body: DocumentWriteRequest,
        caller: CallerDep,
        svc: ServiceDep,
    ):
        return (await svc.create(caller, body.fields())).as_dict()

    async def update_document(
        request: Request,
        document_id: str,
        body: DocumentWriteRequest,
        caller: CallerDep,
        svc: ServiceDep,
    ):
        return (await svc.update(caller, document_id, body.fields())).as_dict()

    async def delete_document(
        request: Request,
        document_id: str,
        caller: CallerDep,
        svc: ServiceDep,
    ):
        await svc.delete(caller, document_id)
        return None

    router.get("", response_model=DocumentListResponse)(
        _named(list_documents, f"list_{resource}")
    )
    router.get("/{document_id}", response_model=dict[str, Any])(
        _named(get_document, f"get_{resource}")
    )
    router.post("", response_model=dict[str, Any], status_code=201)(
        limit_writes(_named(create_document, f"create_{resource}"))
    )
    router.put("/{document_id}", response_model=dict[str, Any])(
        limit_writes(_named(update_document, f"update_{resource}"))
    )
    router.delete("/{document_id}", status_code=204)(
        limit_writes(_named(delete_document, f"delete_{resource}"))
    )
    return router
