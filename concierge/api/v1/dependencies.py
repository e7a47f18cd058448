"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the document store, the caller identity and
application use cases. All use cases are built from infrastructure
implementations here; routes depend only on these dependencies, not on
infra directly.

The document store is Firestore (REST) or the in-memory client, chosen by
DATABASE_BACKEND at startup; repositories work with either.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request

from concierge.application.dtos.caller import Caller
from concierge.application.interfaces.storage import IStorageService
from concierge.application.use_cases import (
    BookingService,
    CatalogService,
    ClientService,
    CollaboratorService,
    CompanyService,
    DirectoryService,
    FinanceService,
    GetDashboardStatsUseCase,
    OfferService,
    ReconciliationService,
    ReservationService,
)
from concierge.core.company_validation import is_valid_company_id_format
from concierge.core.config import get_settings
from concierge.core.request_context import set_company_id
from concierge.domain.exceptions import (
    AuthorizationException,
    BackendNotConfiguredException,
    CompanyNotFoundException,
)
from concierge.infrastructure.firebase.client import DocumentClient, get_firestore_client
from concierge.infrastructure.firebase.repositories import (
    FirestoreBoatRepository,
    FirestoreCarRepository,
    FirestoreCatalogRepository,
    FirestoreCategoryPaymentRepository,
    FirestoreChefRepository,
    FirestoreClientRepository,
    FirestoreCollaboratorRepository,
    FirestoreCompanyRepository,
    FirestoreExpenseRepository,
    FirestoreFinanceRecordRepository,
    FirestoreOfferRepository,
    FirestoreReservationRepository,
    FirestoreSecurityRepository,
    FirestoreVillaRepository,
)
from concierge.shared.utils.roles import is_admin_role


def get_document_client() -> DocumentClient:
    """Return the initialized document store client or raise 503."""
    client = get_firestore_client()
    if client is None:
        raise BackendNotConfiguredException("Database")
    return client


DocumentClientDep = Annotated[DocumentClient, Depends(get_document_client)]


def get_storage_service(request: Request) -> IStorageService | None:
    """Photo storage created at startup (None when it could not be configured)."""
    return getattr(request.app.state, "storage", None)


async def get_company_service(client: DocumentClientDep) -> CompanyService:
    return CompanyService(FirestoreCompanyRepository(client))


async def get_company_id(
    request: Request,
    client: DocumentClientDep,
) -> str:
    """Resolve company ID from header and validate it exists."""
    name = get_settings().company_header_name
    value = request.headers.get(name)
    if not value:
        raise HTTPException(
            status_code=400,
            detail=f"Missing required header: {name}",
        )
    if not is_valid_company_id_format(value):
        raise HTTPException(
            status_code=400,
            detail="Invalid company ID format (use alphanumeric, hyphen, underscore; max 128 characters)",
        )
    company = await FirestoreCompanyRepository(client).get_by_id(value)
    if company is None or not company.active:
        raise CompanyNotFoundException(value)
    set_company_id(value)
    return value


async def get_caller(
    request: Request,
    company_id: Annotated[str, Depends(get_company_id)],
) -> Caller:
    """Caller identity from gateway headers, scoped to the validated company."""
    settings = get_settings()
    role = request.headers.get(settings.user_role_header)
    return Caller(
        company_id=company_id,
        user_id=request.headers.get(settings.user_id_header) or None,
        email=request.headers.get(settings.user_email_header) or None,
        role=role,
        is_admin=is_admin_role(role),
    )


CallerDep = Annotated[Caller, Depends(get_caller)]


async def require_admin(caller: CallerDep) -> Caller:
    """Caller must hold an admin role in the company."""
    if not caller.is_admin:
        raise AuthorizationException(message="Admin role required")
    return caller


def require_admin_role(request: Request) -> str:
    """Admin role header without a company (company bootstrap and registry)."""
    role = request.headers.get(get_settings().user_role_header)
    if not is_admin_role(role):
        raise AuthorizationException(message="Admin role required")
    return str(role)


async def get_booking_service(client: DocumentClientDep) -> BookingService:
    return BookingService(FirestoreReservationRepository(client), FirestoreClientRepository(client))


async def get_reservation_service(client: DocumentClientDep) -> ReservationService:
    return ReservationService(
        FirestoreReservationRepository(client), FirestoreClientRepository(client)
    )


async def get_offer_service(client: DocumentClientDep) -> OfferService:
    return OfferService(
        FirestoreOfferRepository(client),
        FirestoreClientRepository(client),
        FirestoreReservationRepository(client),
        follow_up_days=get_settings().offer_follow_up_days,
    )


async def get_finance_service(client: DocumentClientDep) -> FinanceService:
    return FinanceService(
        FirestoreReservationRepository(client),
        FirestoreClientRepository(client),
        FirestoreFinanceRecordRepository(client),
        FirestoreCategoryPaymentRepository(client),
        FirestoreExpenseRepository(client),
    )


async def get_client_service(client: DocumentClientDep) -> ClientService:
    return ClientService(FirestoreClientRepository(client))


async def get_collaborator_service(client: DocumentClientDep) -> CollaboratorService:
    return CollaboratorService(
        FirestoreCollaboratorRepository(client),
        FirestoreReservationRepository(client),
        default_rate_percent=get_settings().default_commission_rate_percent,
    )


async def get_villa_service(client: DocumentClientDep) -> DirectoryService:
    return DirectoryService(
        FirestoreVillaRepository(client), "villa", search_fields=("name", "location", "address")
    )


async def get_boat_service(client: DocumentClientDep) -> DirectoryService:
    return DirectoryService(
        FirestoreBoatRepository(client), "boat", search_fields=("name", "model", "brand")
    )


async def get_car_service(client: DocumentClientDep) -> DirectoryService:
    return DirectoryService(
        FirestoreCarRepository(client), "car", search_fields=("name", "make", "model")
    )


async def get_chef_service(client: DocumentClientDep) -> DirectoryService:
    return DirectoryService(
        FirestoreChefRepository(client), "chef", search_fields=("name", "email", "phone")
    )


async def get_security_service(client: DocumentClientDep) -> DirectoryService:
    return DirectoryService(
        FirestoreSecurityRepository(client), "security", search_fields=("name", "email", "phone")
    )


async def get_catalog_service(client: DocumentClientDep) -> CatalogService:
    return CatalogService(FirestoreCatalogRepository(client), FirestoreReservationRepository(client))


async def get_dashboard_stats_use_case(client: DocumentClientDep) -> GetDashboardStatsUseCase:
    """Dashboard stats use case (counts and next check-ins)."""
    return GetDashboardStatsUseCase(
        reservation_repo=FirestoreReservationRepository(client),
        client_repo=FirestoreClientRepository(client),
        offer_repo=FirestoreOfferRepository(client),
    )


async def get_reconciliation_service(
    client: DocumentClientDep,
    storage: Annotated[IStorageService | None, Depends(get_storage_service)],
) -> ReconciliationService:
    return ReconciliationService(
        offer_repo=FirestoreOfferRepository(client),
        client_repo=FirestoreClientRepository(client),
        villa_repo=FirestoreVillaRepository(client),
        finance_repo=FirestoreFinanceRecordRepository(client),
        category_payment_repo=FirestoreCategoryPaymentRepository(client),
        expense_repo=FirestoreExpenseRepository(client),
        collaborator_repo=FirestoreCollaboratorRepository(client),
        storage=storage,
        photo_prefixes=get_settings().photo_prefixes,
    )
