"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from concierge.application.dtos.company import CompanyResult
    from concierge.application.dtos.document import StoredDocument


# Company repository interface
class ICompanyRepository(Protocol):
    """Protocol for company (tenant) repository."""

    async def get_by_id(self, company_id: str) -> CompanyResult | None:
        """Return company by ID."""

    async def list_all(self) -> list[CompanyResult]:
        """Return all companies."""

    async def create(self, company_id: str, name: str) -> CompanyResult:
        """Create company; raise DocumentExistsException when the id is taken."""


# Generic company-scoped collection
class IDocumentRepository(Protocol):
    """Protocol shared by every collection partitioned by companyId."""

    async def get(self, document_id: str) -> StoredDocument | None:
        """Return document by id regardless of company."""

    async def get_for_company(self, document_id: str, company_id: str) -> StoredDocument | None:
        """Return document by id only when it belongs to company_id."""

    async def list_for_company(self, company_id: str, **equals: Any) -> list[StoredDocument]:
        """Return documents of a company, optionally narrowed by equality filters."""

    async def list_all(self) -> list[StoredDocument]:
        """Return every document in the collection (maintenance only)."""

    async def add(self, company_id: str, data: dict[str, Any]) -> StoredDocument:
        """Create with generated id; stamps companyId and createdAt."""

    async def update(self, document_id: str, fields: dict[str, Any]) -> bool:
        """Merge fields; False when the document does not exist."""

    async def delete(self, document_id: str) -> None:
        """Delete document (no-op when missing)."""

    async def delete_many(self, document_ids: Iterable[str]) -> int:
        """Batch delete; returns number of deletes sent."""


class IClientRepository(IDocumentRepository, Protocol):
    """Protocol for client repository."""

    async def map_for_company(self, company_id: str) -> dict[str, StoredDocument]:
        """Return {client_id: client} for the company."""

    async def append_upcoming_reservation(self, client_id: str, entry: dict[str, Any]) -> bool:
        """Append to the client's upcomingReservations; False when client is gone."""


class IReservationRepository(IDocumentRepository, Protocol):
    """Protocol for reservation repository."""

    async def list_confirmed_for_collaborator(
        self, company_id: str, collaborator_id: str
    ) -> list[StoredDocument]:
        """Return confirmed reservations credited to a collaborator."""


class IOfferRepository(IDocumentRepository, Protocol):
    """Protocol for offer repository."""

    async def list_for_client(self, company_id: str, client_id: str) -> list[StoredDocument]:
        """Return offers addressed to a client."""


class IFinanceRecordRepository(IDocumentRepository, Protocol):
    """Protocol for finance record repository."""

    async def apply_sync(
        self,
        company_id: str,
        creates: Iterable[dict[str, Any]],
        updates: Iterable[tuple[str, dict[str, Any]]],
    ) -> int:
        """Persist a sync plan; returns number of writes."""

    async def list_for_service_key(self, company_id: str, service_key: str) -> list[StoredDocument]:
        """Return records with the given serviceKey."""


class ICatalogRepository(Protocol):
    """Protocol for the service catalog (generic plus dedicated collections)."""

    async def list_active_services(self, company_id: str, category: str) -> list[StoredDocument]:
        """Return active generic catalog entries of a category."""

    async def list_category_items(self, company_id: str, category: str) -> list[StoredDocument]:
        """Return items from the category's dedicated collection."""
