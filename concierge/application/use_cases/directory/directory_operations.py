"""Company-scoped CRUD shared by clients, properties, providers and collaborators."""

from __future__ import annotations

from typing import Any

from concierge.application.dtos.caller import Caller
from concierge.application.dtos.document import StoredDocument
from concierge.application.interfaces.repositories import IDocumentRepository
from concierge.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)
from concierge.shared.telemetry.logging import get_logger
from concierge.shared.utils.datetime import utc_now
from concierge.shared.utils.localization import contains_text
from concierge.shared.utils.sanitization import sanitize_document

logger = get_logger(__name__)

# Fields callers may not set through create/update payloads.
_PROTECTED_FIELDS = frozenset({"id", "companyId", "createdAt", "createdBy"})


class DirectoryService:
    """List, search, create, update and delete documents of one collection.

    Payload strings are stripped of HTML before they are stored; search is a
    case-insensitive substring match over search_fields (plain or localized
    values).
    """

    def __init__(
        self,
        repo: IDocumentRepository,
        resource: str,
        search_fields: tuple[str, ...] = ("name",),
    ) -> None:
        self.repo = repo
        self.resource = resource
        self.search_fields = search_fields

    def _clean(self, data: dict[str, Any]) -> dict[str, Any]:
        try:
            cleaned = sanitize_document(data)
        except ValueError as e:
            raise ValidationException(str(e)) from e
        return {k: v for k, v in cleaned.items() if k not in _PROTECTED_FIELDS}

    def matches(self, doc: StoredDocument, search: str) -> bool:
        return any(contains_text(doc.get(f), search) for f in self.search_fields)

    async def list_documents(
        self, company_id: str, search: str | None = None
    ) -> list[StoredDocument]:
        docs = await self.repo.list_for_company(company_id)
        needle = (search or "").strip()
        if needle:
            docs = [d for d in docs if self.matches(d, needle)]
        return docs

    async def get(self, company_id: str, document_id: str) -> StoredDocument:
        doc = await self.repo.get_for_company(document_id, company_id)
        if doc is None:
            raise ResourceNotFoundException(self.resource, document_id)
        return doc

    async def _owned(self, caller: Caller, document_id: str, action: str) -> StoredDocument:
        doc = await self.repo.get(document_id)
        if doc is None:
            raise ResourceNotFoundException(self.resource, document_id)
        if doc.company_id != caller.company_id:
            raise AuthorizationException(self.resource, action)
        return doc

    async def create(self, caller: Caller, data: dict[str, Any]) -> StoredDocument:
        payload = self._clean(data)
        payload["createdBy"] = caller.actor
        doc = await self.repo.add(caller.company_id, payload)
        logger.info("%s created", self.resource, extra={"document_id": doc.id})
        return doc

    async def update(self, caller: Caller, document_id: str, data: dict[str, Any]) -> StoredDocument:
        current = await self._owned(caller, document_id, "modify")
        fields = {**self._clean(data), "updatedAt": utc_now(), "updatedBy": caller.actor}
        await self.repo.update(document_id, fields)
        return StoredDocument(id=document_id, data={**current.data, **fields})

    async def delete(self, caller: Caller, document_id: str) -> None:
        await self._owned(caller, document_id, "delete")
        await self.repo.delete(document_id)
        logger.info("%s deleted", self.resource, extra={"document_id": document_id})
