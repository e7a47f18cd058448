"""Client directory: leads created by the team, searched and filtered in lists."""

from __future__ import annotations

from typing import Any

from concierge.application.dtos.caller import Caller
from concierge.application.dtos.document import StoredDocument
from concierge.application.interfaces.repositories import IClientRepository
from concierge.application.use_cases.directory.directory_operations import DirectoryService
from concierge.domain.exceptions import ValidationException

CLIENT_FILTERS = ("all", "active", "inactive", "vip")


class ClientService(DirectoryService):
    """Clients of a company. New clients always start as active leads."""

    def __init__(self, client_repo: IClientRepository) -> None:
        super().__init__(client_repo, "client", search_fields=("name", "email", "phone"))

    async def create(self, caller: Caller, data: dict[str, Any]) -> StoredDocument:
        if not str(data.get("name") or "").strip():
            raise ValidationException("Client name is required", field="name")
        client_type = data.get("clientType") or "regular"
        return await super().create(
            caller,
            {
                **data,
                "type": "lead",
                "clientType": client_type,
                "isVip": client_type == "vip",
                "status": "active",
            },
        )

    async def update(self, caller: Caller, document_id: str, data: dict[str, Any]) -> StoredDocument:
        fields = dict(data)
        if "clientType" in fields:
            fields["isVip"] = fields["clientType"] == "vip"
        return await super().update(caller, document_id, fields)

    async def list_clients(
        self, company_id: str, search: str | None = None, status_filter: str = "all"
    ) -> list[StoredDocument]:
        """Clients matching search (name, email, phone) and the list filter."""
        if status_filter not in CLIENT_FILTERS:
            raise ValidationException(
                f"filter must be one of {', '.join(CLIENT_FILTERS)}", field="filter"
            )
        clients = await self.list_documents(company_id, search)
        if status_filter == "vip":
            return [c for c in clients if c.get("isVip")]
        if status_filter in ("active", "inactive"):
            return [c for c in clients if c.get("status") == status_filter]
        return clients
