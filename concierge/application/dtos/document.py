"""Stored document read-model shared by every company-scoped repository.

Business documents (reservations, offers, villas, finance records) are
schemaless: the web client has written several generations of field names
over time. Repositories hand back the raw field map with its id and leave
field resolution to the application services.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class StoredDocument:
    """A document id plus its decoded field map."""

    id: str
    data: dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    @property
    def company_id(self) -> str | None:
        return self.data.get("companyId")

    def as_dict(self) -> dict[str, Any]:
        """Field map with the document id merged in (id wins over a stored 'id' field)."""
        return {**self.data, "id": self.id}
