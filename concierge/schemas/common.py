"""Shared schema types."""

from typing import Annotated, Any

from pydantic import BeforeValidator

from concierge.application.dtos.document import StoredDocument


def _document_to_dict(value: Any) -> Any:
    """Accept StoredDocument from DTOs; serialize as its field map with id."""
    if isinstance(value, StoredDocument):
        return value.as_dict()
    return value


# A stored document as returned to clients: raw fields plus "id".
DocumentDict = Annotated[dict[str, Any], BeforeValidator(_document_to_dict)]
