"""Directory API schemas: clients, villas, boats, providers, collaborators, catalog."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from concierge.schemas.common import DocumentDict


class DocumentWriteRequest(BaseModel):
    """Free-form document body; fields are stored as given (HTML stripped)."""

    model_config = ConfigDict(extra="allow")

    def fields(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class ClientWriteRequest(DocumentWriteRequest):
    name: str | None = Field(default=None, max_length=200)
    email: str | None = Field(default=None, max_length=254)
    phone: str | None = Field(default=None, max_length=64)
    client_type: Literal["regular", "vip", "corporate"] | None = Field(
        default=None, alias="clientType"
    )
    status: Literal["active", "inactive"] | None = None

    def fields(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True, by_alias=True)


class CollaboratorWriteRequest(DocumentWriteRequest):
    name: str | None = Field(default=None, max_length=200)
    email: str | None = Field(default=None, max_length=254)
    phone: str | None = Field(default=None, max_length=64)
    commission_rate: float | None = Field(
        default=None, ge=0, le=100, description="Percent; stored as a fraction"
    )

    def fields(self) -> dict[str, Any]:
        data = self.model_dump(exclude_unset=True, exclude={"commission_rate"})
        if self.commission_rate is not None:
            data["commissionRatePercent"] = self.commission_rate
        return data


class DocumentListResponse(BaseModel):
    items: list[DocumentDict]
    total: int


class CollaboratorStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    collaborator: DocumentDict
    commission_rate_percent: float
    booking_count: int
    total_commission: float


class CommissionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    booking_id: str
    total_amount: float
    default_commission: float
    default_rate_percent: float
    custom_amount: float | None
    effective_amount: float
    effective_rate_percent: float
    difference: float
    is_custom: bool


class CommissionUpdateRequest(BaseModel):
    """Custom commission for one reservation; null resets to the collaborator's rate."""

    amount: float | None = Field(default=None, ge=0)


class CatalogResponse(BaseModel):
    items: list[dict[str, Any]]
    total: int
