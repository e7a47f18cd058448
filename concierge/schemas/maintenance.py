"""Maintenance API schemas (sweep reports)."""

from pydantic import BaseModel, ConfigDict, Field


class OrphanedOfferResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    company_id: str | None
    client_id: str | None
    client_name: str
    status: str | None


class OrphanedOffersReportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_offers: int
    orphaned: list[OrphanedOfferResponse]
    by_company: dict[str, dict[str, int]] = Field(default_factory=dict)
    deleted: int = 0


class PhotoFixReportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    villas_checked: int
    photos_checked: int
    photos_fixed: int
    photos_removed: int
    villas_updated: int
    storage_files: int
    updated_villa_ids: list[str]


class PayoutCleanupReportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    found: int
    deleted: int
    collaborators_reset: int
    record_ids: list[str]


class FinanceWipeReportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    records_deleted: int
    payments_deleted: int
    expenses_deleted: int
    collaborators_reset: int


class CollaboratorResetResponse(BaseModel):
    collaborators_reset: int
