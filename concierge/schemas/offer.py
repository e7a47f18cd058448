"""Offer API schemas."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from concierge.domain.enums import ActionPriority
from concierge.schemas.common import DocumentDict


class OfferItem(BaseModel):
    """Catalog entry placed on an offer; extra catalog fields are kept."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str | dict[str, str]
    category: str | None = None
    price: float = Field(..., ge=0)
    quantity: int = Field(default=1, ge=1)
    discount_type: Literal["percentage", "fixed"] | None = Field(default=None, alias="discountType")
    discount_value: float = Field(default=0, ge=0, alias="discountValue")


class OfferWriteRequest(BaseModel):
    """Request body for creating or replacing an offer's items."""

    client_id: str | None = Field(default=None, description="Required when creating")
    items: list[OfferItem] = Field(..., min_length=1)
    notes: str | None = Field(default=None, max_length=5000)
    discount_type: Literal["percentage", "fixed"] | None = None
    discount_value: float | None = Field(default=None, ge=0)

    def item_dicts(self) -> list[dict[str, Any]]:
        return [item.model_dump(by_alias=True, exclude_none=True) for item in self.items]


class OfferStatusUpdate(BaseModel):
    status: Literal["draft", "sent", "viewed", "accepted", "rejected", "expired"]


class ServiceOverride(BaseModel):
    """Per-item choices made while converting an offer."""

    included: bool = True
    amount_paid: float = Field(default=0, ge=0)
    start_date: str | None = None
    end_date: str | None = None
    payment_status: str | None = None

    def as_fields(self) -> dict[str, Any]:
        return {
            "included": self.included,
            "amountPaid": self.amount_paid,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "paymentStatus": self.payment_status,
        }


class OfferConvertRequest(BaseModel):
    """Dates default to today and a week later."""

    check_in: str | None = None
    check_out: str | None = None
    adults: int = Field(default=2, ge=0)
    children: int = Field(default=0, ge=0)
    notes: str = Field(default="", max_length=2000)
    # offer item index -> override
    services: dict[int, ServiceOverride] = Field(default_factory=dict)
    language: str = Field(default="en", max_length=5)


class OfferActionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    needed: bool
    message: str | None
    priority: str
    days_ago: int

    @field_validator("priority", mode="before")
    @classmethod
    def _priority_to_str(cls, v: ActionPriority | str) -> str:
        return v.value if isinstance(v, ActionPriority) else v


class OfferOverviewItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    offer: DocumentDict
    action: OfferActionResponse


class OfferStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total: int
    pending: int
    booked: int


class OfferOverviewResponse(BaseModel):
    stats: OfferStatsResponse
    items: list[OfferOverviewItemResponse]
