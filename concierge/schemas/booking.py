"""Booking API schemas: client groups, services, shopping, payments, reservations."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from concierge.domain.enums import PaymentStatus
from concierge.schemas.common import DocumentDict


class DaysLeftResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    days: int
    label: str


class ClientGroupResponse(BaseModel):
    """One client's bookings with the payment roll-up."""

    model_config = ConfigDict(from_attributes=True)

    client_id: str
    client_name: str
    client_details: dict[str, Any] | None = None
    bookings: list[DocumentDict] = Field(default_factory=list)
    total_value: float
    paid_amount: float
    due_amount: float
    payment_status: str
    last_activity: datetime | None = None
    payment_history: list[dict[str, Any]] = Field(default_factory=list)
    services: list[dict[str, Any]] = Field(default_factory=list)
    next_check_in: DaysLeftResponse | None = None

    @field_validator("payment_status", mode="before")
    @classmethod
    def _status_to_str(cls, v: PaymentStatus | str) -> str:
        return v.value if isinstance(v, PaymentStatus) else v


class ClientGroupListResponse(BaseModel):
    items: list[ClientGroupResponse]
    total: int


class BookingDeleteResponse(BaseModel):
    """Remaining group of the client (None once their last booking is gone)."""

    deleted_id: str
    group: ClientGroupResponse | None = None


class ServiceCreateRequest(BaseModel):
    """Service added to a client's latest booking; extra fields are stored as given."""

    model_config = ConfigDict(extra="allow")

    name: str | dict[str, str] = Field(...)
    type: str | None = Field(default=None, max_length=64)
    category: str | None = Field(default=None, max_length=64)
    price: float = Field(..., ge=0)
    quantity: int = Field(default=1, ge=1)
    unit: str | None = Field(default=None, max_length=32)
    date: str | None = None
    start_date: str | None = Field(default=None, alias="startDate")
    end_date: str | None = Field(default=None, alias="endDate")
    notes: str | None = Field(default=None, max_length=2000)
    status: str | None = Field(default=None, max_length=32)


class ShoppingCreateRequest(BaseModel):
    store: str = Field(..., min_length=1, max_length=200)
    items: str = Field(..., min_length=1, max_length=2000)
    price: float = Field(..., gt=0)
    date: str | None = None
    has_receipt: bool = False
    notes: str = Field(default="", max_length=2000)


class ServiceReference(BaseModel):
    """Identifies an embedded service: by id, else by name plus creation time or line values."""

    id: str | None = None
    name: str | dict[str, str] | None = None
    type: str | None = None
    price: float | None = None
    quantity: int | None = None
    created_at: datetime | None = Field(default=None, alias="createdAt")

    def as_ref(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class PaymentCreateRequest(BaseModel):
    amount: float = Field(..., gt=0)
    method: str = Field(default="cash", max_length=32)
    notes: str | None = Field(default=None, max_length=2000)
    receipt_number: str | None = Field(default=None, max_length=64)
    booking_id: str | None = Field(
        default=None,
        description="Booking to credit; defaults to the earliest check-in with a balance due",
    )


class ReservationCreateRequest(BaseModel):
    client_id: str = Field(..., min_length=1)
    check_in: str = Field(..., min_length=1)
    check_out: str = Field(..., min_length=1)
    accommodation_type: str = Field(..., min_length=1, max_length=200)
    adults: int = Field(default=1, ge=0)
    children: int = Field(default=0, ge=0)
    transport: str = Field(default="", max_length=500)
    notes: str = Field(default="", max_length=2000)
