"""Finance API schemas."""

from pydantic import BaseModel, ConfigDict, Field


class FinanceRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    booking_id: str | None
    client_id: str | None
    client_name: str
    service_key: str | None
    service: str
    client_amount: float
    provider_cost: float | None
    profit: float
    status: str
    date: str
    description: str = ""
    created_by: str | None = None
    created_by_email: str | None = None


class LedgerEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    category: str
    amount: float
    date: str
    description: str = ""
    status: str = ""
    created_by: str | None = None
    created_by_email: str | None = None


class FinanceLedgerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    records: list[FinanceRecordResponse]
    category_payments: list[LedgerEntryResponse]
    expenses: list[LedgerEntryResponse]


class SyncResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    created: int
    updated: int
    pruned: int


class FinanceSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    client_revenue: float
    provider_costs: float
    gross_profit: float
    expenses: float
    net_profit: float
    pending_count: int
    record_count: int


class ServiceBreakdownResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    service: str
    revenue: float
    cost: float
    count: int
    profit: float
    margin: float


class FinanceReportResponse(BaseModel):
    summary: FinanceSummaryResponse
    breakdown: list[ServiceBreakdownResponse]


class MonthlySnapshotResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    month: str
    income: float
    payments: float
    revenue: float
    expenses: float
    profit: float


class ProviderCostUpdate(BaseModel):
    provider_cost: float


class LedgerEntryCreate(BaseModel):
    """Category payment or expense."""

    category: str = Field(..., min_length=1, max_length=200)
    amount: float = Field(..., gt=0)
    date: str | None = Field(default=None, description="YYYY-MM-DD; defaults to now")
    description: str = Field(default="", max_length=2000)
