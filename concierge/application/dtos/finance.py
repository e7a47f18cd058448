"""DTOs for finance records, summaries and exports."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class FinanceRecordView:
    """A finance record read back with legacy fields resolved.

    date is a 'YYYY-MM-DD' string ('' when unknown); provider_cost None means
    the provider has not been paid or confirmed yet.
    """

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


@dataclass(frozen=True)
class LedgerEntry:
    """A category payment or an expense (amount out, dated, categorized)."""

    id: str
    category: str
    amount: float
    date: str
    description: str = ""
    status: str = ""
    created_by: str | None = None
    created_by_email: str | None = None


@dataclass
class SyncPlan:
    """Finance records to create and (record_id, fields) updates to apply."""

    creates: list[dict[str, Any]] = field(default_factory=list)
    updates: list[tuple[str, dict[str, Any]]] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.creates and not self.updates


@dataclass(frozen=True)
class ServiceBreakdownRow:
    service: str
    revenue: float
    cost: float
    count: int
    profit: float
    margin: float


@dataclass(frozen=True)
class MonthlySnapshot:
    month: str
    income: float
    payments: float
    revenue: float
    expenses: float
    profit: float


@dataclass(frozen=True)
class FinanceSummary:
    """Totals over the filtered records.

    provider_costs includes every category payment (they are not date
    filtered); net_profit subtracts the filtered expenses.
    """

    client_revenue: float
    provider_costs: float
    gross_profit: float
    expenses: float
    net_profit: float
    pending_count: int
    record_count: int


@dataclass(frozen=True)
class ExportRow:
    date: str
    type: str
    category: str
    description: str
    amount_in: float
    amount_out: float
    status: str
    source: str


@dataclass(frozen=True)
class FinanceFilters:
    service: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    client: str | None = None


@dataclass(frozen=True)
class FinanceLedger:
    """What the caller may see of a company's finance data after orphan pruning."""

    records: list[FinanceRecordView]
    category_payments: list[LedgerEntry]
    expenses: list[LedgerEntry]


@dataclass(frozen=True)
class SyncResult:
    created: int
    updated: int
    pruned: int
