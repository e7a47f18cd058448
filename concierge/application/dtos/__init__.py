"""Application DTOs (no storage dependency)."""

from concierge.application.dtos.analytics import DashboardStats, UpcomingCheckIn
from concierge.application.dtos.booking import ClientGroup, DaysLeft
from concierge.application.dtos.caller import Caller
from concierge.application.dtos.collaborator import CollaboratorStats, CommissionBreakdown
from concierge.application.dtos.company import CompanyResult
from concierge.application.dtos.document import StoredDocument
from concierge.application.dtos.finance import (
    FinanceFilters,
    FinanceLedger,
    FinanceRecordView,
    FinanceSummary,
    LedgerEntry,
    MonthlySnapshot,
    ServiceBreakdownRow,
    SyncResult,
)
from concierge.application.dtos.offer import OfferAction, OfferOverviewItem, OfferStats
from concierge.application.dtos.reconciliation import (
    FinanceWipeReport,
    OrphanedOffer,
    OrphanedOffersReport,
    PayoutCleanupReport,
    PhotoFixReport,
)

__all__ = [
    "Caller",
    "ClientGroup",
    "CollaboratorStats",
    "CommissionBreakdown",
    "CompanyResult",
    "DashboardStats",
    "DaysLeft",
    "FinanceFilters",
    "FinanceLedger",
    "FinanceRecordView",
    "FinanceSummary",
    "FinanceWipeReport",
    "LedgerEntry",
    "MonthlySnapshot",
    "OfferAction",
    "OfferOverviewItem",
    "OfferStats",
    "OrphanedOffer",
    "OrphanedOffersReport",
    "PayoutCleanupReport",
    "PhotoFixReport",
    "ServiceBreakdownRow",
    "StoredDocument",
    "SyncResult",
    "UpcomingCheckIn",
]
