"""Pydantic request/response schemas for the API."""

from concierge.schemas.analytics import DashboardStatsResponse
from concierge.schemas.booking import (
    ClientGroupListResponse,
    ClientGroupResponse,
    PaymentCreateRequest,
    ReservationCreateRequest,
    ServiceCreateRequest,
)
from concierge.schemas.company import CompanyCreateRequest, CompanyResponse
from concierge.schemas.directory import DocumentListResponse, DocumentWriteRequest
from concierge.schemas.finance import FinanceLedgerResponse, FinanceReportResponse
from concierge.schemas.health import HealthResponse
from concierge.schemas.offer import OfferConvertRequest, OfferOverviewResponse, OfferWriteRequest

__all__ = [
    "ClientGroupListResponse",
    "ClientGroupResponse",
    "CompanyCreateRequest",
    "CompanyResponse",
    "DashboardStatsResponse",
    "DocumentListResponse",
    "DocumentWriteRequest",
    "FinanceLedgerResponse",
    "FinanceReportResponse",
    "HealthResponse",
    "OfferConvertRequest",
    "OfferOverviewResponse",
    "OfferWriteRequest",
    "PaymentCreateRequest",
    "ReservationCreateRequest",
    "ServiceCreateRequest",
]
