"""Application use cases: one entry point per workflow."""

from concierge.application.use_cases.analytics import GetDashboardStatsUseCase
from concierge.application.use_cases.bookings import BookingService, ReservationService
from concierge.application.use_cases.companies import CompanyService
from concierge.application.use_cases.directory import (
    CatalogService,
    ClientService,
    CollaboratorService,
    DirectoryService,
)
from concierge.application.use_cases.finance import FinanceService
from concierge.application.use_cases.maintenance import ReconciliationService
from concierge.application.use_cases.offers import OfferService

__all__ = [
    "BookingService",
    "CatalogService",
    "ClientService",
    "CollaboratorService",
    "CompanyService",
    "DirectoryService",
    "FinanceService",
    "GetDashboardStatsUseCase",
    "OfferService",
    "ReconciliationService",
    "ReservationService",
]
