"""Application interfaces (ports): repository and storage protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from concierge.infrastructure or concierge.api.
"""

from concierge.application.interfaces.repositories import (
    ICatalogRepository,
    IClientRepository,
    ICompanyRepository,
    IDocumentRepository,
    IFinanceRecordRepository,
    IOfferRepository,
    IReservationRepository,
)
from concierge.application.interfaces.storage import IStorageService

__all__ = [
    "ICatalogRepository",
    "IClientRepository",
    "ICompanyRepository",
    "IDocumentRepository",
    "IFinanceRecordRepository",
    "IOfferRepository",
    "IReservationRepository",
    "IStorageService",
]
