"""Firestore-backed repository implementations (REST or in-memory client)."""

from concierge.infrastructure.firebase.repositories._base import (
    FirestoreCompanyScopedRepository,
)
from concierge.infrastructure.firebase.repositories.catalog_repo_firestore import (
    FirestoreCatalogRepository,
    FirestoreServiceRepository,
)
from concierge.infrastructure.firebase.repositories.client_repo_firestore import (
    FirestoreClientRepository,
)
from concierge.infrastructure.firebase.repositories.collaborator_repo_firestore import (
    FirestoreCollaboratorRepository,
)
from concierge.infrastructure.firebase.repositories.company_repo_firestore import (
    FirestoreCompanyRepository,
)
from concierge.infrastructure.firebase.repositories.finance_repo_firestore import (
    FirestoreCategoryPaymentRepository,
    FirestoreExpenseRepository,
    FirestoreFinanceRecordRepository,
)
from concierge.infrastructure.firebase.repositories.offer_repo_firestore import (
    FirestoreOfferRepository,
)
from concierge.infrastructure.firebase.repositories.property_repo_firestore import (
    FirestoreBoatRepository,
    FirestoreVillaRepository,
)
from concierge.infrastructure.firebase.repositories.provider_repo_firestore import (
    FirestoreCarRepository,
    FirestoreChefRepository,
    FirestoreSecurityRepository,
)
from concierge.infrastructure.firebase.repositories.reservation_repo_firestore import (
    FirestoreReservationRepository,
)

__all__ = [
    "FirestoreBoatRepository",
    "FirestoreCarRepository",
    "FirestoreCatalogRepository",
    "FirestoreCategoryPaymentRepository",
    "FirestoreChefRepository",
    "FirestoreClientRepository",
    "FirestoreCollaboratorRepository",
    "FirestoreCompanyRepository",
    "FirestoreCompanyScopedRepository",
    "FirestoreExpenseRepository",
    "FirestoreFinanceRecordRepository",
    "FirestoreOfferRepository",
    "FirestoreReservationRepository",
    "FirestoreSecurityRepository",
    "FirestoreServiceRepository",
    "FirestoreVillaRepository",
]
