"""Firestore-backed repositories for bookable providers (cars, chefs, security staff)."""

from __future__ import annotations

from concierge.infrastructure.firebase.collections import (
    COLLECTION_CARS,
    COLLECTION_CHEFS,
    COLLECTION_SECURITY,
)
from concierge.infrastructure.firebase.repositories._base import (
    FirestoreCompanyScopedRepository,
)


class FirestoreCarRepository(FirestoreCompanyScopedRepository):
    collection_name = COLLECTION_CARS


class FirestoreChefRepository(FirestoreCompanyScopedRepository):
    """Chefs; reservations reference them through chefId."""

    collection_name = COLLECTION_CHEFS


class FirestoreSecurityRepository(FirestoreCompanyScopedRepository):
    """Security staff; reservations reference them through securityId."""

    collection_name = COLLECTION_SECURITY
