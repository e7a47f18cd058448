"""Firestore-backed finance repositories (financeRecords, categoryPayments, expenses)."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from concierge.application.dtos.document import StoredDocument
from concierge.infrastructure.firebase.collections import (
    COLLECTION_CATEGORY_PAYMENTS,
    COLLECTION_EXPENSES,
    COLLECTION_FINANCE_RECORDS,
)
from concierge.infrastructure.firebase.repositories._base import (
    FirestoreCompanyScopedRepository,
)
from concierge.shared.utils.generators import generate_cuid


class FirestoreFinanceRecordRepository(FirestoreCompanyScopedRepository):
    """One record per booking service: client amount, provider cost, profit."""

    collection_name = COLLECTION_FINANCE_RECORDS

    async def apply_sync(
        self,
        company_id: str,
        creates: Iterable[dict[str, Any]],
        updates: Iterable[tuple[str, dict[str, Any]]],
    ) -> int:
        """Write a sync plan in batched commits. Returns the number of writes."""
        batch = self._client.batch()
        for data in creates:
            batch.set(self._coll.document(generate_cuid()), {**data, "companyId": company_id})
        for record_id, fields in updates:
            batch.update(self._coll.document(record_id), fields)
        if not len(batch):
            return 0
        return await batch.commit()

    async def list_for_service_key(
        self, company_id: str, service_key: str
    ) -> list[StoredDocument]:
        return await self.list_for_company(company_id, serviceKey=service_key)


class FirestoreCategoryPaymentRepository(FirestoreCompanyScopedRepository):
    """Payments to providers booked against a catalog category."""

    collection_name = COLLECTION_CATEGORY_PAYMENTS


class FirestoreExpenseRepository(FirestoreCompanyScopedRepository):
    collection_name = COLLECTION_EXPENSES
