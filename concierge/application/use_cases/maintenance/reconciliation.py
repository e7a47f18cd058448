"""Maintenance sweeps over cross-references that go stale.

Offers whose client was deleted, villa photos whose storage objects moved or
vanished, and collaborator payouts left behind after their bookings were
removed. Sweeps are scoped to one company unless a caller explicitly asks
for the whole collection (offers and photos only).
"""

from __future__ import annotations

from typing import Any

from concierge.application.dtos.document import StoredDocument
from concierge.application.dtos.reconciliation import (
    FinanceWipeReport,
    OrphanedOffer,
    OrphanedOffersReport,
    PayoutCleanupReport,
    PhotoFixReport,
)
from concierge.application.interfaces.repositories import (
    IClientRepository,
    IDocumentRepository,
    IFinanceRecordRepository,
    IOfferRepository,
)
from concierge.application.interfaces.storage import IStorageService
from concierge.application.services.photo_paths import (
    build_storage_map,
    filename_from_path,
    photo_path,
    relocated_photo,
)
from concierge.domain.exceptions import BackendNotConfiguredException, ConciergeException
from concierge.shared.telemetry.logging import get_logger
from concierge.shared.utils.localization import contains_text

logger = get_logger(__name__)

COLLABORATOR_PAYOUT_KEY = "collaborator_payout"
_COLLABORATOR_WORDS = ("collaborator", "colaborator")
_RESET_PAYMENTS: dict[str, Any] = {"payments": [], "paidTotal": 0, "scheduledTotal": 0}


def is_collaborator_payout(category: Any) -> bool:
    """Category (plain or localized) names a collaborator payout, in English or Romanian."""
    return any(
        contains_text(category, word, language) for word in _COLLABORATOR_WORDS for language in ("en", "ro")
    )


class ReconciliationService:
    """Find and repair stale references left by deletes and storage moves."""

    def __init__(
        self,
        offer_repo: IOfferRepository,
        client_repo: IClientRepository,
        villa_repo: IDocumentRepository,
        finance_repo: IFinanceRecordRepository,
        category_payment_repo: IDocumentRepository,
        expense_repo: IDocumentRepository,
        collaborator_repo: IDocumentRepository,
        storage: IStorageService | None = None,
        photo_prefixes: list[str] | None = None,
    ) -> None:
        self.offer_repo = offer_repo
        self.client_repo = client_repo
        self.villa_repo = villa_repo
        self.finance_repo = finance_repo
        self.category_payment_repo = category_payment_repo
        self.expense_repo = expense_repo
        self.collaborator_repo = collaborator_repo
        self.storage = storage
        self.photo_prefixes = photo_prefixes or []

    # Offers

    async def find_orphaned_offers(
        self, company_id: str | None = None
    ) -> OrphanedOffersReport:
        """Offers without a client, or whose client no longer exists.

        With company_id None every offer is checked against every client.
        """
        if company_id is None:
            offers = await self.offer_repo.list_all()
            client_ids = {c.id for c in await self.client_repo.list_all()}
        else:
            offers = await self.offer_repo.list_for_company(company_id)
            client_ids = set((await self.client_repo.map_for_company(company_id)).keys())

        report = OrphanedOffersReport(total_offers=len(offers))
        for offer in offers:
            owner = offer.company_id or "unknown"
            counts = report.by_company.setdefault(owner, {"total": 0, "orphaned": 0})
            counts["total"] += 1
            client_id = offer.get("clientId")
            if not client_id or client_id not in client_ids:
                counts["orphaned"] += 1
                report.orphaned.append(
                    OrphanedOffer(
                        id=offer.id,
                        company_id=offer.company_id,
                        client_id=client_id,
                        client_name=offer.get("clientName") or "",
                        status=offer.get("status"),
                    )
                )
        return report

    async def prune_orphaned_offers(self, company_id: str | None = None) -> OrphanedOffersReport:
        report = await self.find_orphaned_offers(company_id)
        if report.orphaned:
            report.deleted = await self.offer_repo.delete_many(o.id for o in report.orphaned)
            logger.info(
                "Deleted orphaned offers",
                extra={"count": report.deleted, "company_id": company_id or "*"},
            )
        return report

    # Villa photos

    def _require_storage(self) -> IStorageService:
        if self.storage is None:
            raise BackendNotConfiguredException("storage")
        return self.storage

    async def _villas(self, company_id: str | None) -> list[StoredDocument]:
        if company_id is None:
            return await self.villa_repo.list_all()
        return await self.villa_repo.list_for_company(company_id)

    async def fix_photo_paths(self, company_id: str | None = None) -> PhotoFixReport:
        """Point villa photos at their current storage location.

        A photo whose object is missing is looked up by filename under the
        configured prefixes and relocated; if no object has that filename the
        photo is dropped. Nothing is written when the prefixes hold no files.
        """
        storage = self._require_storage()
        paths: list[str] = []
        for prefix in self.photo_prefixes:
            paths.extend(await storage.list_files(prefix))
        storage_map = build_storage_map(paths)
        report = PhotoFixReport(storage_files=len(storage_map))
        if not storage_map:
            logger.warning("No files found under photo prefixes", extra={"prefixes": self.photo_prefixes})
            return report

        for villa in await self._villas(company_id):
            photos = villa.get("photos")
            if not isinstance(photos, list) or not photos:
                continue
            report.villas_checked += 1
            fixed: list[Any] = []
            changed = False
            for photo in photos:
                report.photos_checked += 1
                current = photo_path(photo)
                filename = filename_from_path(current)
                if not current or not filename:
                    report.photos_removed += 1
                    changed = True
                    continue
                if await storage.exists(current):
                    fixed.append(photo)
                    continue
                moved_to = storage_map.get(filename)
                if moved_to and await storage.exists(moved_to):
                    fixed.append(relocated_photo(photo, storage.bucket, moved_to))
                    report.photos_fixed += 1
                else:
                    report.photos_removed += 1
                changed = True
            if changed:
                await self.villa_repo.update(villa.id, {"photos": fixed})
                report.villas_updated += 1
                report.updated_villa_ids.append(villa.id)
        logger.info(
            "Villa photo paths fixed",
            extra={"fixed": report.photos_fixed, "removed": report.photos_removed},
        )
        return report

    async def remove_broken_photos(self, company_id: str | None = None) -> PhotoFixReport:
        """Drop villa photos whose storage object does not exist.

        A lookup that fails for another reason keeps the photo.
        """
        storage = self._require_storage()
        report = PhotoFixReport()
        for villa in await self._villas(company_id):
            photos = villa.get("photos")
            if not isinstance(photos, list) or not photos:
                continue
            report.villas_checked += 1
            valid: list[Any] = []
            broken = 0
            for photo in photos:
                report.photos_checked += 1
                current = photo_path(photo)
                if not current:
                    broken += 1
                    continue
                try:
                    exists = await storage.exists(current)
                except ConciergeException as e:
                    logger.warning(
                        "Photo lookup failed, keeping photo",
                        extra={"villa_id": villa.id, "path": current, "error": e.message},
                    )
                    exists = True
                if exists:
                    valid.append(photo)
                else:
                    broken += 1
            if broken:
                await self.villa_repo.update(villa.id, {"photos": valid})
                report.photos_removed += broken
                report.villas_updated += 1
                report.updated_villa_ids.append(villa.id)
        return report

    # Collaborator payouts

    async def remove_duplicate_collaborator_payments(self, company_id: str) -> PayoutCleanupReport:
        """Delete category payments booked as collaborator payouts.

        Collaborator payouts are tracked as finance records; copies recorded
        as category payments would count the cost twice.
        """
        payments = await self.category_payment_repo.list_for_company(company_id)
        ids = [p.id for p in payments if is_collaborator_payout(p.get("category"))]
        report = PayoutCleanupReport(found=len(ids), record_ids=ids)
        if ids:
            report.deleted = await self.category_payment_repo.delete_many(ids)
            logger.info("Deleted duplicate collaborator payments", extra={"count": report.deleted})
        return report

    async def _reset_collaborators(self, collaborator_ids: set[str], company_id: str) -> int:
        reset = 0
        for collaborator_id in sorted(collaborator_ids):
            collaborator = await self.collaborator_repo.get_for_company(collaborator_id, company_id)
            if collaborator is not None and await self.collaborator_repo.update(
                collaborator_id, dict(_RESET_PAYMENTS)
            ):
                reset += 1
        return reset

    async def remove_orphaned_collaborator_payouts(self, company_id: str) -> PayoutCleanupReport:
        """Delete collaborator payout records and reset the collaborators they paid."""
        payouts = await self.finance_repo.list_for_service_key(company_id, COLLABORATOR_PAYOUT_KEY)
        ids = [p.id for p in payouts]
        report = PayoutCleanupReport(found=len(ids), record_ids=ids)
        if not ids:
            return report
        report.deleted = await self.finance_repo.delete_many(ids)
        collaborator_ids = {p.get("collaboratorId") for p in payouts if p.get("collaboratorId")}
        report.collaborators_reset = await self._reset_collaborators(collaborator_ids, company_id)
        logger.info(
            "Removed orphaned collaborator payouts",
            extra={"deleted": report.deleted, "collaborators_reset": report.collaborators_reset},
        )
        return report

    # Finance data

    async def finance_inventory(self) -> dict[str, dict[str, int]]:
        """Count finance records, category payments and expenses per company."""
        totals: dict[str, dict[str, int]] = {}
        for kind, repo in (
            ("finance", self.finance_repo),
            ("payments", self.category_payment_repo),
            ("expenses", self.expense_repo),
        ):
            for doc in await repo.list_all():
                row = totals.setdefault(
                    doc.company_id or "unknown", {"finance": 0, "payments": 0, "expenses": 0}
                )
                row[kind] += 1
        return totals

    async def reset_collaborator_payments(self, company_id: str) -> int:
        """Clear payment tracking and stats on every collaborator of the company."""
        reset = 0
        for collaborator in await self.collaborator_repo.list_for_company(company_id):
            if await self.collaborator_repo.update(
                collaborator.id, {**_RESET_PAYMENTS, "totalCommission": 0, "bookingCount": 0}
            ):
                reset += 1
        return reset

    async def wipe_finance(self, company_id: str) -> FinanceWipeReport:
        """Delete all finance data of a company and reset collaborators that had payments."""
        report = FinanceWipeReport()
        report.records_deleted = await self.finance_repo.delete_many(
            d.id for d in await self.finance_repo.list_for_company(company_id)
        )
        report.payments_deleted = await self.category_payment_repo.delete_many(
            d.id for d in await self.category_payment_repo.list_for_company(company_id)
        )
        report.expenses_deleted = await self.expense_repo.delete_many(
            d.id for d in await self.expense_repo.list_for_company(company_id)
        )
        for collaborator in await self.collaborator_repo.list_for_company(company_id):
            has_payments = (
                bool(collaborator.get("payments"))
                or (collaborator.get("paidTotal") or 0) > 0
                or (collaborator.get("scheduledTotal") or 0) > 0
            )
            if has_payments and await self.collaborator_repo.update(
                collaborator.id, {**_RESET_PAYMENTS, "totalCommission": 0, "bookingCount": 0}
            ):
                report.collaborators_reset += 1
        logger.warning(
            "Finance data wiped",
            extra={"company_id": company_id, "records": report.records_deleted},
        )
        return report
