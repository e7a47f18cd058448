"""Service catalog reads and provider booking stats."""

from __future__ import annotations

from typing import Any

from concierge.application.dtos.document import StoredDocument
from concierge.application.interfaces.repositories import (
    ICatalogRepository,
    IReservationRepository,
)
from concierge.application.services.catalog import (
    booking_catalog_item,
    offer_catalog_item,
    sort_by_name,
)
from concierge.domain.enums import ReservationStatus, ServiceCategory
from concierge.domain.exceptions import ValidationException
from concierge.shared.utils.numbers import to_float

# Reservation field that points at a provider of the category.
PROVIDER_REFERENCE_FIELDS = {
    ServiceCategory.CHEFS.value: "chefId",
    ServiceCategory.SECURITY.value: "securityId",
}


def _parse_category(category: str) -> ServiceCategory:
    try:
        return ServiceCategory(category)
    except ValueError as e:
        raise ValidationException(f"Unknown service category: {category}", field="category") from e


class CatalogService:
    """What can be added to a booking or an offer, per category."""

    def __init__(
        self,
        catalog_repo: ICatalogRepository,
        reservation_repo: IReservationRepository,
    ) -> None:
        self.catalog_repo = catalog_repo
        self.reservation_repo = reservation_repo

    async def booking_services(self, company_id: str, category: str) -> list[dict[str, Any]]:
        """Active generic services of the category plus items of its dedicated collection, by name.

        The custom category has no catalog.
        """
        parsed = _parse_category(category)
        if parsed is ServiceCategory.CUSTOM:
            return []
        items = [
            doc.as_dict()
            for doc in await self.catalog_repo.list_active_services(company_id, parsed.value)
        ]
        if parsed.value in ServiceCategory.with_dedicated_collection():
            items.extend(
                booking_catalog_item(doc, parsed.value)
                for doc in await self.catalog_repo.list_category_items(company_id, parsed.value)
            )
        return sort_by_name(items)

    async def offer_catalog(self, company_id: str) -> dict[str, list[dict[str, Any]]]:
        """Priced items per category for the offer builder."""
        catalog: dict[str, list[dict[str, Any]]] = {}
        for category in ServiceCategory:
            if category is ServiceCategory.CUSTOM:
                continue
            if category.value in ServiceCategory.with_dedicated_collection():
                docs = await self.catalog_repo.list_category_items(company_id, category.value)
            else:
                docs = await self.catalog_repo.list_active_services(company_id, category.value)
            catalog[category.value] = [offer_catalog_item(doc, category.value) for doc in docs]
        return catalog

    async def provider_stats(self, company_id: str, category: str) -> list[dict[str, Any]]:
        """Chefs or security staff with their confirmed booking count and revenue."""
        field = PROVIDER_REFERENCE_FIELDS.get(category)
        if field is None:
            raise ValidationException(
                "Provider stats are available for chefs and security", field="category"
            )
        rows = []
        providers: list[StoredDocument] = await self.catalog_repo.list_category_items(
            company_id, category
        )
        for provider in providers:
            bookings = await self.reservation_repo.list_for_company(
                company_id, **{field: provider.id, "status": ReservationStatus.CONFIRMED.value}
            )
            rows.append(
                {
                    **provider.as_dict(),
                    "bookingCount": len(bookings),
                    "totalRevenue": sum(to_float(b.get("totalAmount")) for b in bookings),
                }
            )
        return rows
