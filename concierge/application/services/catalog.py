"""Catalog items as offered to clients and added to bookings.

Items come from the generic 'services' collection and from per-category
collections (villas, boats, cars, chefs, security) that each store prices
under their own field names.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from concierge.application.dtos.document import StoredDocument
from concierge.domain.enums import ServiceCategory
from concierge.shared.utils.localization import localized_text
from concierge.shared.utils.numbers import to_float

_IMAGE_FIELDS = ("imageUrl", "image", "thumbnail")
_IMAGE_LISTS = ("photos", "images")


def _category(category: str) -> ServiceCategory | None:
    try:
        return ServiceCategory(category)
    except ValueError:
        return None


def extract_image_url(data: Mapping[str, Any]) -> str:
    """First usable image: imageUrl, image, thumbnail, then photos / images entries."""
    for key in _IMAGE_FIELDS:
        value = data.get(key)
        if isinstance(value, str) and value.strip():
            return value
    for key in _IMAGE_LISTS:
        entries = data.get(key)
        if not isinstance(entries, list):
            continue
        for entry in entries:
            if isinstance(entry, dict) and isinstance(entry.get("url"), str) and entry["url"]:
                return entry["url"]
        for entry in entries:
            if isinstance(entry, str) and entry.strip():
                return entry
    return ""


def _first_present(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return 0


def offer_item_price(data: Mapping[str, Any], category: str) -> tuple[float, str]:
    """(price, unit) of a catalog entry when it is added to an offer."""
    if category == ServiceCategory.VILLAS.value:
        configs = data.get("priceConfigurations")
        if isinstance(configs, list) and configs and isinstance(configs[0], dict):
            return to_float(configs[0].get("price")), configs[0].get("type") or "day"
        return to_float(data.get("price")), "day"
    if category == ServiceCategory.BOATS.value:
        return to_float(_first_present(data, "rate", "price", "hourlyRate")), "hour"
    if category == ServiceCategory.CARS.value:
        pricing = data.get("pricing")
        if isinstance(pricing, dict) and pricing.get("daily"):
            return to_float(pricing["daily"]), "day"
        return to_float(_first_present(data, "rate", "price", "dailyRate")), "day"
    if category == ServiceCategory.SECURITY.value:
        return to_float(_first_present(data, "rate", "price")), data.get("unit") or "hour"
    return (
        to_float(_first_present(data, "rate", "price", "dailyRate", "hourlyRate")),
        data.get("unit") or "day",
    )


def offer_catalog_item(doc: StoredDocument, category: str) -> dict[str, Any]:
    """Catalog entry with price, unit and image resolved for the offer builder."""
    price, unit = offer_item_price(doc.data, category)
    return {
        **doc.data,
        "id": doc.id,
        "price": price,
        "unit": unit,
        "category": category,
        "imageUrl": extract_image_url(doc.data),
    }


def booking_catalog_item(doc: StoredDocument, category: str) -> dict[str, Any]:
    """Item of a dedicated collection flattened to the booking service shape."""
    known = _category(category)
    return {
        "id": doc.id,
        "name": localized_text(doc.get("name"), "en") or doc.id,
        "description": localized_text(doc.get("description"), "en"),
        "category": category,
        "price": to_float(doc.get("price")),
        "unit": known.default_unit if known else "service",
        "brand": doc.get("brand") or "",
        "model": doc.get("model") or "",
    }


def sort_by_name(items: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    return sorted(items, key=lambda item: localized_text(item.get("name"), "en").casefold())
