"""Unit tests for collaborator commissions, catalog pricing and villa photo paths."""

import pytest

from concierge.application.dtos.document import StoredDocument
from concierge.application.services.catalog import (
    booking_catalog_item,
    extract_image_url,
    offer_catalog_item,
    offer_item_price,
    sort_by_name,
)
from concierge.application.services.commission import (
    commission_breakdown,
    rate_of,
    total_commission,
)
from concierge.application.services.photo_paths import (
    build_storage_map,
    extract_path_from_url,
    photo_path,
    public_url,
    relocated_photo,
)
from concierge.domain.value_objects import CommissionRate


class TestCommission:
    """Rate resolution and custom commission amounts."""

    def test_rate_defaults(self) -> None:
        assert rate_of({}).percent == pytest.approx(15.0)
        assert rate_of({}, default_percent=10).fraction == 0.1

    def test_fraction_rate(self) -> None:
        assert rate_of({"commissionRate": 0.2}).percent == pytest.approx(20.0)

    def test_legacy_percent_rate(self) -> None:
        assert rate_of({"commissionRate": 12}).fraction == pytest.approx(0.12)

    def test_breakdown_default(self) -> None:
        booking = StoredDocument("b1", {"totalAmount": 2000})
        breakdown = commission_breakdown(booking, CommissionRate(0.1))
        assert breakdown.default_commission == pytest.approx(200.0)
        assert breakdown.effective_amount == pytest.approx(200.0)
        assert not breakdown.is_custom
        assert breakdown.difference == pytest.approx(0.0)

    def test_breakdown_custom(self) -> None:
        booking = StoredDocument("b1", {"totalAmount": 2000, "customCommissionAmount": 300})
        breakdown = commission_breakdown(booking, CommissionRate(0.1))
        assert breakdown.is_custom
        assert breakdown.effective_amount == 300.0
        assert breakdown.effective_rate_percent == pytest.approx(15.0)
        assert breakdown.difference == pytest.approx(100.0)

    def test_total_uses_effective_amounts(self) -> None:
        bookings = [
            StoredDocument("b1", {"totalAmount": 1000}),
            StoredDocument("b2", {"totalAmount": 1000, "customCommissionAmount": 0}),
        ]
        assert total_commission(bookings, CommissionRate(0.1)) == pytest.approx(100.0)


class TestCatalog:
    """Prices, units and images of catalog entries."""

    def test_villa_price_configuration(self) -> None:
        data = {"priceConfigurations": [{"price": 900, "type": "night"}], "price": 1}
        assert offer_item_price(data, "villas") == (900.0, "night")
        assert offer_item_price({"price": 700}, "villas") == (700.0, "day")

    def test_boat_rate(self) -> None:
        assert offer_item_price({"hourlyRate": 250}, "boats") == (250.0, "hour")

    def test_car_daily_pricing(self) -> None:
        assert offer_item_price({"pricing": {"daily": 120}}, "cars") == (120.0, "day")
        assert offer_item_price({"dailyRate": 90}, "cars") == (90.0, "day")

    def test_generic_service_unit(self) -> None:
        assert offer_item_price({"price": 60, "unit": "session"}, "massages") == (60.0, "session")

    def test_image_url_sources(self) -> None:
        assert extract_image_url({"imageUrl": "a.jpg"}) == "a.jpg"
        assert extract_image_url({"photos": [{"url": "b.jpg"}]}) == "b.jpg"
        assert extract_image_url({"images": ["", "c.jpg"]}) == "c.jpg"
        assert extract_image_url({}) == ""

    def test_offer_catalog_item(self) -> None:
        doc = StoredDocument("v1", {"name": "Villa Sol", "price": 500, "photos": ["p.jpg"]})
        item = offer_catalog_item(doc, "villas")
        assert item["id"] == "v1"
        assert item["category"] == "villas"
        assert item["imageUrl"] == "p.jpg"

    def test_booking_catalog_item(self) -> None:
        doc = StoredDocument("car1", {"name": {"en": "Cabrio"}, "price": "80", "brand": "Mini"})
        item = booking_catalog_item(doc, "cars")
        assert item["name"] == "Cabrio"
        assert item["price"] == 80.0
        assert item["unit"] == "daily"
        assert booking_catalog_item(StoredDocument("x", {}), "unknown")["unit"] == "service"

    def test_sort_by_name(self) -> None:
        items = [{"id": "b", "name": "beta"}, {"id": "a", "name": {"en": "Alpha"}}, {"id": "g", "name": "Gamma"}]
        assert [i["id"] for i in sort_by_name(items)] == ["a", "b", "g"]


class TestPhotoPaths:
    """Villa photo URLs and storage paths."""

    URL = (
        "https://firebasestorage.googleapis.com/v0/b/test-bucket/o/"
        "villas%2Fshared%2Fpool.jpg?alt=media&token=abc"
    )

    def test_extract_path(self) -> None:
        assert extract_path_from_url(self.URL) == "villas/shared/pool.jpg"
        assert extract_path_from_url("villas/pool.jpg") == "villas/pool.jpg"
        assert extract_path_from_url("https://example.com/pool.jpg") is None
        assert extract_path_from_url(None) is None

    def test_photo_path_from_map(self) -> None:
        assert photo_path({"url": self.URL}) == "villas/shared/pool.jpg"
        assert photo_path({"path": "company1/villas/a.jpg"}) == "company1/villas/a.jpg"
        assert photo_path(42) is None

    def test_public_url_encodes_path(self) -> None:
        assert public_url("test-bucket", "villas/a b.jpg") == (
            "https://firebasestorage.googleapis.com/v0/b/test-bucket/o/villas%2Fa%20b.jpg?alt=media"
        )

    def test_relocated_photo(self) -> None:
        moved = relocated_photo({"url": self.URL, "caption": "Pool"}, "test-bucket", "villas/pool.jpg")
        assert moved["path"] == "villas/pool.jpg"
        assert moved["caption"] == "Pool"
        assert relocated_photo(self.URL, "test-bucket", "villas/pool.jpg").endswith("villas%2Fpool.jpg?alt=media")

    def test_storage_map_keyed_by_filename(self) -> None:
        file_map = build_storage_map(["villas/shared/a.jpg", "company1/villas/b.jpg", "villas/"])
        assert file_map == {"a.jpg": "villas/shared/a.jpg", "b.jpg": "company1/villas/b.jpg"}
