"""Tests for domain enums, value objects and exceptions."""

import pytest

from concierge.domain.enums import (
    ActionPriority,
    DiscountType,
    OfferStatus,
    PaymentStatus,
    ReservationStatus,
    ServiceCategory,
)
from concierge.domain.exceptions import (
    AuthorizationException,
    BackendNotConfiguredException,
    CompanyNotFoundException,
    ConciergeException,
    OfferAlreadyBookedException,
    ResourceNotFoundException,
    ValidationException,
)
from concierge.domain.value_objects import CommissionRate, Discount


class TestPaymentStatus:
    """Derived and stored payment statuses."""

    def test_from_amounts(self) -> None:
        assert PaymentStatus.from_amounts(100, 100) == PaymentStatus.PAID
        assert PaymentStatus.from_amounts(150, 100) == PaymentStatus.PAID
        assert PaymentStatus.from_amounts(10, 100) == PaymentStatus.PARTIALLY_PAID
        assert PaymentStatus.from_amounts(0, 100) == PaymentStatus.NOT_PAID
        assert PaymentStatus.from_amounts(0, 0) == PaymentStatus.NOT_PAID

    def test_legacy_spellings(self) -> None:
        assert PaymentStatus.normalize("unpaid") == PaymentStatus.NOT_PAID
        assert PaymentStatus.normalize("partially_paid") == PaymentStatus.PARTIALLY_PAID
        assert PaymentStatus.normalize("") is None
        assert PaymentStatus.normalize("refunded") is None


class TestStatusSets:
    def test_offer_pending_statuses(self) -> None:
        assert OfferStatus.pending() == {"draft", "sent", "viewed"}

    def test_finance_excluded_reservations(self) -> None:
        assert ReservationStatus.excluded_from_finance() == {"cancelled", "declined"}

    def test_priority_rank_order(self) -> None:
        ranks = [p.rank for p in (ActionPriority.HIGH, ActionPriority.MEDIUM, ActionPriority.LOW, ActionPriority.NONE)]
        assert ranks == sorted(ranks, reverse=True)

    def test_category_units(self) -> None:
        assert ServiceCategory.VILLAS.default_unit == "nightly"
        assert ServiceCategory.BOATS.default_unit == "daily"
        assert ServiceCategory.CHEFS.default_unit == "service"
        assert "chefs" in ServiceCategory.with_dedicated_collection()
        assert "tours" not in ServiceCategory.with_dedicated_collection()


class TestDiscount:
    """Discount: percentage or fixed, never below zero."""

    def test_percentage(self) -> None:
        assert Discount(DiscountType.PERCENTAGE, 25).apply(200) == 150.0

    def test_fixed(self) -> None:
        assert Discount(DiscountType.FIXED, 30).apply(200) == 170.0

    def test_unknown_type_is_fixed(self) -> None:
        assert Discount.from_fields("amount", 5).type == DiscountType.FIXED

    def test_no_value_no_discount(self) -> None:
        assert Discount.from_fields("percentage", None).apply(80) == 80.0

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValueError, match=">= 0"):
            Discount(DiscountType.FIXED, -1)

    def test_stored_fields_never_raise(self) -> None:
        assert Discount.from_fields("fixed", -5).value == 0.0
        assert Discount.from_fields("fixed", float("inf")).value == 0.0
        assert Discount.from_fields("fixed", "abc").value == 0.0


class TestCommissionRate:
    """CommissionRate: a fraction between 0 and 1."""

    def test_bounds(self) -> None:
        CommissionRate(0)
        CommissionRate(1)
        with pytest.raises(ValueError, match="between"):
            CommissionRate(1.5)
        with pytest.raises(ValueError, match="between"):
            CommissionRate(-0.1)

    def test_commission(self) -> None:
        assert CommissionRate.from_percent(50).commission_for(300) == 150.0


class TestConciergeException:
    """Base exception and its JSON shape."""

    def test_defaults_error_code_to_class_name(self) -> None:
        exc = ConciergeException("boom")
        assert exc.error_code == "ConciergeException"
        assert exc.to_dict() == {"error": "ConciergeException", "message": "boom", "details": {}}

    def test_validation_field(self) -> None:
        exc = ValidationException("Invalid amount", field="amount")
        assert exc.error_code == "VALIDATION_ERROR"
        assert exc.details == {"field": "amount"}

    def test_authorization_message(self) -> None:
        exc = AuthorizationException("offer", "delete")
        assert exc.message == "Permission denied: delete on offer"
        assert exc.details == {"resource": "offer", "action": "delete"}
        assert AuthorizationException(message="Admin role required").message == "Admin role required"

    def test_not_found_codes(self) -> None:
        assert CompanyNotFoundException("c9").error_code == "COMPANY_NOT_FOUND"
        exc = ResourceNotFoundException("client", "cl1")
        assert exc.error_code == "RESOURCE_NOT_FOUND"
        assert exc.details["resource_id"] == "cl1"

    def test_conflict_and_unavailable(self) -> None:
        assert OfferAlreadyBookedException("o1").error_code == "OFFER_ALREADY_BOOKED"
        assert BackendNotConfiguredException("storage").details == {"backend": "storage"}
