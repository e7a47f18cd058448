"""Domain value objects for the Concierge application.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

import math
from dataclasses import dataclass

from concierge.domain.enums import DiscountType


@dataclass(frozen=True)
class Discount:
    """Percentage or fixed-amount reduction applied to a price.

    A missing or zero value means no discount. Any type other than
    'percentage' is treated as a fixed amount.
    """

    type: DiscountType | None
    value: float = 0.0

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Discount value must be >= 0")

    @classmethod
    def from_fields(cls, discount_type: str | None, discount_value: float | None) -> "Discount":
        """Build from the loosely-typed fields stored on offers and offer items.

        Stored offers are not validated, so a negative, non-finite or
        non-numeric value reads as no discount.
        """
        try:
            dtype = DiscountType(discount_type) if discount_type else None
        except ValueError:
            dtype = DiscountType.FIXED
        try:
            value = float(discount_value or 0)
        except (TypeError, ValueError):
            value = 0.0
        if not math.isfinite(value) or value < 0:
            value = 0.0
        return cls(type=dtype, value=value)

    def amount_off(self, base: float) -> float:
        """Return how much this discount removes from base (never negative)."""
        if not self.value:
            return 0.0
        if self.type == DiscountType.PERCENTAGE:
            return base * (self.value / 100)
        return self.value

    def apply(self, base: float) -> float:
        """Return base after discount, floored at zero."""
        return max(base - self.amount_off(base), 0.0)


@dataclass(frozen=True)
class CommissionRate:
    """Collaborator commission stored as a fraction (0.15 == 15%)."""

    fraction: float

    def __post_init__(self) -> None:
        if self.fraction < 0 or self.fraction > 1:
            raise ValueError("Commission rate must be between 0% and 100%")

    @classmethod
    def from_percent(cls, percent: float) -> "CommissionRate":
        return cls(fraction=percent / 100)

    @property
    def percent(self) -> float:
        return self.fraction * 100

    def commission_for(self, amount: float) -> float:
        return amount * self.fraction
