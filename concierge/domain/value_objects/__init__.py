"""Domain value objects."""

from concierge.domain.value_objects.core import CommissionRate, Discount

__all__ = ["CommissionRate", "Discount"]
