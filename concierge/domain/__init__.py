"""Domain layer: enums, value objects, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from concierge.domain.enums import (
    ActionPriority,
    BookingSort,
    DiscountType,
    FinanceRecordStatus,
    OfferStatus,
    PaymentStatus,
    ReservationStatus,
    ServiceCategory,
    TimeFilter,
)
from concierge.domain.exceptions import (
    AuthorizationException,
    CompanyNotFoundException,
    ConciergeException,
    ResourceNotFoundException,
    ValidationException,
)
from concierge.domain.value_objects import CommissionRate, Discount

__all__ = [
    # Enums
    "ActionPriority",
    "BookingSort",
    "DiscountType",
    "FinanceRecordStatus",
    "OfferStatus",
    "PaymentStatus",
    "ReservationStatus",
    "ServiceCategory",
    "TimeFilter",
    # Exceptions
    "AuthorizationException",
    "CompanyNotFoundException",
    "ConciergeException",
    "ResourceNotFoundException",
    "ValidationException",
    # Value objects
    "CommissionRate",
    "Discount",
]
