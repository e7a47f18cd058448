"""Domain enumerations for the Concierge application.

Enums represent fixed sets of domain values (e.g. payment status). Stored
documents carry the string values; legacy spellings are normalized on read.
"""

from enum import Enum


class PaymentStatus(str, Enum):
    """Payment state of a booking or of a client's bookings taken together."""

    PAID = "paid"
    PARTIALLY_PAID = "partiallyPaid"
    NOT_PAID = "notPaid"

    @classmethod
    def from_amounts(cls, paid: float, total: float) -> "PaymentStatus":
        """Derive status from amounts: paid only when a positive total is covered."""
        if paid >= total and total > 0:
            return cls.PAID
        if paid > 0:
            return cls.PARTIALLY_PAID
        return cls.NOT_PAID

    @classmethod
    def normalize(cls, raw: str | None) -> "PaymentStatus | None":
        """Map stored spellings (including legacy 'unpaid', 'partially_paid') to a member."""
        if not raw:
            return None
        return _LEGACY_PAYMENT_STATUS.get(raw.strip())

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid status values as strings."""
        return [status.value for status in cls]


_LEGACY_PAYMENT_STATUS = {
    "paid": PaymentStatus.PAID,
    "partiallyPaid": PaymentStatus.PARTIALLY_PAID,
    "partially_paid": PaymentStatus.PARTIALLY_PAID,
    "notPaid": PaymentStatus.NOT_PAID,
    "unpaid": PaymentStatus.NOT_PAID,
}


class TimeFilter(str, Enum):
    """Time bucket used to filter client groups by their bookings' dates."""

    ALL = "all"
    UPCOMING = "upcoming"
    ACTIVE = "active"
    PAST = "past"


class BookingSort(str, Enum):
    """Sort order for client groups."""

    DATE = "date"
    CLIENT = "client"
    LAST_ACTIVITY = "lastActivity"
    TOTAL_VALUE = "totalValue"


class ReservationStatus(str, Enum):
    """Reservation lifecycle values seen in stored documents."""

    CONFIRMED = "confirmed"
    PENDING = "pending"
    CANCELLED = "cancelled"
    DECLINED = "declined"

    @classmethod
    def excluded_from_finance(cls) -> set[str]:
        """Statuses whose bookings never produce revenue."""
        return {cls.CANCELLED.value, cls.DECLINED.value}


class OfferStatus(str, Enum):
    """Offer lifecycle."""

    DRAFT = "draft"
    SENT = "sent"
    VIEWED = "viewed"
    ACCEPTED = "accepted"
    BOOKED = "booked"
    REJECTED = "rejected"
    EXPIRED = "expired"

    @classmethod
    def pending(cls) -> set[str]:
        """Statuses that still need action from the team or the client."""
        return {cls.DRAFT.value, cls.SENT.value, cls.VIEWED.value}


class ActionPriority(str, Enum):
    """How urgently an offer needs attention."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NONE = "none"

    @property
    def rank(self) -> int:
        return {"high": 3, "medium": 2, "low": 1, "none": 0}[self.value]


class DiscountType(str, Enum):
    """Discount applied to an offer item or to the whole offer."""

    PERCENTAGE = "percentage"
    FIXED = "fixed"


class FinanceRecordStatus(str, Enum):
    """Whether the provider cost of a finance record has been confirmed."""

    PENDING = "pending"
    SETTLED = "settled"


class ServiceCategory(str, Enum):
    """Catalog categories. Some have a dedicated collection besides 'services'."""

    VILLAS = "villas"
    CARS = "cars"
    BOATS = "boats"
    CHEFS = "chefs"
    SECURITY = "security"
    RESTAURANTS = "restaurants"
    TOURS = "tours"
    MASSAGES = "massages"
    SHOPPING = "shopping"
    CUSTOM = "custom"

    @classmethod
    def with_dedicated_collection(cls) -> set[str]:
        """Categories whose items also live in a collection named after the category."""
        return {cls.VILLAS.value, cls.CARS.value, cls.BOATS.value, cls.CHEFS.value, cls.SECURITY.value}

    @property
    def default_unit(self) -> str:
        """Billing unit for items read from the dedicated collection."""
        if self is ServiceCategory.VILLAS:
            return "nightly"
        if self in (ServiceCategory.CARS, ServiceCategory.BOATS):
            return "daily"
        return "service"
