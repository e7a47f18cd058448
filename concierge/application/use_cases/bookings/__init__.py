"""Booking use cases."""

from concierge.application.use_cases.bookings.booking_operations import BookingService
from concierge.application.use_cases.bookings.reservation_operations import (
    ReservationService,
)

__all__ = ["BookingService", "ReservationService"]
