"""DTOs for the dashboard."""

from __future__ import annotations

from dataclasses import dataclass, field

from concierge.application.dtos.booking import DaysLeft


@dataclass(frozen=True)
class UpcomingCheckIn:
    booking_id: str
    client_id: str
    client_name: str
    check_in: str
    days_left: DaysLeft | None


@dataclass
class DashboardStats:
    """Headline numbers of a company.

    active_requests counts offers still waiting on the team or the client;
    pending_bookings counts reservations checking in today or later;
    completed_bookings those already checked out. revenue is what clients
    have paid, outstanding what they still owe.
    """

    active_requests: int
    pending_bookings: int
    completed_bookings: int
    revenue: float
    outstanding: float
    client_count: int
    next_check_ins: list[UpcomingCheckIn] = field(default_factory=list)
