"""Analytics use case: dashboard stats over offers, bookings and clients."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from concierge.application.dtos.analytics import DashboardStats, UpcomingCheckIn
from concierge.application.services.booking_aggregator import (
    days_left,
    group_bookings_by_client,
)
from concierge.application.services.offer_pricing import offer_stats
from concierge.domain.enums import ReservationStatus
from concierge.shared.utils.datetime import iso_day, parse_day, today_utc

if TYPE_CHECKING:
    from concierge.application.interfaces.repositories import (
        IClientRepository,
        IOfferRepository,
        IReservationRepository,
    )

NEXT_CHECK_INS_LIMIT = 5


class GetDashboardStatsUseCase:
    """Get aggregate stats and the next check-ins for a company dashboard."""

    def __init__(
        self,
        reservation_repo: "IReservationRepository",
        client_repo: "IClientRepository",
        offer_repo: "IOfferRepository",
    ) -> None:
        self.reservation_repo = reservation_repo
        self.client_repo = client_repo
        self.offer_repo = offer_repo

    async def get_dashboard_stats(
        self, company_id: str, today: date | None = None
    ) -> DashboardStats:
        """Return counts and totals; cancelled and declined reservations are left out."""
        day = today or today_utc()
        excluded = ReservationStatus.excluded_from_finance()
        bookings = [
            b
            for b in await self.reservation_repo.list_for_company(company_id)
            if b.get("status") not in excluded
        ]
        clients = await self.client_repo.map_for_company(company_id)
        groups = group_bookings_by_client(bookings, clients, company_id)
        offers = await self.offer_repo.list_for_company(company_id)

        pending = completed = 0
        upcoming: list[UpcomingCheckIn] = []
        for group in groups.values():
            for booking in group.bookings:
                check_in = parse_day(booking.get("checkIn"))
                check_out = parse_day(booking.get("checkOut"))
                if check_in and check_in >= day:
                    pending += 1
                    upcoming.append(
                        UpcomingCheckIn(
                            booking_id=booking.id,
                            client_id=group.client_id,
                            client_name=group.client_name,
                            check_in=iso_day(check_in),
                            days_left=days_left(check_in, day),
                        )
                    )
                elif check_out and check_out < day:
                    completed += 1
        upcoming.sort(key=lambda u: u.check_in)

        return DashboardStats(
            active_requests=offer_stats(offers).pending,
            pending_bookings=pending,
            completed_bookings=completed,
            revenue=sum(g.paid_amount for g in groups.values()),
            outstanding=sum(g.due_amount for g in groups.values()),
            client_count=len(clients),
            next_check_ins=upcoming[:NEXT_CHECK_INS_LIMIT],
        )
