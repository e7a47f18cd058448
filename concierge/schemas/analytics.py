"""Analytics/dashboard API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from concierge.schemas.booking import DaysLeftResponse


class UpcomingCheckInItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    booking_id: str
    client_id: str
    client_name: str
    check_in: str
    days_left: DaysLeftResponse | None = None


class DashboardStatsResponse(BaseModel):
    """Headline numbers for the company dashboard."""

    model_config = ConfigDict(from_attributes=True)

    active_requests: int
    pending_bookings: int
    completed_bookings: int
    revenue: float
    outstanding: float
    client_count: int
    next_check_ins: list[UpcomingCheckInItem] = Field(default_factory=list)
