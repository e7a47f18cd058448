"""Dashboard API: headline numbers for the current company."""

from typing import Annotated

from fastapi import APIRouter, Depends

from concierge.api.v1.dependencies import get_company_id, get_dashboard_stats_use_case
from concierge.application.use_cases import GetDashboardStatsUseCase
from concierge.schemas.analytics import DashboardStatsResponse

router = APIRouter()


@router.get("", response_model=DashboardStatsResponse)
async def get_dashboard(
    company_id: Annotated[str, Depends(get_company_id)],
    use_case: Annotated[GetDashboardStatsUseCase, Depends(get_dashboard_stats_use_case)],
):
    """Pending offers, booking counts, revenue and the next check-ins."""
    stats = await use_case.get_dashboard_stats(company_id)
    return DashboardStatsResponse.model_validate(stats)
